"""Tests for query execution against the seeded sample dataset."""

import pytest

from querycraft.db.sample import SAMPLE_PRODUCTS, SAMPLE_SALES


class TestSuccessfulExecution:

    def test_row_count_matches_data(self, executor):
        result = executor.execute("SELECT * FROM sales_data")
        assert result.success
        assert result.row_count == len(result.data) == len(SAMPLE_SALES)
        assert result.error is None

    def test_columns_come_from_first_row(self, executor):
        result = executor.execute("SELECT region, customer_name AS customer FROM sales_data")
        assert result.columns == list(result.data[0].keys()) == ["region", "customer"]

    def test_empty_result_is_not_an_error(self, executor):
        result = executor.execute("SELECT * FROM sales_data WHERE region = 'Antarctica'")
        assert result.success
        assert result.row_count == 0
        assert result.data == []
        assert result.columns == []

    def test_execution_time_is_measured(self, executor):
        result = executor.execute("SELECT COUNT(*) AS n FROM products")
        assert result.execution_time is not None
        assert result.execution_time >= 0
        assert result.data == [{"n": len(SAMPLE_PRODUCTS)}]

    def test_non_row_statement_returns_empty_set(self, executor):
        result = executor.execute("UPDATE products SET price = price + 1 WHERE name = 'Widget A'")
        assert result.success
        assert result.data == []
        assert result.columns == []
        assert result.row_count == 0

        price = executor.execute("SELECT price FROM products WHERE name = 'Widget A'").data[0]["price"]
        assert price == pytest.approx(100.99)


class TestFailedExecution:

    @pytest.mark.parametrize(
        "sql",
        [
            "SELEC * FROM sales_data",
            "SELECT * FROM no_such_table",
            "SELECT missing_column FROM sales_data",
        ],
    )
    def test_errors_are_returned_not_raised(self, executor, sql):
        result = executor.execute(sql)
        assert result.success is False
        assert result.data is None
        assert result.columns is None
        assert result.error

    def test_failed_result_serializes_without_data(self, executor):
        payload = executor.execute("SELECT * FROM nowhere").model_dump(by_alias=True, exclude_none=True)
        assert set(payload) == {"success", "error"}
