import json

import pytest

from conftest import failing_llm, fake_llm
from querycraft.core.errors import LLMServiceError
from querycraft.services.assistant import explain_sql, optimize_sql

SQL = "SELECT * FROM sales_data"


class TestExplain:

    def test_returns_model_text(self):
        assert explain_sql(SQL, fake_llm("  Lists every sale.  ")) == "Lists every sale."

    def test_empty_reply(self):
        assert explain_sql(SQL, fake_llm("")) == "Unable to explain query"

    def test_model_failure_is_reported(self):
        with pytest.raises(LLMServiceError, match="Failed to explain SQL query: model quota exceeded"):
            explain_sql(SQL, failing_llm())

    def test_no_model_configured(self):
        with pytest.raises(LLMServiceError, match="Failed to explain SQL query"):
            explain_sql(SQL, None)


class TestOptimize:

    def test_reads_model_json(self):
        reply = json.dumps({
            "optimizedQuery": "SELECT id, region FROM sales_data",
            "improvements": ["Select only needed columns"],
        })
        result = optimize_sql(SQL, fake_llm(reply))
        assert result.optimized_query == "SELECT id, region FROM sales_data"
        assert result.improvements == ["Select only needed columns"]

    def test_defaults_to_original_query(self):
        result = optimize_sql(SQL, fake_llm("{}"))
        assert result.optimized_query == SQL
        assert result.improvements == []

    def test_malformed_json_has_no_fallback(self):
        with pytest.raises(LLMServiceError, match="Failed to optimize SQL query"):
            optimize_sql(SQL, fake_llm("definitely not json"))

    def test_model_failure_is_reported(self):
        with pytest.raises(LLMServiceError):
            optimize_sql(SQL, failing_llm())
