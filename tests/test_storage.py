"""Tests run against both storage backends."""

from datetime import datetime, timedelta, timezone

import pytest

from conftest import FlakyMemoryStorage
from querycraft.db.models import ChartType, QueryRecord, Visualization


def make_query(text="sales by region", saved=False, minutes_ago=0):
    return QueryRecord(
        natural_language=text,
        sql_query="SELECT region FROM sales_data",
        is_saved=saved,
        created_at=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
    )


def make_viz(query_id, **overrides):
    fields = dict(
        query_id=query_id,
        chart_type=ChartType.BAR,
        x_axis="region",
        y_axis="total_sales",
        title="Sales by region",
    )
    fields.update(overrides)
    return Visualization(**fields)


class TestQueries:

    def test_create_and_get(self, storage):
        created = storage.create_query(make_query())
        fetched = storage.get_query(created.id)
        assert fetched is not None
        assert fetched.natural_language == "sales by region"
        assert fetched.is_saved is False
        assert fetched.results is None

    def test_get_missing_returns_none(self, storage):
        assert storage.get_query("does-not-exist") is None

    def test_list_is_newest_first(self, storage):
        old = storage.create_query(make_query("old", minutes_ago=10))
        new = storage.create_query(make_query("new", minutes_ago=1))
        assert [q.id for q in storage.list_queries()] == [new.id, old.id]

    def test_update_attaches_results_and_flags(self, storage):
        created = storage.create_query(make_query())
        updated = storage.update_query(
            created.id, {"results": [{"region": "Europe"}], "is_saved": True, "title": "Regions"}
        )
        assert updated.results == [{"region": "Europe"}]
        assert updated.is_saved is True
        assert updated.title == "Regions"
        assert storage.get_query(created.id).title == "Regions"

    def test_update_ignores_identity_fields(self, storage):
        created = storage.create_query(make_query())
        updated = storage.update_query(created.id, {"id": "hijacked", "title": "t"})
        assert updated.id == created.id

    def test_update_missing_returns_none(self, storage):
        assert storage.update_query("nope", {"title": "x"}) is None

    def test_saved_filter(self, storage):
        storage.create_query(make_query("a"))
        saved = storage.create_query(make_query("b", saved=True))
        assert [q.id for q in storage.list_saved_queries()] == [saved.id]

    def test_delete_unsaved_and_saved(self, storage):
        unsaved = storage.create_query(make_query("a"))
        saved = storage.create_query(make_query("b", saved=True))

        assert storage.delete_query(unsaved.id) is True
        assert storage.delete_query(saved.id) is True
        assert storage.list_queries() == []
        assert storage.delete_query(saved.id) is False

    def test_clear_history_keeps_saved(self, storage):
        storage.create_query(make_query("a"))
        storage.create_query(make_query("b"))
        saved = storage.create_query(make_query("c", saved=True))

        assert storage.clear_history() == 2
        assert [q.id for q in storage.list_queries()] == [saved.id]

    def test_clear_history_stops_at_first_failed_delete(self):
        """Deletes already made stay made; the failure reaches the caller."""
        storage = FlakyMemoryStorage(fail_on_call=2)
        older = storage.create_query(make_query("older", minutes_ago=5))
        storage.create_query(make_query("newer", minutes_ago=1))
        saved = storage.create_query(make_query("kept", saved=True, minutes_ago=3))

        with pytest.raises(RuntimeError, match="disk full"):
            storage.clear_history()

        remaining = {q.id for q in storage.list_queries()}
        assert remaining == {older.id, saved.id}

    def test_clear_history_with_nothing_to_clear(self, storage):
        storage.create_query(make_query(saved=True))
        assert storage.clear_history() == 0
        assert len(storage.list_queries()) == 1


class TestVisualizations:

    def test_create_generates_ids(self, storage):
        viz = storage.create_visualization(make_viz("q1"))
        assert viz.id
        assert viz.shareable_id
        assert viz.shareable_id != viz.id
        assert viz.width == 800
        assert viz.height == 400

    def test_shareable_id_round_trip(self, storage):
        query = storage.create_query(make_query())
        viz = storage.create_visualization(
            make_viz(query.id, chart_type=ChartType.PIE, x_axis="product_name", y_axis="total", title="Mix")
        )
        found = storage.get_visualization_by_shareable_id(viz.shareable_id)
        assert found.query_id == query.id
        assert found.chart_type == ChartType.PIE
        assert (found.x_axis, found.y_axis) == ("product_name", "total")
        assert found.title == "Mix"

    def test_unknown_shareable_id(self, storage):
        assert storage.get_visualization_by_shareable_id("missing") is None

    def test_list_for_query(self, storage):
        a = storage.create_visualization(make_viz("q1"))
        b = storage.create_visualization(make_viz("q1", chart_type=ChartType.LINE))
        storage.create_visualization(make_viz("q2"))
        assert {v.id for v in storage.list_visualizations_for_query("q1")} == {a.id, b.id}

    def test_delete(self, storage):
        viz = storage.create_visualization(make_viz("q1"))
        assert storage.delete_visualization(viz.id) is True
        assert storage.get_visualization(viz.id) is None
        assert storage.delete_visualization(viz.id) is False
