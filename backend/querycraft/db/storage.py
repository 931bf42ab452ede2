"""
Persistence for query records and visualizations.

Both backends satisfy the `QueryStorage` protocol and can be swapped through
the STORAGE_BACKEND setting.
"""

import logging
import threading
from typing import Any, Dict, List, Optional, Protocol

from sqlmodel import Session, select

from .models import QueryRecord, Visualization

logger = logging.getLogger(__name__)

UPDATABLE_QUERY_FIELDS = {"natural_language", "sql_query", "title", "results", "is_saved"}


class QueryStorage(Protocol):
    """Protocol for query and visualization persistence."""

    def create_query(self, record: QueryRecord) -> QueryRecord: ...

    def get_query(self, query_id: str) -> Optional[QueryRecord]: ...

    def list_queries(self) -> List[QueryRecord]: ...

    def update_query(self, query_id: str, updates: Dict[str, Any]) -> Optional[QueryRecord]: ...

    def delete_query(self, query_id: str) -> bool: ...

    def list_saved_queries(self) -> List[QueryRecord]: ...

    def clear_history(self) -> int: ...

    def create_visualization(self, viz: Visualization) -> Visualization: ...

    def get_visualization(self, viz_id: str) -> Optional[Visualization]: ...

    def list_visualizations_for_query(self, query_id: str) -> List[Visualization]: ...

    def get_visualization_by_shareable_id(self, shareable_id: str) -> Optional[Visualization]: ...

    def delete_visualization(self, viz_id: str) -> bool: ...


def _clean_updates(updates: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in updates.items() if k in UPDATABLE_QUERY_FIELDS}


def _clear_history(storage: QueryStorage) -> int:
    # One delete per non-saved record; a failure stops the sweep without undoing earlier deletes.
    deleted = 0
    for record in storage.list_queries():
        if record.is_saved:
            continue
        if storage.delete_query(record.id):
            deleted += 1
    logger.info("Cleared %d history entries", deleted)
    return deleted


class DatabaseStorage:
    """SQLModel-backed storage bound to one session."""

    def __init__(self, session: Session):
        self.session = session

    def create_query(self, record: QueryRecord) -> QueryRecord:
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    def get_query(self, query_id: str) -> Optional[QueryRecord]:
        return self.session.get(QueryRecord, query_id)

    def list_queries(self) -> List[QueryRecord]:
        return list(self.session.exec(select(QueryRecord).order_by(QueryRecord.created_at.desc())).all())

    def update_query(self, query_id: str, updates: Dict[str, Any]) -> Optional[QueryRecord]:
        record = self.get_query(query_id)
        if record is None:
            return None
        for key, value in _clean_updates(updates).items():
            setattr(record, key, value)
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    def delete_query(self, query_id: str) -> bool:
        record = self.get_query(query_id)
        if record is None:
            return False
        self.session.delete(record)
        self.session.commit()
        return True

    def list_saved_queries(self) -> List[QueryRecord]:
        stmt = (
            select(QueryRecord)
            .where(QueryRecord.is_saved == True)  # noqa: E712
            .order_by(QueryRecord.created_at.desc())
        )
        return list(self.session.exec(stmt).all())

    def clear_history(self) -> int:
        return _clear_history(self)

    def create_visualization(self, viz: Visualization) -> Visualization:
        self.session.add(viz)
        self.session.commit()
        self.session.refresh(viz)
        return viz

    def get_visualization(self, viz_id: str) -> Optional[Visualization]:
        return self.session.get(Visualization, viz_id)

    def list_visualizations_for_query(self, query_id: str) -> List[Visualization]:
        stmt = select(Visualization).where(Visualization.query_id == query_id)
        return list(self.session.exec(stmt).all())

    def get_visualization_by_shareable_id(self, shareable_id: str) -> Optional[Visualization]:
        stmt = select(Visualization).where(Visualization.shareable_id == shareable_id)
        return self.session.exec(stmt).first()

    def delete_visualization(self, viz_id: str) -> bool:
        viz = self.get_visualization(viz_id)
        if viz is None:
            return False
        self.session.delete(viz)
        self.session.commit()
        return True


class MemoryStorage:
    """Process-local storage kept in dicts. Contents are lost on restart."""

    def __init__(self):
        self._queries: Dict[str, QueryRecord] = {}
        self._visualizations: Dict[str, Visualization] = {}
        self._lock = threading.Lock()

    def create_query(self, record: QueryRecord) -> QueryRecord:
        with self._lock:
            self._queries[record.id] = record
        return record

    def get_query(self, query_id: str) -> Optional[QueryRecord]:
        return self._queries.get(query_id)

    def list_queries(self) -> List[QueryRecord]:
        with self._lock:
            records = list(self._queries.values())
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def update_query(self, query_id: str, updates: Dict[str, Any]) -> Optional[QueryRecord]:
        with self._lock:
            record = self._queries.get(query_id)
            if record is None:
                return None
            for key, value in _clean_updates(updates).items():
                setattr(record, key, value)
        return record

    def delete_query(self, query_id: str) -> bool:
        with self._lock:
            return self._queries.pop(query_id, None) is not None

    def list_saved_queries(self) -> List[QueryRecord]:
        return [r for r in self.list_queries() if r.is_saved]

    def clear_history(self) -> int:
        return _clear_history(self)

    def create_visualization(self, viz: Visualization) -> Visualization:
        with self._lock:
            self._visualizations[viz.id] = viz
        return viz

    def get_visualization(self, viz_id: str) -> Optional[Visualization]:
        return self._visualizations.get(viz_id)

    def list_visualizations_for_query(self, query_id: str) -> List[Visualization]:
        with self._lock:
            return [v for v in self._visualizations.values() if v.query_id == query_id]

    def get_visualization_by_shareable_id(self, shareable_id: str) -> Optional[Visualization]:
        with self._lock:
            for viz in self._visualizations.values():
                if viz.shareable_id == shareable_id:
                    return viz
        return None

    def delete_visualization(self, viz_id: str) -> bool:
        with self._lock:
            return self._visualizations.pop(viz_id, None) is not None
