import logging
import time

from sqlalchemy import text
from sqlalchemy.engine import Engine

from ..schemas.query import ExecutionResult

logger = logging.getLogger(__name__)

class QueryExecutor:
    """Runs raw SQL against the data engine and normalizes the outcome.

    `execute` never raises: engine errors come back as a failed result.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def execute(self, sql: str) -> ExecutionResult:
        start = time.perf_counter()
        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(sql))
                if result.returns_rows:
                    data = [dict(row) for row in result.mappings().all()]
                else:
                    data = []
        except Exception as e:
            logger.warning("Query failed: %s", e)
            return ExecutionResult(success=False, error=str(e) or "Unknown database error")

        elapsed_ms = round((time.perf_counter() - start) * 1000, 3)
        columns = list(data[0].keys()) if data else []
        logger.debug("Query returned %d rows in %.3f ms", len(data), elapsed_ms)
        return ExecutionResult(
            success=True,
            data=data,
            columns=columns,
            row_count=len(data),
            execution_time=elapsed_ms,
        )
