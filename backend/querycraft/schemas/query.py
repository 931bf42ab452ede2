from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import ConfigDict, field_validator
from .common import CamelModel, SuccessOut

class TranslateRequest(CamelModel):
    natural_language: str = ""
    context: Optional[str] = None

class TranslationResult(CamelModel):
    sql_query: str
    explanation: str
    estimated_rows: Optional[int] = None
    confidence: float

class ExecuteRequest(CamelModel):
    sql_query: str = ""
    natural_language: Optional[str] = None
    title: Optional[str] = None

class ExecutionResult(CamelModel):
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    columns: Optional[List[str]] = None
    row_count: Optional[int] = None
    execution_time: Optional[float] = None
    error: Optional[str] = None

class SQLRequest(CamelModel):
    sql_query: str = ""

class ExplainResponse(CamelModel):
    explanation: str

class OptimizationResult(CamelModel):
    optimized_query: str
    improvements: List[str] = []

class QueryOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    natural_language: str
    sql_query: str
    title: Optional[str] = None
    results: Optional[List[Any]] = None
    created_at: datetime
    is_saved: bool = False

class QueryUpdate(CamelModel):
    title: Optional[str] = None
    is_saved: Optional[bool] = None
    results: Optional[List[Any]] = None

    @field_validator("is_saved", mode="before")
    @classmethod
    def saved_flag_not_null(cls, value):
        # Optional only so it can be omitted; an explicit null is rejected.
        if value is None:
            raise ValueError("isSaved cannot be null")
        return value

class ClearHistoryOut(SuccessOut):
    deleted: int
