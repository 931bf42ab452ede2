import secrets
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional
from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field

def new_id() -> str:
    return str(uuid.uuid4())

def new_shareable_id() -> str:
    return secrets.token_urlsafe(9)

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

class ChartType(str, Enum):
    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    SCATTER = "scatter"

class QueryRecord(SQLModel, table=True):
    __tablename__ = "queries"

    id: str = Field(default_factory=new_id, primary_key=True)
    natural_language: str
    sql_query: str = ""
    title: Optional[str] = None
    results: Optional[List[Any]] = Field(default=None, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=utcnow, nullable=False, index=True)
    is_saved: bool = Field(default=False, nullable=False, index=True)

class Visualization(SQLModel, table=True):
    __tablename__ = "visualizations"

    id: str = Field(default_factory=new_id, primary_key=True)
    query_id: str = Field(index=True)
    chart_type: ChartType
    x_axis: str
    y_axis: str
    title: str
    width: int = 800
    height: int = 400
    shareable_id: str = Field(default_factory=new_shareable_id, unique=True, index=True)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
