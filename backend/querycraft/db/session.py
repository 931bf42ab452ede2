from pathlib import Path

from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session
from ..core.config import settings

def make_engine(url: str) -> Engine:
    """Create an engine, sharing one connection for in-memory SQLite."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return create_engine(url, echo=False, pool_pre_ping=True)
    kwargs = {"connect_args": {"check_same_thread": False}}
    if parsed.database in (None, "", ":memory:"):
        kwargs["poolclass"] = StaticPool
    else:
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, echo=False, **kwargs)

engine = make_engine(settings.DATABASE_URL)
data_engine = make_engine(settings.DATA_DATABASE_URL)

def init_db(bind: Engine = engine) -> None:
    from . import models  # noqa: F401
    SQLModel.metadata.create_all(bind)

def get_session():
    with Session(engine) as session:
        yield session
