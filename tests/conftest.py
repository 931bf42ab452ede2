import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DATA_DATABASE_URL", "sqlite://")
os.environ.setdefault("LLM_PROVIDER", "none")

import pytest
from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.runnables import RunnableLambda
from sqlmodel import Session

from querycraft.api import deps
from querycraft.db.sample import seed_sample_data
from querycraft.db.session import get_session, init_db, make_engine
from querycraft.db.storage import DatabaseStorage, MemoryStorage
from querycraft.main import app
from querycraft.services.executor import QueryExecutor


def fake_llm(*responses):
    """Chat model that replies with the given strings in order."""
    return FakeListChatModel(responses=list(responses))


def _fail(_):
    raise RuntimeError("model quota exceeded")


def failing_llm():
    return RunnableLambda(_fail)


class FlakyMemoryStorage(MemoryStorage):
    """Raises on the n-th call to delete_query."""

    def __init__(self, fail_on_call):
        super().__init__()
        self.fail_on_call = fail_on_call
        self.delete_calls = 0

    def delete_query(self, query_id):
        self.delete_calls += 1
        if self.delete_calls == self.fail_on_call:
            raise RuntimeError("disk full")
        return super().delete_query(query_id)


@pytest.fixture
def app_engine():
    engine = make_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def data_engine():
    engine = make_engine("sqlite://")
    seed_sample_data(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def executor(data_engine):
    return QueryExecutor(data_engine)


@pytest.fixture(params=["database", "memory"])
def storage(request, app_engine):
    if request.param == "memory":
        yield MemoryStorage()
        return
    with Session(app_engine) as session:
        yield DatabaseStorage(session)


@pytest.fixture
def llm_override():
    """Mutable holder for the chat model handed to the routes."""
    return {"llm": None}


@pytest.fixture
def client(app_engine, data_engine, llm_override):
    def _session():
        with Session(app_engine) as session:
            yield session

    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[deps.get_executor] = lambda: QueryExecutor(data_engine)
    app.dependency_overrides[deps.get_json_llm] = lambda: llm_override["llm"]
    app.dependency_overrides[deps.get_chat_llm] = lambda: llm_override["llm"]
    yield TestClient(app)
    app.dependency_overrides.clear()
