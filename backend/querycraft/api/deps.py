from typing import Optional
from fastapi import Depends
from langchain_core.language_models import BaseChatModel
from sqlmodel import Session
from ..core.config import settings
from ..db.session import data_engine, get_session
from ..db.storage import DatabaseStorage, MemoryStorage, QueryStorage
from ..services.executor import QueryExecutor
from ..services.provider import make_llm

memory_storage = MemoryStorage()

def get_storage(session: Session = Depends(get_session)) -> QueryStorage:
    if settings.STORAGE_BACKEND == "memory":
        return memory_storage
    return DatabaseStorage(session)

def get_executor() -> QueryExecutor:
    return QueryExecutor(data_engine)

def get_json_llm() -> Optional[BaseChatModel]:
    return make_llm(json_mode=True)

def get_chat_llm() -> Optional[BaseChatModel]:
    return make_llm()
