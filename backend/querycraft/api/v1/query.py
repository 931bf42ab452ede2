import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder
from langchain_core.language_models import BaseChatModel
from ...core.errors import LLMServiceError
from ...db.models import QueryRecord
from ...db.storage import QueryStorage
from ...schemas.query import (
    ExecuteRequest,
    ExecutionResult,
    ExplainResponse,
    OptimizationResult,
    SQLRequest,
    TranslateRequest,
    TranslationResult,
)
from ...services.assistant import explain_sql, optimize_sql
from ...services.executor import QueryExecutor
from ...services.nl2sql import translate_to_sql
from ...services.schema_text import describe_schema
from ..deps import get_chat_llm, get_executor, get_json_llm, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/translate", response_model=TranslationResult, response_model_exclude_none=True)
def translate(
    body: TranslateRequest,
    executor: QueryExecutor = Depends(get_executor),
    llm: Optional[BaseChatModel] = Depends(get_json_llm),
):
    if not body.natural_language.strip():
        raise HTTPException(status_code=400, detail="Natural language query is required")
    schema = describe_schema(executor.engine)
    return translate_to_sql(body.natural_language, llm, schema=schema, context=body.context)

@router.post("/execute", response_model=ExecutionResult, response_model_exclude_none=True)
def execute(
    body: ExecuteRequest,
    executor: QueryExecutor = Depends(get_executor),
    storage: QueryStorage = Depends(get_storage),
):
    if not body.sql_query.strip():
        raise HTTPException(status_code=400, detail="SQL query is required")
    result = executor.execute(body.sql_query)
    if result.success and body.natural_language:
        record = storage.create_query(
            QueryRecord(natural_language=body.natural_language, sql_query=body.sql_query, title=body.title)
        )
        storage.update_query(record.id, {"results": jsonable_encoder(result.data)})
        logger.info("Saved query %s to history", record.id)
    return result

@router.post("/explain", response_model=ExplainResponse)
def explain(body: SQLRequest, llm: Optional[BaseChatModel] = Depends(get_chat_llm)):
    if not body.sql_query.strip():
        raise HTTPException(status_code=400, detail="SQL query is required")
    try:
        return ExplainResponse(explanation=explain_sql(body.sql_query, llm))
    except LLMServiceError as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.post("/optimize", response_model=OptimizationResult)
def optimize(body: SQLRequest, llm: Optional[BaseChatModel] = Depends(get_json_llm)):
    if not body.sql_query.strip():
        raise HTTPException(status_code=400, detail="SQL query is required")
    try:
        return optimize_sql(body.sql_query, llm)
    except LLMServiceError as e:
        raise HTTPException(status_code=500, detail=str(e))
