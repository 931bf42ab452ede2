"""Explain and optimize SQL with the language model. Neither has a fallback."""

import json
import logging
from typing import Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate

from ..core.errors import LLMServiceError, LLMUnavailableError
from ..schemas.query import OptimizationResult
from .provider import clean_json

logger = logging.getLogger(__name__)

EXPLAIN_SYSTEM = "You are a SQL expert. Explain SQL queries in simple, clear terms."

OPTIMIZE_SYSTEM = (
    "You are a SQL performance expert. Optimize queries and explain improvements. "
    "Always respond with valid JSON."
)
OPTIMIZE_HUMAN = (
    "Analyze and optimize this SQL query for better performance:\n\n"
    "{sql}\n\n"
    "Please respond with a JSON object containing:\n"
    "- optimizedQuery: The optimized SQL query\n"
    "- improvements: An array of strings describing the improvements made"
)


def _require(llm: Optional[BaseChatModel]) -> BaseChatModel:
    if llm is None:
        raise LLMUnavailableError("No language model is configured")
    return llm


def explain_sql(sql: str, llm: Optional[BaseChatModel]) -> str:
    try:
        prompt = ChatPromptTemplate.from_messages(
            [
                ("system", EXPLAIN_SYSTEM),
                ("human", "Please explain this SQL query in simple terms: {sql}"),
            ]
        )
        explanation = (prompt | _require(llm) | StrOutputParser()).invoke({"sql": sql})
    except Exception as e:
        logger.error("Explain failed: %s", e)
        raise LLMServiceError(f"Failed to explain SQL query: {e}") from e
    return explanation.strip() or "Unable to explain query"


def optimize_sql(sql: str, llm: Optional[BaseChatModel]) -> OptimizationResult:
    try:
        prompt = ChatPromptTemplate.from_messages([("system", OPTIMIZE_SYSTEM), ("human", OPTIMIZE_HUMAN)])
        raw = (prompt | _require(llm) | StrOutputParser()).invoke({"sql": sql})
        data = json.loads(clean_json(raw))
        if not isinstance(data, dict):
            raise ValueError("Expected a JSON object")
        improvements = data.get("improvements") or []
        if isinstance(improvements, str):
            improvements = [improvements]
        return OptimizationResult(
            optimized_query=str(data.get("optimizedQuery") or sql),
            improvements=[str(i) for i in improvements],
        )
    except Exception as e:
        logger.error("Optimize failed: %s", e)
        raise LLMServiceError(f"Failed to optimize SQL query: {e}") from e
