"""
Natural language -> SQL translation.

The language model is asked for a JSON object; when that fails for any
reason the question is matched against FALLBACK_PATTERNS instead.
"""

import json
import logging
import re
from typing import Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate

from ..core.errors import LLMUnavailableError
from ..schemas.query import TranslationResult
from .provider import clean_json

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA = """
CREATE TABLE sales_data (
  id INTEGER PRIMARY KEY,
  region TEXT,
  customer_name TEXT,
  product_name TEXT,
  sales_amount DECIMAL(10,2),
  date_created DATE,
  transaction_count INTEGER
);
"""
DEFAULT_CONTEXT = "Standard sales data analysis"

SQL_SYSTEM = "You are a SQL expert that converts natural language to SQL queries. Always respond with valid JSON."

SQL_HUMAN = (
    "You are an expert SQL query generator. Convert the natural language question to a valid SQL query.\n\n"
    "Database Schema:\n{schema}\n\n"
    'Natural Language Query: "{question}"\n\n'
    "Additional Context: {context}\n\n"
    "Please respond with a JSON object containing:\n"
    "- sqlQuery: The SQL query as a string\n"
    "- explanation: A brief explanation of what the query does\n"
    "- estimatedRows: An estimated number of rows that might be returned (optional)\n"
    "- confidence: A confidence score between 0 and 1\n\n"
    "Make sure the SQL is syntactically correct and follows best practices."
)

# Order matters: the first matching pattern wins.
FALLBACK_PATTERNS = [
    (
        re.compile(r"sales.*by.*region", re.IGNORECASE),
        "SELECT region, SUM(sales_amount) as total_sales FROM sales_data GROUP BY region ORDER BY total_sales DESC",
        "Shows total sales amount grouped by region in descending order",
    ),
    (
        re.compile(r"top.*customers?", re.IGNORECASE),
        "SELECT customer_name, SUM(sales_amount) as total_sales FROM sales_data GROUP BY customer_name ORDER BY total_sales DESC LIMIT 10",
        "Shows top 10 customers by total sales amount",
    ),
    (
        re.compile(r"sales.*q4.*2024", re.IGNORECASE),
        "SELECT * FROM sales_data WHERE date_created >= '2024-10-01' AND date_created <= '2024-12-31' ORDER BY date_created DESC",
        "Shows all sales data for Q4 2024 (October to December)",
    ),
    (
        re.compile(r"products?.*sales", re.IGNORECASE),
        "SELECT product_name, SUM(sales_amount) as total_sales, COUNT(*) as transaction_count FROM sales_data GROUP BY product_name ORDER BY total_sales DESC",
        "Shows products with their total sales and transaction count",
    ),
    (
        re.compile(r"average.*sales", re.IGNORECASE),
        "SELECT region, AVG(sales_amount) as avg_sales FROM sales_data GROUP BY region ORDER BY avg_sales DESC",
        "Shows average sales amount by region",
    ),
]

PATTERN_CONFIDENCE = 0.7
DEFAULT_SQL = "SELECT * FROM sales_data LIMIT 10"
DEFAULT_EXPLANATION = (
    "Showing sample data (please try a more specific query like 'sales by region' or 'top customers')"
)
DEFAULT_CONFIDENCE = 0.5


def clamp_confidence(value: float) -> float:
    return max(0.0, min(1.0, value))


def build_sql_chain(llm: BaseChatModel):
    prompt = ChatPromptTemplate.from_messages([("system", SQL_SYSTEM), ("human", SQL_HUMAN)])
    return prompt | llm | StrOutputParser()


def _parse_response(raw: str) -> TranslationResult:
    data = json.loads(clean_json(raw))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

    estimated = data.get("estimatedRows")
    try:
        estimated = int(estimated) if estimated is not None else None
    except (TypeError, ValueError):
        estimated = None

    return TranslationResult(
        sql_query=str(data.get("sqlQuery") or ""),
        explanation=str(data.get("explanation") or "Query generated successfully"),
        estimated_rows=estimated,
        confidence=clamp_confidence(float(data.get("confidence") or 0.8)),
    )


def match_fallback(natural_language: str) -> TranslationResult:
    for pattern, sql, explanation in FALLBACK_PATTERNS:
        if pattern.search(natural_language):
            return TranslationResult(
                sql_query=sql,
                explanation=f"{explanation} (using pattern matching fallback)",
                confidence=PATTERN_CONFIDENCE,
            )
    return TranslationResult(
        sql_query=DEFAULT_SQL,
        explanation=DEFAULT_EXPLANATION,
        confidence=DEFAULT_CONFIDENCE,
    )


def translate_to_sql(
    natural_language: str,
    llm: Optional[BaseChatModel],
    schema: Optional[str] = None,
    context: Optional[str] = None,
) -> TranslationResult:
    try:
        if llm is None:
            raise LLMUnavailableError("No language model is configured")
        raw = build_sql_chain(llm).invoke(
            {
                "schema": schema or DEFAULT_SCHEMA,
                "question": natural_language,
                "context": context or DEFAULT_CONTEXT,
            }
        )
        return _parse_response(raw)
    except Exception as e:
        logger.warning("Model translation failed, using pattern matching fallback: %s", e)
        return match_fallback(natural_language)
