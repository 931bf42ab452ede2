import logging
import re
from typing import Optional

from langchain_core.language_models import BaseChatModel
from ..core.config import settings

logger = logging.getLogger(__name__)

def make_llm(json_mode: bool = False) -> Optional[BaseChatModel]:
    """Build the configured chat model, or None when no model is available."""
    provider = settings.LLM_PROVIDER.lower()
    if provider == "ollama":
        from langchain_ollama import ChatOllama

        kwargs = {"format": "json"} if json_mode else {}
        return ChatOllama(
            model=settings.OLLAMA_MODEL,
            base_url=settings.OLLAMA_HOST,
            temperature=settings.LLM_TEMPERATURE,
            **kwargs,
        )
    if provider == "openai":
        if not settings.OPENAI_API_KEY:
            logger.warning("LLM_PROVIDER is openai but OPENAI_API_KEY is not set")
            return None
        from langchain_openai import ChatOpenAI

        kwargs = {"model_kwargs": {"response_format": {"type": "json_object"}}} if json_mode else {}
        return ChatOpenAI(
            model=settings.OPENAI_MODEL,
            api_key=settings.OPENAI_API_KEY,
            temperature=settings.LLM_TEMPERATURE,
            **kwargs,
        )
    if provider != "none":
        logger.warning("Unsupported LLM provider: %s", settings.LLM_PROVIDER)
    return None

def clean_json(text: str) -> str:
    # Remove fences if the model wraps JSON
    text = text.strip()
    fence = re.compile(r"^```(?:json|sql)?\n|\n?```$")
    return fence.sub("", text).strip()
