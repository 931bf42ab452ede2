class QueryCraftError(Exception):
    """Base class for errors raised by the service layer."""


class LLMServiceError(QueryCraftError):
    """A language-model call failed and there is no fallback for it."""


class LLMUnavailableError(QueryCraftError):
    """No language model is configured."""


class UnsupportedExportFormat(QueryCraftError):
    def __init__(self, fmt: str):
        super().__init__(f"Unsupported export format: {fmt}")
        self.format = fmt
