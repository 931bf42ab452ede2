from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    APP_NAME: str = "QueryCraft API"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    # LLM providers
    LLM_PROVIDER: str = "ollama"  # or "openai", or "none" for pattern matching only
    OLLAMA_HOST: str = "http://localhost:11434"
    OLLAMA_MODEL: str = "llama3:8b"
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o"
    LLM_TEMPERATURE: float = 0.2

    # DB
    DATABASE_URL: str = "sqlite:///./data/querycraft.db"
    DATA_DATABASE_URL: str = "sqlite://"  # sample dataset, in-memory by default
    STORAGE_BACKEND: str = "database"  # or "memory"
    SEED_SAMPLE_DATA: bool = True

    class Config:
        env_file = ".env"

settings = Settings()
