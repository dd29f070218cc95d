from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str | None = None
    OPENAI_ORG: str | None = None

    # Single-model override; when set it is used for every budget
    LLM_MODEL: str | None = None
    LLM_MODEL_QUICK: str = "gpt-4o-mini"
    LLM_MODEL_STANDARD: str = "gpt-4o-mini"
    LLM_MODEL_DEEP: str = "gpt-4o"
    TEMPERATURE: float = 0.3
    # Client-side transport controls (the core never retries on its own)
    LLM_MAX_RETRIES: int = 2
    LLM_TIMEOUT: float = 30.0

    CLASSIFIER_MAX_TOKENS: int = 500
    OPTIMIZER_MAX_TOKENS: int = 100
    OPTIMIZER_TEMPERATURE: float = 0.0
    OPTIMIZER_MAX_KEYWORDS: int = 15

    # Fixed confidence constants for each classifier path
    HEURISTIC_CONFIDENCE: float = 0.6
    MODEL_CONFIDENCE: float = 0.7

    DEFAULT_BUDGET: Literal["quick", "standard", "deep"] = "standard"
    DEFAULT_LIMIT: int = 50

    log_dir: str = "logs"
    log_level: str = "INFO"
    log_to_file: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
