from pydantic import BaseModel
import os
from functools import lru_cache


class Settings(BaseModel):
    ENV: str = os.getenv("ENV", "dev").lower()
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./answerboard.db")

    # Reputation store: "sql" keeps scores in the relational store, "redis" in REDIS_URL
    REPUTATION_BACKEND: str = os.getenv("REPUTATION_BACKEND", "sql").lower()
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    # Reputation economy
    MAX_PENDING_ANSWERS: int = int(os.getenv("MAX_PENDING_ANSWERS", "5"))
    REPUTATION_CEILING: int = int(os.getenv("REPUTATION_CEILING", "25"))
    DEFAULT_REPUTATION: int = int(os.getenv("DEFAULT_REPUTATION", "5"))
    QUESTION_ASKING_FEE: int = int(os.getenv("QUESTION_ASKING_FEE", "-2"))

    # Listing
    QUESTION_PAGE_SIZE: int = int(os.getenv("QUESTION_PAGE_SIZE", "10"))

    @property
    def database_url(self) -> str:
        return self.DATABASE_URL

    @property
    def uses_redis_ledger(self) -> bool:
        return self.REPUTATION_BACKEND == "redis"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
