from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./blog.db"
    test_database_url: str = "sqlite+aiosqlite:///./test-blog.db"

    host: str = "127.0.0.1"
    port: int = 8080
    cors_origins: List[str] = ["*"]

    log_level: str = "INFO"
    sql_echo: bool = False

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
