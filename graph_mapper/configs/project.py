from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class ProjectSettings(BaseSettings):
    """
    Process-wide settings for the graph mapper package.

    Only logging is driven from the environment. Mapper behaviour such as
    strict configuration checks is always passed explicitly to the mapper.
    """

    debug: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="GRAPH_MAPPER_",
        env_file=(".env",),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    def validate_log_level(cls, value):
        if isinstance(value, str):
            value = value.strip().upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value


@lru_cache
def get_project_settings() -> ProjectSettings:
    return ProjectSettings()
