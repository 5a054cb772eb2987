"""Centralized configuration for prefix-search using Pydantic Settings."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from prefix_search.search.analyzers import DEFAULT_MIN_WORD_LENGTH, DEFAULT_STOPWORDS


class Settings(BaseSettings):
    """Strictly typed engine configuration loaded from ``PREFIX_SEARCH_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="PREFIX_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    stop_words: str = Field(
        default=",".join(DEFAULT_STOPWORDS),
        description="Comma-separated words that are never indexed",
    )
    min_word_length: int = Field(
        default=DEFAULT_MIN_WORD_LENGTH,
        ge=1,
        description="Normalized words shorter than this are discarded",
    )
    default_match_mode: Literal["all", "any"] = Field(
        default="all",
        description="Match mode used when match() is called without one",
    )
    clear_resets_key_store: bool = Field(
        default=False,
        description="Also drop stored original texts on clear()",
    )
    index_name: str = Field(default="default", min_length=1, description="Label used in metrics and logs")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    @field_validator("default_match_mode", mode="before")
    @classmethod
    def _lower_match_mode(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def get_stop_words(self) -> list[str]:
        """Get the stop list (comma-separated, lower-cased)."""
        if not self.stop_words:
            return []
        return [word.strip().lower() for word in self.stop_words.split(",") if word.strip()]

    def configure_logging(self) -> None:
        """Apply ``log_level`` and ``log_json`` to the root logger."""
        from prefix_search.observability.logging import configure_logging

        configure_logging(self.log_level, self.log_json)
