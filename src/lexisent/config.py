from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lexisent.sentiment.lexicon import DEFAULT_LEXICON, Lexicon, load_lexicon

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings with validation.

    All settings are loaded from environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Optional[str] = None

    # Lexicon (built-in lists when unset)
    lexicon_path: Optional[Path] = None

    # Session behaviour
    history_size: int = 10
    debounce_ms: int = 500
    export_path: Path = Path("sentiment-analysis-results.json")

    @field_validator("log_level")
    @classmethod
    def valid_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {v}")
        return level

    @field_validator("history_size")
    @classmethod
    def history_size_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"history_size must be >= 1, got {v}")
        return v

    @field_validator("debounce_ms")
    @classmethod
    def debounce_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"debounce_ms must be >= 0, got {v}")
        return v

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0


# Global settings instance
_settings: Optional[Settings] = None

# Lexicons loaded so far, keyed by lexicon_path (None is the built-in one)
_lexicons: dict[Optional[Path], Lexicon] = {}


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from environment."""
    global _settings
    _settings = Settings()
    _lexicons.clear()
    return _settings


def get_lexicon(settings: Optional[Settings] = None) -> Lexicon:
    """Get the lexicon for settings.lexicon_path, loading each file once.

    Raises:
        LexiconError: if the configured lexicon file is unusable.
    """
    settings = settings or get_settings()
    path = settings.lexicon_path
    lexicon = _lexicons.get(path)
    if lexicon is None:
        lexicon = DEFAULT_LEXICON if path is None else load_lexicon(path)
        _lexicons[path] = lexicon
    return lexicon
