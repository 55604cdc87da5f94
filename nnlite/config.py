"""Configuration management with Pydantic and XDG base directory support."""

import logging
import os
from pathlib import Path
from typing import Literal

from pydantic import Field, PrivateAttr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

MetricName = Literal["cosine", "euclidean", "manhattan"]


def get_xdg_data_home() -> Path:
    """Get XDG_DATA_HOME directory, defaulting to ~/.local/share."""
    xdg_data = os.getenv("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


class Settings(BaseSettings):
    """nnlite configuration settings.

    Precedence: CLI flag > environment variable > .env file > defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="NNLITE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    data_dir: Path | None = Field(
        default=None,
        description="Override data directory (defaults to XDG_DATA_HOME/nnlite)",
    )

    default_metric: MetricName = Field(
        default="cosine",
        description="Distance metric used when creating an index without --metric",
    )

    default_top_k: int = Field(
        default=10,
        ge=1,
        description="Number of neighbours returned when a query omits --top-k",
    )

    index_suffix: str = Field(
        default=".nn",
        description="File suffix appended to bare index names",
    )

    log_level: str = Field(
        default="WARNING",
        description="Log level for command line runs (DEBUG, INFO, WARNING, ERROR)",
    )

    _resolved_data_dir: Path | None = PrivateAttr(default=None)

    @field_validator("index_suffix")
    @classmethod
    def _check_suffix(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError("index_suffix must start with '.' followed by an extension")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    def get_data_dir(self) -> Path:
        """Get the data directory, creating if necessary."""
        if self._resolved_data_dir is not None:
            return self._resolved_data_dir

        if self.data_dir:
            data_dir = self.data_dir
            data_dir.mkdir(parents=True, exist_ok=True)
            self._resolved_data_dir = data_dir
            return data_dir

        primary_dir = get_xdg_data_home() / "nnlite"
        try:
            primary_dir.mkdir(parents=True, exist_ok=True)
            self._resolved_data_dir = primary_dir
            return primary_dir
        except PermissionError as exc:
            fallback = Path.cwd() / ".nnlite-data"
            fallback.mkdir(parents=True, exist_ok=True)
            self._resolved_data_dir = fallback
            logger.warning(
                "Cannot create data directory at %s (%s); using %s instead. "
                "Set NNLITE_DATA_DIR to override.",
                primary_dir,
                exc,
                fallback,
            )
            return fallback

    def with_data_dir(self, data_dir: Path) -> "Settings":
        """Return a copy of these settings rooted at ``data_dir``."""
        updated = self.model_copy(update={"data_dir": data_dir})
        updated._resolved_data_dir = None
        return updated

    def get_index_dir(self) -> Path:
        """Get path to the directory holding named indexes."""
        index_dir = self.get_data_dir() / "indexes"
        index_dir.mkdir(parents=True, exist_ok=True)
        return index_dir

    def resolve_index_path(self, value: Path | str) -> Path:
        """Resolve an index argument to a file path.

        A bare name (no directory part, no suffix) such as ``"products"``
        refers to ``<index dir>/products<index_suffix>``; anything else is
        taken as a path.
        """
        path = Path(value)
        if path.parent == Path(".") and not path.suffix and not str(value).startswith("."):
            return self.get_index_dir() / f"{path.name}{self.index_suffix}"
        return path


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings | None) -> None:
    """Set the global settings instance (useful for testing)."""
    global _settings
    _settings = settings
