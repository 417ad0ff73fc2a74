"""Configuration schemas and loading for the art swap matcher."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator

DATABASE_URL_ENV = "ARTSWAP_DATABASE_URL"
DEFAULT_DATABASE_URL = "duckdb:///artswap.duckdb"

PhaseName = Literal["open", "voting", "closed", "archived"]


class DatabaseConfig(BaseModel):
    """Database connection settings.

    Attributes:
        url: SQLAlchemy URL. Falls back to ARTSWAP_DATABASE_URL, then to a
            local DuckDB file.
        echo: Log emitted SQL statements.
    """

    url: str | None = None
    echo: bool = False


class MatchingConfig(BaseModel):
    """Match calculation settings.

    Attributes:
        match_status: Status stored on newly created match records.
        required_phases: Event phases in which matching may run. An empty list
            disables the phase gate.
        notify_artists: Write a MATCH notification for both artists of every
            newly created match.
    """

    match_status: str = "completed"
    required_phases: list[PhaseName] = Field(default_factory=lambda: ["closed"])
    notify_artists: bool = True

    @field_validator("match_status")
    @classmethod
    def validate_status_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            msg = "match_status cannot be empty"
            raise ValueError(msg)
        return v


class MatcherConfig(BaseModel):
    """Complete matcher configuration."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)

    def get_database_url(self) -> str:
        """Get database URL from config or environment."""
        return self.database.url or os.environ.get(DATABASE_URL_ENV) or DEFAULT_DATABASE_URL


def load_config(path: str | Path) -> MatcherConfig:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to YAML configuration file.

    Returns:
        Validated MatcherConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValidationError: If config is invalid.
    """
    config_path = Path(path)
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with config_path.open() as f:
        data = yaml.safe_load(f) or {}

    return MatcherConfig.model_validate(data)
