"""Mini README: Centralised configuration models and helpers for fintrack.

Structure:
    * FintrackSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read ``FINTRACK_`` environment variables, locate
    the session file and choose the port the dashboard binds to. Values are
    validated once per process and cached afterwards.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class FintrackSettings(BaseSettings):
    """Runtime configuration for the finance tracker."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the session file that replaces browser storage.",
    )
    session_filename: str = Field(
        "session.json",
        description="Name of the JSON key-value file storing the login flag and profile.",
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the local dashboard to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the local dashboard exposes.",
        ge=1,
        le=65535,
    )
    currency_symbol: str = Field(
        "$",
        description="Symbol prefixed to amounts when rendering dashboard values.",
    )
    simulated_delay_seconds: float = Field(
        0.8,
        description="Delay applied to chart data loads to mimic a remote fetch.",
        ge=0.0,
    )

    class Config:
        env_prefix = "FINTRACK_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def session_path(self) -> Path:
        """Absolute path of the persisted session file."""

        return self.data_directory / self.session_filename


@lru_cache()
def get_settings() -> FintrackSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return FintrackSettings()
