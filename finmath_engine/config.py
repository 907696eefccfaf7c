"""
Engine configuration.

Tolerances and display defaults, loaded from environment variables
(prefix ``FINMATH_``) and an optional ``.env`` file. Engine functions take
explicit keyword overrides; ``None`` falls back to these settings.
"""
from __future__ import annotations

import logging
import sys
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Read-only numeric and display settings."""

    # --- numeric tolerances ---
    zero_tolerance: float = Field(1e-12, gt=0)          # zero-rate / equal-rate branches
    immunization_tolerance: float = Field(1e-6, gt=0)   # Redington PV and duration matching

    # --- Newton-Raphson IRR ---
    irr_initial_guess: float = 0.1
    irr_tolerance: float = Field(1e-9, gt=0)
    irr_max_iterations: int = Field(100, ge=1)

    # --- display ---
    number_places: int = Field(2, ge=0)
    percent_places: int = Field(2, ge=0)
    placeholder: str = "—"

    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="FINMATH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    """Cached settings instance (created on first use)."""
    return EngineSettings()


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Library modules only create loggers; applications call this once.
    """
    logger = logging.getLogger("finmath_engine")
    logger.setLevel((level or get_settings().log_level).upper())

    if not any(getattr(h, "_finmath_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        handler._finmath_handler = True
        logger.addHandler(handler)

    return logger
