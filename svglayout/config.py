"""Engine configuration from environment variables."""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


class Settings(BaseSettings):
    log_level: str = "info"

    # Pixels per rem/em, also the reference length for "%" values.
    rem_base: float = 16.0

    # Decimal places kept in emitted SVG coordinates.
    decimal_precision: int = 3

    svg_namespace: str = "http://www.w3.org/2000/svg"

    model_config = SettingsConfigDict(
        env_prefix="SVGLAYOUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


def setup_logging(level: str | None = None) -> None:
    """Configure root logging for scripts that drive the engine."""
    name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format=_LOG_FORMAT,
    )
