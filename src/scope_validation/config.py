"""
Runtime settings for the Scope Validation Engine.

Values come from SCOPE_VALIDATION_* environment variables or a .env file.
"""

import logging
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.policy import ScopePolicy


class EngineSettings(BaseSettings):
    """Engine settings loaded from the environment."""

    policy_path: Path | None = None
    max_workers: int = 1
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="SCOPE_VALIDATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def load_policy(self) -> ScopePolicy:
        """Policy from policy_path when set, otherwise the built-in defaults."""
        if self.policy_path is None:
            return ScopePolicy()
        return ScopePolicy.from_yaml(self.policy_path)


def configure_logging(level: str | int = "WARNING") -> None:
    """Attach a stream handler to the package logger for scripts and CLIs."""
    logger = logging.getLogger("scope_validation")
    logger.setLevel(level if isinstance(level, int) else level.upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)
