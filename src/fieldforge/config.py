"""Runtime settings for the fieldforge command line."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from fieldforge.validation.types import ErrorMode


@dataclass
class Settings:
    """Settings resolved from the environment.

    Attributes:
        error_mode: Default error shape for ``fieldforge check``
        log_level: Logging level name applied by the CLI
        ruleset: Default ruleset file, if any
    """

    error_mode: ErrorMode = ErrorMode.SIMPLE
    log_level: str = "WARNING"
    ruleset: Path | None = None

    @classmethod
    def from_env(cls) -> Settings:
        """Create settings from environment variables.

        Reads:
        1. FIELDFORGE_ERROR_MODE ("simple" or "extended")
        2. FIELDFORGE_LOG_LEVEL (e.g. "DEBUG"; unknown names fall back to WARNING)
        3. FIELDFORGE_RULESET (path to a ruleset YAML file)
        """
        error_mode = ErrorMode.from_flag(
            os.environ.get("FIELDFORGE_ERROR_MODE", "").strip().lower()
        )

        log_level = os.environ.get("FIELDFORGE_LOG_LEVEL", "WARNING").strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            log_level = "WARNING"

        ruleset = os.environ.get("FIELDFORGE_RULESET")

        return cls(
            error_mode=error_mode,
            log_level=log_level,
            ruleset=Path(ruleset) if ruleset else None,
        )

    def configure_logging(self) -> None:
        logging.basicConfig(
            level=self.log_level,
            format="%(levelname)s %(name)s: %(message)s",
        )
