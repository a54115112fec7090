"""Runtime configuration for compiled server functions."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ServerFnConfig:
    """Configuration shared by a pipeline and everything derived from it.

    Only affects logging; envelopes are identical whatever the settings.
    """

    # Log every Failure envelope at INFO
    log_failures: bool = True
    # Level applied to the ``serverfn`` logger by configure_logging()
    log_level: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ServerFnConfig":
        """Build a config from ``SERVERFN_*`` variables (``.env`` is loaded first)."""
        load_dotenv(find_dotenv(usecwd=True))
        raw_failures = os.getenv("SERVERFN_LOG_FAILURES")
        return cls(
            log_failures=(
                cls.log_failures
                if raw_failures is None
                else raw_failures.strip().lower() in _TRUTHY
            ),
            log_level=os.getenv("SERVERFN_LOG_LEVEL") or None,
        )


def configure_logging(config: ServerFnConfig) -> None:
    """Apply ``config.log_level`` to the package logger.  Installs no handlers."""
    if config.log_level:
        logging.getLogger("serverfn").setLevel(config.log_level.upper())
