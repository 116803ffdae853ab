"""Runtime configuration and logging setup.

Settings come from the environment (optionally through a ``.env`` file):

- ``BAYES_SMOOTHING``: additive smoothing constant for new classifiers.
- ``BAYES_LOG_LEVEL``: log level used by the command-line interface.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass

from dotenv import load_dotenv
from rich.logging import RichHandler

from .exceptions import InvalidArgumentError

DEFAULT_SMOOTHING = 1.0
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class ClassifierConfig:
    """Settings for building a classifier."""

    smoothing: float = DEFAULT_SMOOTHING
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "ClassifierConfig":
        """Build a config from environment variables, loading ``.env`` first.

        Raises:
            InvalidArgumentError: If ``BAYES_SMOOTHING`` is not a positive number.
        """
        load_dotenv()

        raw_smoothing = os.getenv("BAYES_SMOOTHING")
        smoothing = DEFAULT_SMOOTHING
        if raw_smoothing:
            try:
                smoothing = float(raw_smoothing)
            except ValueError:
                raise InvalidArgumentError(
                    f"BAYES_SMOOTHING must be a number, got {raw_smoothing!r}"
                ) from None
            if not (math.isfinite(smoothing) and smoothing > 0):
                raise InvalidArgumentError(
                    f"BAYES_SMOOTHING must be positive, got {raw_smoothing!r}"
                )

        log_level = os.getenv("BAYES_LOG_LEVEL") or DEFAULT_LOG_LEVEL
        return cls(smoothing=smoothing, log_level=log_level.upper())


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Send log records to the terminal through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
