"""Runtime settings for the chord-lookup service and CLI."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DATA_PATH = Path("chords")
DEFAULT_LOG_LEVEL = "INFO"

DATA_PATH_ENV = "CHORD_LOOKUP_DATA"
LOG_LEVEL_ENV = "CHORD_LOOKUP_LOG_LEVEL"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """Service settings.

    Parameters
    ----------
    data_path : Path
        Chord dataset file or directory.
    log_level : str
        Name of the root logging level (e.g., "INFO", "DEBUG").
    """

    data_path: Path = DEFAULT_DATA_PATH
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Read settings from environment variables, falling back to defaults."""
        environ = os.environ if environ is None else environ
        return cls(
            data_path=Path(environ.get(DATA_PATH_ENV, str(DEFAULT_DATA_PATH))),
            log_level=environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper(),
        )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Install a basic root handler. Only entry points call this."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        msg = f"Unknown log level: {level}"
        raise ValueError(msg)
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
