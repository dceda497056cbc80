"""
Runtime configuration.

Settings come from environment variables, after loading ``.env`` from the
working directory if present.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DATABASE = "data/jobs.db"
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_LEVEL = "INFO"

TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_path: Path
    log_level: str
    log_dir: Path
    log_to_file: bool


def load_env(env_path: Optional[Path] = None) -> None:
    """Load .env from the project root if present. Existing variables win."""
    env_path = env_path or Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)


def _flag(value: str) -> bool:
    return value.strip().lower() in TRUE_VALUES


def load_settings(load_dotenv_file: bool = True) -> Settings:
    """
    Build Settings from the environment.

    Recognized variables:
        JOBTRACKER_DATABASE: SQLite database path (default: data/jobs.db)
        JOBTRACKER_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
        JOBTRACKER_LOG_DIR: Directory for log files (default: logs/)
        JOBTRACKER_LOG_FILE: Write logs to a file (default: true)
    """
    if load_dotenv_file:
        load_env()

    return Settings(
        database_path=Path(os.getenv("JOBTRACKER_DATABASE", DEFAULT_DATABASE)),
        log_level=os.getenv("JOBTRACKER_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        log_dir=Path(os.getenv("JOBTRACKER_LOG_DIR", DEFAULT_LOG_DIR)),
        log_to_file=_flag(os.getenv("JOBTRACKER_LOG_FILE", "true")),
    )
