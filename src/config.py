"""
Configuration loader for the Terraform Drift Analyser.
"""

import os
from dataclasses import dataclass
from typing import Optional

from .drift_analyser.filter import DEFAULT_DRIFTIGNORE_PATH
from .drift_analyser.output import DEFAULT_OUTPUT, get_output
from .drift_analyser.state import LOCAL_PREFIX, S3_PREFIX

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
STATE_PATH_PREFIXES = (S3_PREFIX, LOCAL_PREFIX)


@dataclass
class Config:
    """Configuration class for the drift analyser."""

    state_path: str
    aws_region: Optional[str] = None
    log_level: str = "INFO"
    driftignore_path: str = DEFAULT_DRIFTIGNORE_PATH
    output: str = DEFAULT_OUTPUT
    max_workers: int = 4
    max_retries: int = 3
    timeout_seconds: int = 30

    def validate(self) -> "Config":
        """
        Raises:
            ValueError: If a setting is invalid
        """
        if not self.state_path.startswith(STATE_PATH_PREFIXES):
            raise ValueError(
                "State path must be a valid S3 path starting with s3:// "
                "or a local path starting with local://"
            )
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level {self.log_level!r}, expected one of "
                f"{', '.join(VALID_LOG_LEVELS)}"
            )
        if self.max_workers < 1:
            raise ValueError("MAX_WORKERS must be at least 1")
        get_output(self.output)
        return self


def _int_env(name: str, default: str) -> int:
    value = os.environ.get(name, default)
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


def load_config() -> Config:
    """
    Loads and validates configuration from the environment.

    Returns:
        Config object with validated settings

    Raises:
        ValueError: If required configuration is missing or invalid
    """
    # Required configuration
    state_path = os.environ.get("STATE_FILE_PATH")
    if not state_path:
        raise ValueError("STATE_FILE_PATH environment variable is required")

    return Config(
        state_path=state_path,
        aws_region=os.environ.get("AWS_REGION"),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        driftignore_path=os.environ.get("DRIFTIGNORE_PATH", DEFAULT_DRIFTIGNORE_PATH),
        output=os.environ.get("OUTPUT", DEFAULT_OUTPUT),
        max_workers=_int_env("MAX_WORKERS", "4"),
        max_retries=_int_env("MAX_RETRIES", "3"),
        timeout_seconds=_int_env("TIMEOUT_SECONDS", "30"),
    ).validate()
