"""Configuration management for gitscan."""

import os
import logging
from typing import Optional
from dataclasses import dataclass


@dataclass
class Config:
    """Configuration for a scan.

    Merges environment variables with CLI arguments.
    CLI arguments take precedence over environment variables.
    """

    base_dir: str
    show_all: bool = False
    max_workers: Optional[int] = None
    git_binary: str = "git"
    log_level: int = logging.WARNING
    log_file: Optional[str] = None

    @classmethod
    def from_env_and_args(
        cls,
        base_dir: str = ".",
        show_all: bool = False,
        max_workers: Optional[int] = None,
        verbosity: int = 0,
        log_file: Optional[str] = None
    ) -> 'Config':
        """Create config from environment variables and CLI arguments.

        CLI arguments override environment variables.

        Args:
            base_dir: Directory to scan
            show_all: Report clean repositories too
            max_workers: Parallel workers (overrides GITSCAN_WORKERS)
            verbosity: Number of -v flags (overrides GITSCAN_LOG_LEVEL)
            log_file: Log file path (overrides GITSCAN_LOG_FILE)

        Returns:
            Config instance

        Raises:
            ValueError: If the configuration is invalid
        """
        if not os.path.isdir(base_dir):
            raise ValueError(f"'{base_dir}' does not exist or is not a directory")

        if max_workers is None:
            max_workers = _env_workers()
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"Number of workers must be positive, got {max_workers}")

        if verbosity >= 2:
            log_level = logging.DEBUG
        elif verbosity == 1:
            log_level = logging.INFO
        else:
            log_level = _env_log_level()

        return cls(
            base_dir=base_dir,
            show_all=show_all,
            max_workers=max_workers,
            git_binary=os.getenv('GITSCAN_GIT') or "git",
            log_level=log_level,
            log_file=log_file or os.getenv('GITSCAN_LOG_FILE')
        )

    @property
    def workers(self) -> int:
        """Effective number of workers (CPU count when unset)."""
        return self.max_workers or os.cpu_count() or 1


def _env_workers() -> Optional[int]:
    value = os.getenv('GITSCAN_WORKERS')
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"GITSCAN_WORKERS must be an integer, got '{value}'") from None


def _env_log_level() -> int:
    name = os.getenv('GITSCAN_LOG_LEVEL')
    if not name:
        return logging.WARNING
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level in GITSCAN_LOG_LEVEL: '{name}'")
    return level
