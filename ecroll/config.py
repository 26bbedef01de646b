"""
Centralized configuration management.

Configuration is loaded from:
1. Environment variables
2. .env file (if present)
3. Default values

Usage:
    from ecroll.config import get_config
    config = get_config()
    print(config.extraction.chunk_lines)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError


def _load_dotenv(dotenv_path: Optional[Path] = None) -> None:
    """
    Minimal .env loader (no external dependency).

    Supports KEY=VALUE, ignores blank lines and comments (#).
    Does not override existing environment variables.
    """
    if dotenv_path is None:
        dotenv_path = Path(__file__).resolve().parent.parent / ".env"

    if not dotenv_path.exists() or not dotenv_path.is_file():
        return

    for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if not key:
            continue
        # Only set if not already in environment
        if os.getenv(key) in (None, ""):
            os.environ[key] = value


# Load .env on module import
_load_dotenv()


def _get_bool_env(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    value = os.getenv(key, "").strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    return default


def _get_int_env(key: str, default: int) -> int:
    """Get integer from environment variable."""
    value = os.getenv(key, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass
class ExtractionConfig:
    """Voter record extraction settings."""
    # Minimum column count for a line to qualify as a tabular row
    min_columns: int = field(default_factory=lambda: _get_int_env("ECROLL_MIN_COLUMNS", 5))
    default_occupation: str = field(
        default_factory=lambda: os.getenv("ECROLL_DEFAULT_OCCUPATION", "ভোটার")
    )

    # Fan-out settings for large pastes
    chunk_lines: int = field(default_factory=lambda: _get_int_env("ECROLL_CHUNK_LINES", 400))
    max_workers: int = field(default_factory=lambda: _get_int_env("ECROLL_MAX_WORKERS", 4))

    # Optional JSON file extending the built-in glyph rules
    rules_file: str = field(default_factory=lambda: os.getenv("ECROLL_RULES_FILE", ""))

    @property
    def rules_path(self) -> Optional[Path]:
        return Path(self.rules_file) if self.rules_file else None

    def validate(self) -> None:
        """Raise ConfigurationError for settings extraction cannot run with."""
        for key, value in (
            ("ECROLL_CHUNK_LINES", self.chunk_lines),
            ("ECROLL_MAX_WORKERS", self.max_workers),
            ("ECROLL_MIN_COLUMNS", self.min_columns),
        ):
            if value < 1:
                raise ConfigurationError(f"{key} must be at least 1 (got {value})", config_key=key)


@dataclass
class Config:
    """
    Main application configuration.

    All settings are loaded from environment variables with sensible defaults.
    Set DEBUG=1 in environment to enable debug mode.
    """

    # Base directory (project root)
    base_dir: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    logs_dir: Path = field(default=None)

    # Debug mode (verbose console logging, per-row rejection details)
    debug: bool = field(default_factory=lambda: _get_bool_env("DEBUG", False))

    # File logging is opt-in; the library is usually embedded in a host app
    log_to_file: bool = field(default_factory=lambda: _get_bool_env("LOG_TO_FILE", False))

    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)

    def __post_init__(self):
        """Resolve paths after initialization."""
        if self.logs_dir is None:
            self.logs_dir = self.base_dir / os.getenv("LOG_DIR", "logs")
        elif not isinstance(self.logs_dir, Path):
            self.logs_dir = Path(self.logs_dir)


# Global config instance (lazily initialized)
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
