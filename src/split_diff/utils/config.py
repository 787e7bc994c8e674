from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

from .logger import log


class ConfigError(Exception):
    """Configuration validation error."""

    pass


@dataclass
class PathsConfig:
    """Optional files to preload into the left (original) and right (modified) panes."""

    left_path: str | None = None
    right_path: str | None = None

    @classmethod
    def from_args(cls, args) -> PathsConfig:
        """Create PathsConfig from command line arguments."""
        return cls(left_path=args.left, right_path=args.right)

    @classmethod
    def from_env(cls) -> PathsConfig:
        """Create PathsConfig from environment variables."""
        return cls(
            left_path=os.environ.get('SPLIT_DIFF_LEFT'),
            right_path=os.environ.get('SPLIT_DIFF_RIGHT'),
        )

    def merge_with_env(self) -> PathsConfig:
        """Merge with environment variables, keeping existing values if they exist."""
        return PathsConfig(
            left_path=self.left_path or os.environ.get('SPLIT_DIFF_LEFT'),
            right_path=self.right_path or os.environ.get('SPLIT_DIFF_RIGHT'),
        )


class Config:
    """Split Diff configuration with environment variable support and validation."""

    # Default values
    _DEFAULT_DEBOUNCE_MS: Final[int] = 400
    _DEFAULT_CONTEXT_LINES: Final[int] = 3
    _DEFAULT_MAX_PREVIEW_CHARS: Final[int] = 500
    _DEFAULT_MAX_RENDER_ROWS: Final[int] = 5000
    _DEFAULT_MAX_PATH_LENGTH: Final[int] = 4096
    _DEFAULT_LIVE: Final[bool] = True

    # Validation bounds
    _MIN_DEBOUNCE_MS: Final[int] = 0
    _MAX_DEBOUNCE_MS: Final[int] = 5000
    _MIN_CONTEXT_LINES: Final[int] = 0
    _MAX_CONTEXT_LINES: Final[int] = 50
    _MIN_PREVIEW_CHARS: Final[int] = 50
    _MAX_PREVIEW_CHARS: Final[int] = 10000
    _MIN_RENDER_ROWS: Final[int] = 100
    _MAX_RENDER_ROWS: Final[int] = 100000
    _MIN_MAX_PATH_LENGTH: Final[int] = 1024
    _MAX_MAX_PATH_LENGTH: Final[int] = 65536

    _TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
    _FALSE_VALUES: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})

    def __init__(self):
        """Initialize configuration with environment variable overrides."""
        self.debounce_ms = self._get_int_env("SPLIT_DIFF_DEBOUNCE_MS", self._DEFAULT_DEBOUNCE_MS)
        self.context_lines = self._get_int_env("SPLIT_DIFF_CONTEXT_LINES", self._DEFAULT_CONTEXT_LINES)
        self.max_preview_chars = self._get_int_env("SPLIT_DIFF_MAX_PREVIEW_CHARS", self._DEFAULT_MAX_PREVIEW_CHARS)
        self.max_render_rows = self._get_int_env("SPLIT_DIFF_MAX_RENDER_ROWS", self._DEFAULT_MAX_RENDER_ROWS)
        self.max_path_length = self._get_int_env("SPLIT_DIFF_MAX_PATH_LENGTH", self._DEFAULT_MAX_PATH_LENGTH)
        self.live = self._get_bool_env("SPLIT_DIFF_LIVE", self._DEFAULT_LIVE)

        self._validate_all()

    def _get_int_env(self, key: str, default: int) -> int:
        """Get integer environment variable with fallback to default."""
        value = os.environ.get(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError as e:
            log.warning(f"Invalid integer value for {key}='{value}', using default {default}: {e}")
            return default

    def _get_bool_env(self, key: str, default: bool) -> bool:
        """Get boolean environment variable with fallback to default."""
        value = os.environ.get(key)
        if value is None:
            return default

        normalized = value.strip().lower()
        if normalized in self._TRUE_VALUES:
            return True
        if normalized in self._FALSE_VALUES:
            return False
        log.warning(f"Invalid boolean value for {key}='{value}', using default {default}")
        return default

    def _validate_all(self) -> None:
        """Validate all configuration values."""
        self._validate_int("debounce_ms", self.debounce_ms, self._MIN_DEBOUNCE_MS, self._MAX_DEBOUNCE_MS)
        self._validate_int("context_lines", self.context_lines, self._MIN_CONTEXT_LINES, self._MAX_CONTEXT_LINES)
        self._validate_int(
            "max_preview_chars", self.max_preview_chars, self._MIN_PREVIEW_CHARS, self._MAX_PREVIEW_CHARS
        )
        self._validate_int("max_render_rows", self.max_render_rows, self._MIN_RENDER_ROWS, self._MAX_RENDER_ROWS)
        self._validate_int(
            "max_path_length", self.max_path_length, self._MIN_MAX_PATH_LENGTH, self._MAX_MAX_PATH_LENGTH
        )
        if not isinstance(self.live, bool):
            raise ConfigError(f"live must be a boolean, got {type(self.live).__name__}")

    def _validate_int(self, name: str, value: int, min_val: int, max_val: int) -> None:
        """Validate integer configuration value."""
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigError(f"{name} must be an integer, got {type(value).__name__}")
        if not (min_val <= value <= max_val):
            raise ConfigError(f"{name} must be between {min_val} and {max_val}, got {value}")

    def __repr__(self) -> str:
        """String representation of configuration."""
        return (
            f"Config(debounce_ms={self.debounce_ms}, "
            f"context_lines={self.context_lines}, "
            f"max_preview_chars={self.max_preview_chars}, "
            f"max_render_rows={self.max_render_rows}, "
            f"max_path_length={self.max_path_length}, "
            f"live={self.live})"
        )


# Global configuration instance
config = Config()
