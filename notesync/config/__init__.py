"""Configuration management for notesync."""

from .manager import (
    DEFAULT_CONFIG,
    DEFAULT_EXTENSIONS,
    load_config,
    parse_extensions,
)

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_EXTENSIONS",
    "load_config",
    "parse_extensions",
]
