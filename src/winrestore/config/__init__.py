"""Configuration loading and path policy."""

from winrestore.config.config import DEFAULT_COPY_EXCLUDE_PATTERNS, Config

__all__ = ["Config", "DEFAULT_COPY_EXCLUDE_PATTERNS"]
