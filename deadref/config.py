"""Configuration management for deadref.

Loads environment variables (optionally from a .env file) and provides
centralized config access.
"""
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

__version__ = "1.0.0"

_TRUE_VALUES = {"1", "true", "yes", "on"}

# Characters found in binary names ("com.x.Outer$Inner"), member names
# ("<init>") or descriptors ("([Ljava/lang/String;)V")
_RESERVED_DELIMITERS = set(".$/;[]<>()_")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUE_VALUES


class Config:
    """Configuration loader with environment variable support."""

    def __init__(self, env_path: Optional[Path] = None):
        """Initialize config by loading .env file.

        Args:
            env_path: Explicit .env location (defaults to project root)
        """
        if env_path is None:
            env_path = Path(__file__).parent.parent / ".env"
        load_dotenv(env_path)

    @property
    def verbose(self) -> bool:
        """Whether diagnostic log lines are printed.

        Returns:
            True if DEADREF_VERBOSE is set to a truthy value
        """
        return _env_flag("DEADREF_VERBOSE")

    @property
    def member_delimiter(self) -> str:
        """Separator between class and member in CLI element notation.

        Returns:
            Delimiter string, '#' unless overridden

        Raises:
            ValueError: If DEADREF_MEMBER_DELIMITER is not a single usable character
        """
        delimiter = os.getenv("DEADREF_MEMBER_DELIMITER", "#")
        if len(delimiter) != 1:
            raise ValueError(
                f"DEADREF_MEMBER_DELIMITER must be exactly one character, got {delimiter!r}"
            )
        if delimiter in _RESERVED_DELIMITERS or delimiter.isspace() or delimiter.isalnum():
            raise ValueError(
                f"DEADREF_MEMBER_DELIMITER cannot be {delimiter!r}: it can occur inside "
                "binary names, member names or signatures"
            )
        return delimiter

    @property
    def force_terminal(self) -> bool:
        """Force Rich terminal rendering (useful when output is piped)."""
        return _env_flag("DEADREF_FORCE_TERMINAL")


# Singleton instance
_config = None


def get_config() -> Config:
    """Get or create singleton Config instance.

    Returns:
        Config instance
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config():
    """Drop the cached Config so the next get_config() reloads the .env file."""
    global _config
    _config = None
