"""Error definitions for fuzzy_path."""

from typing import Any, Dict


class FuzzyPathError(Exception):
    """Base exception for all fuzzy_path errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class ConfigError(FuzzyPathError):
    """Configuration could not be read or failed validation."""
    pass
