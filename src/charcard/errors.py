"""Exception hierarchy shared by the card toolkit."""

from __future__ import annotations

from typing import Any, Dict, List


class CardError(Exception):
    """Base class for every error raised by ``charcard``."""


class CardSyntaxError(CardError):
    """Input text is not a well-formed JSON object."""

    def __init__(self, diagnostic: str) -> None:
        super().__init__(diagnostic)
        self.diagnostic = diagnostic


class CardValidationError(CardError):
    """Valid JSON that does not satisfy the requested card schema."""

    def __init__(self, errors: List[Dict[str, Any]], schema_name: str = "card") -> None:
        self.errors = errors
        self.schema_name = schema_name
        count = len(errors)
        noun = "error" if count == 1 else "errors"
        super().__init__(f"{count} validation {noun} for {schema_name}")


class ConfigError(CardError):
    """Settings file could not be read or contains invalid values."""
