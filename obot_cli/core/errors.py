"""
Error types shared by the resource model and the CLI.
"""

from typing import Any


class CLIError(Exception):
    """Base error class for CLI errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result: dict[str, Any] = {"error": self.message}
        if self.details:
            result["details"] = self.details
        return result


class DecodeError(CLIError):
    """Malformed or type-mismatched wire data."""

    def __init__(self, message: str, key: str | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.key = key

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result = super().to_dict()
        if self.key:
            result["key"] = self.key
        return result
