"""Exceptions raised by css-audit."""

from pathlib import Path


class CssAuditError(Exception):
    """Base class for all css-audit errors."""


class ConfigurationError(CssAuditError):
    """Raised when configuration is invalid (e.g. a bad ignore pattern)."""


class ExtractionError(CssAuditError):
    """Raised when a file cannot be read or its classes cannot be extracted."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{path}: {message}")
