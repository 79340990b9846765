"""Exception hierarchy for codebase analyzer."""

from pathlib import Path
from typing import Dict, List, Optional, Union


class AnalyzerError(Exception):
    """Base exception for all analyzer errors."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ReadFailure(AnalyzerError):
    """A single source file could not be opened or decoded."""

    def __init__(self, path: Union[str, Path], cause: BaseException):
        self.path = str(path)
        self.cause = cause
        super().__init__(
            f"Failed to read {self.path}",
            details={"reason": str(cause)},
        )


class TranslationFileError(AnalyzerError):
    """The localization file is unreadable, not JSON, or not an object."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = str(path)
        super().__init__(
            f"Failed to read or parse i18n file: {self.path}",
            details={"reason": reason},
        )


class InvalidDirectoryError(AnalyzerError):
    """The analysis root does not exist or is not a directory."""

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(f"Not a directory: {self.path}")


class CancellationRequested(AnalyzerError):
    """Raised at a cancellation checkpoint once cancellation was requested."""

    def __init__(self, message: str = "Operation cancelled by user"):
        super().__init__(message)


class ConfigValidationError(AnalyzerError):
    """Raised when configuration validation fails."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Configuration validation failed: {'; '.join(errors)}")
