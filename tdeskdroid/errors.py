"""Error codes and error handling utilities for TDeskDroid."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for TDeskDroid operations."""

    # File system errors
    FILE_NOT_FOUND = auto()
    FILE_ACCESS_DENIED = auto()
    DISK_FULL = auto()
    PATH_INVALID = auto()

    # Desktop theme errors
    ARCHIVE_CORRUPT = auto()
    ARCHIVE_UNSAFE_PATH = auto()
    MANIFEST_MISSING = auto()
    MANIFEST_UNREADABLE = auto()
    BACKGROUND_UNREADABLE = auto()

    # Mapping errors
    MAP_MISSING = auto()
    MAP_UNREADABLE = auto()

    # Output errors
    WRITE_FAILED = auto()
    OPERATION_FAILED = auto()

    # Configuration errors
    CONFIG_INVALID = auto()
    CONFIG_MISSING = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.FILE_NOT_FOUND: "The file was not found. It may have been moved or deleted.",
    ErrorCode.FILE_ACCESS_DENIED: "Access denied. Check file permissions or if the file is read-only.",
    ErrorCode.DISK_FULL: "The destination disk is full. Free up space and try again.",
    ErrorCode.PATH_INVALID: "The specified path is invalid or inaccessible.",

    ErrorCode.ARCHIVE_CORRUPT: "The theme archive is not a valid ZIP file.",
    ErrorCode.ARCHIVE_UNSAFE_PATH: "The theme archive contains an entry outside its own folder.",
    ErrorCode.MANIFEST_MISSING: "The theme archive has no colors.tdesktop-theme file.",
    ErrorCode.MANIFEST_UNREADABLE: "colors.tdesktop-theme could not be read as text.",
    ErrorCode.BACKGROUND_UNREADABLE: "The theme background image could not be decoded.",

    ErrorCode.MAP_MISSING: "theme.map was not found or has no rules. Nothing can be converted.",
    ErrorCode.MAP_UNREADABLE: "A .map file could not be read as UTF-8 text.",

    ErrorCode.WRITE_FAILED: "Failed to write the converted theme. Check the output folder.",
    ErrorCode.OPERATION_FAILED: "Operation failed. See details for more information.",

    ErrorCode.CONFIG_INVALID: "tdeskdroid.yaml is invalid. Fix or remove it.",
    ErrorCode.CONFIG_MISSING: "The configuration file named by TDESKDROID_CONFIG does not exist.",
}


@dataclass
class TDeskDroidError(Exception):
    """Base exception for TDeskDroid with error code and context."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")
        if not self.suggestion and self.code in ERROR_MESSAGES:
            self.suggestion = ERROR_MESSAGES[self.code]

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f"\nFile: {self.path}")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"\nDetails: {details_str}")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "code": self.code.name,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "details": self.details,
            "suggestion": self.suggestion,
        }


def classify_exception(exc: Exception, path: Path | None = None) -> TDeskDroidError:
    """Classify a generic exception into a TDeskDroidError with appropriate code."""
    if isinstance(exc, TDeskDroidError):
        return exc
    exc_name = type(exc).__name__
    exc_str = str(exc).lower()

    if isinstance(exc, FileNotFoundError) or "no such file" in exc_str:
        return TDeskDroidError(ErrorCode.FILE_NOT_FOUND, path=path, details={"original": exc_str})
    if isinstance(exc, PermissionError) or "permission denied" in exc_str:
        return TDeskDroidError(ErrorCode.FILE_ACCESS_DENIED, path=path, details={"original": exc_str})
    if "disk full" in exc_str or "no space left" in exc_str:
        return TDeskDroidError(ErrorCode.DISK_FULL, path=path, details={"original": exc_str})
    if isinstance(exc, (NotADirectoryError, IsADirectoryError)):
        return TDeskDroidError(ErrorCode.PATH_INVALID, path=path, details={"original": exc_str})

    return TDeskDroidError(
        ErrorCode.OPERATION_FAILED,
        message=f"{exc_name}: {exc}",
        path=path,
        details={"original": exc_str},
    )


def format_error_for_user(error: TDeskDroidError | Exception) -> str:
    """Format an error for the console with an actionable suggestion."""
    if isinstance(error, TDeskDroidError):
        parts = [error.message]
        if error.suggestion and error.suggestion != error.message:
            parts.append(f"\n{error.suggestion}")
        if error.path:
            parts.append(f"\nFile: {error.path}")
        return "".join(parts)

    classified = classify_exception(error)
    return format_error_for_user(classified)
