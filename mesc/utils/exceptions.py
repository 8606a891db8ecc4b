"""
Exception hierarchy and error formatting utilities for mesc.

Provides:
- One base class (MescError) with error codes and categories
- A subclass per failure kind of config loading, validation and resolution
- Safe error message formatting (endpoint URLs often embed API keys)
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    DISABLED = "disabled"
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    IO = "io"
    UNSUPPORTED = "unsupported"


class MescError(Exception):
    """Base exception for all mesc errors."""

    def __init__(
        self,
        message: str,
        code: str = "MESC_ERROR",
        category: ErrorCategory = ErrorCategory.CONFIGURATION,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class MescNotEnabledError(MescError):
    """MESC is disabled; nothing can be resolved."""

    def __init__(self, message: str = "MESC is not enabled (MESC_MODE=DISABLED)"):
        super().__init__(message, code="MESC_NOT_ENABLED", category=ErrorCategory.DISABLED)


class InvalidConfigModeError(MescError):
    """Config mode is missing or not one of PATH, ENV, DISABLED."""

    def __init__(self, mode: str | None = None):
        if mode:
            message = f"Invalid config mode: {mode!r} (expected PATH, ENV or DISABLED)"
        else:
            message = "No config mode: set MESC_MODE, MESC_PATH or MESC_ENV"
        super().__init__(
            message,
            code="INVALID_CONFIG_MODE",
            category=ErrorCategory.CONFIGURATION,
            details={"mode": mode},
        )
        self.mode = mode


class InvalidChainIdError(MescError):
    """A chain id is not a string of decimal digits."""

    def __init__(self, raw: Any, reason: str = "must contain only decimal digits"):
        super().__init__(
            f"Invalid chain id {raw!r}: {reason}",
            code="INVALID_CHAIN_ID",
            category=ErrorCategory.VALIDATION,
            details={"raw": str(raw), "reason": reason},
        )
        self.raw = raw


class IntegrityError(MescError):
    """Config document has dangling references or inconsistent entries."""

    def __init__(self, issues: list[str], code: str = "INTEGRITY_ERROR"):
        issues = list(issues)
        if len(issues) == 1:
            message = issues[0]
        else:
            message = f"{len(issues)} integrity issues: " + "; ".join(issues)
        super().__init__(
            message,
            code=code,
            category=ErrorCategory.VALIDATION,
            details={"issues": issues},
        )
        self.issues = issues


class VersionMismatchError(IntegrityError):
    """Config document declares a mesc_version this resolver does not understand."""

    def __init__(self, version: str, reason: str):
        super().__init__([f"Unsupported mesc_version {version!r}: {reason}"], code="VERSION_MISMATCH")
        self.details["version"] = version
        self.version = version


class MissingEndpointError(MescError):
    """Resolution produced no endpoint."""

    def __init__(self, detail: str):
        super().__init__(detail, code="MISSING_ENDPOINT", category=ErrorCategory.NOT_FOUND)


class ConfigIOError(MescError):
    """Reading the config file failed."""

    def __init__(self, path: str, cause: BaseException | None = None):
        reason = cause.strerror if isinstance(cause, OSError) and cause.strerror else str(cause or "read failed")
        super().__init__(
            f"Could not read config file {path}: {reason}",
            code="IO_ERROR",
            category=ErrorCategory.IO,
            details={"path": path},
        )
        self.path = path


class EnvReadError(MescError):
    """Reading the inline config from the environment failed."""

    def __init__(self, variable: str, reason: str):
        super().__init__(
            f"Could not read {variable}: {reason}",
            code="ENV_READ_ERROR",
            category=ErrorCategory.IO,
            details={"variable": variable},
        )


class InvalidJsonError(MescError):
    """Config text is not JSON, or not a valid MESC document."""

    def __init__(self, source: str, reason: str, errors: list[str] | None = None):
        details: dict[str, Any] = {"source": source}
        if errors:
            details["errors"] = errors
        super().__init__(
            f"Invalid config JSON from {source}: {reason}",
            code="INVALID_JSON",
            category=ErrorCategory.CONFIGURATION,
            details=details,
        )


class FeatureNotImplementedError(MescError):
    """A recognised input form that is deliberately unsupported."""

    def __init__(self, feature: str):
        super().__init__(
            f"Not implemented: {feature}",
            code="NOT_IMPLEMENTED",
            category=ErrorCategory.UNSUPPORTED,
            details={"feature": feature},
        )
        self.feature = feature


class InvalidInputError(MescError):
    """Malformed argument not covered by a more specific error."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="INVALID_INPUT", category=ErrorCategory.VALIDATION, details=details)


_SENSITIVE_PATTERNS = [
    re.compile(r"(api[_-]?key|token|secret|password|auth)[=:]\s*['\"]?([^\s'\"&]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    re.compile(r"(?<=://)[^/\s:@]+:[^/\s@]+(?=@)"),
    re.compile(r"(?=[a-zA-Z0-9_-]*[a-zA-Z_])[a-zA-Z0-9_-]{32,}"),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove credentials (API keys, basic-auth userinfo, tokens) from error messages."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def format_error(exc: Exception, include_details: bool = False) -> str:
    """Format an exception for terminal output."""
    if isinstance(exc, MescError):
        code, category = exc.code, exc.category.value
        message = sanitize_error_message(exc.message)
    else:
        code, category = "INTERNAL_ERROR", "fatal"
        message = sanitize_error_message(str(exc))

    if include_details:
        return f"Error [{code}] ({category}): {message}"
    return f"Error: {message}"
