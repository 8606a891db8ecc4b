"""Utility functions for mesc."""

from mesc.utils.exceptions import (
    MescError,
    MescNotEnabledError,
    InvalidConfigModeError,
    InvalidChainIdError,
    IntegrityError,
    VersionMismatchError,
    MissingEndpointError,
    ConfigIOError,
    EnvReadError,
    InvalidJsonError,
    FeatureNotImplementedError,
    InvalidInputError,
    ErrorCategory,
    sanitize_error_message,
    format_error,
)

__all__ = [
    "MescError",
    "MescNotEnabledError",
    "InvalidConfigModeError",
    "InvalidChainIdError",
    "IntegrityError",
    "VersionMismatchError",
    "MissingEndpointError",
    "ConfigIOError",
    "EnvReadError",
    "InvalidJsonError",
    "FeatureNotImplementedError",
    "InvalidInputError",
    "ErrorCategory",
    "sanitize_error_message",
    "format_error",
]
