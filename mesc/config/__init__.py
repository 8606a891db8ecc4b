"""Configuration module for mesc."""

from mesc.config.loader import (
    ConfigMode,
    MescSettings,
    get_config_mode,
    is_mesc_enabled,
    load_config,
    load_config_from_path,
    parse_config,
    read_config_text,
    read_settings,
    save_config,
)
from mesc.config.schema import MESC_VERSION, Endpoint, Profile, RpcConfig
from mesc.config.validate import validate_config

__all__ = [
    "MESC_VERSION",
    "ConfigMode",
    "Endpoint",
    "MescSettings",
    "Profile",
    "RpcConfig",
    "get_config_mode",
    "is_mesc_enabled",
    "load_config",
    "load_config_from_path",
    "parse_config",
    "read_config_text",
    "read_settings",
    "save_config",
    "validate_config",
]
