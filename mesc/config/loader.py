"""Configuration loading utilities.

Decides where the MESC document comes from (a file, an inline environment
value, or nowhere), reads it once and turns every I/O or parse failure into
a MescError.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path

from loguru import logger
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from mesc.config.schema import RpcConfig
from mesc.config.validate import validate_config
from mesc.utils.exceptions import (
    ConfigIOError,
    EnvReadError,
    InvalidConfigModeError,
    InvalidJsonError,
    MescError,
    MescNotEnabledError,
)


class ConfigMode(str, Enum):
    """Source of the config document."""
    PATH = "PATH"
    ENV = "ENV"
    DISABLED = "DISABLED"


class MescSettings(BaseSettings):
    """MESC_* environment variables."""
    mode: str | None = None  # MESC_MODE: PATH | ENV | DISABLED
    path: str | None = None  # MESC_PATH: config file location
    env: str | None = None  # MESC_ENV: the whole document as JSON text
    strict_chain_ids: bool = True  # MESC_STRICT_CHAIN_IDS: network default must match endpoint chain id

    model_config = SettingsConfigDict(env_prefix="MESC_")


def read_settings() -> MescSettings:
    """
    Read MescSettings from the environment.

    Raises:
        EnvReadError: a MESC_* variable holds a value of the wrong type.
    """
    try:
        return MescSettings()
    except ValidationError as e:
        err = e.errors()[0]
        field = str(err["loc"][0]) if err["loc"] else "settings"
        raise EnvReadError(f"MESC_{field.upper()}", err["msg"]) from e


def get_config_mode(settings: MescSettings | None = None) -> ConfigMode:
    """
    Pick the config mode.

    An explicit MESC_MODE wins. Without one, a non-empty MESC_PATH means PATH
    and a non-empty MESC_ENV means ENV.

    Raises:
        InvalidConfigModeError: MESC_MODE is unrecognised, or nothing is configured.
    """
    settings = settings or read_settings()
    raw = (settings.mode or "").strip()
    if raw:
        try:
            return ConfigMode(raw.upper())
        except ValueError:
            raise InvalidConfigModeError(raw) from None
    if settings.path:
        return ConfigMode.PATH
    if settings.env:
        return ConfigMode.ENV
    raise InvalidConfigModeError(None)


def is_mesc_enabled(settings: MescSettings | None = None) -> bool:
    """True when a config source is configured and not DISABLED."""
    try:
        return get_config_mode(settings) is not ConfigMode.DISABLED
    except MescError:
        return False


def read_config_text(
    mode: ConfigMode,
    *,
    path: str | Path | None = None,
    inline: str | None = None,
) -> str:
    """
    Return the raw document text for the given mode.

    DISABLED raises MescNotEnabledError before any file or environment access.
    """
    if mode is ConfigMode.DISABLED:
        raise MescNotEnabledError()
    if mode is ConfigMode.PATH:
        if not path:
            raise EnvReadError("MESC_PATH", "not set")
        file_path = Path(path).expanduser()
        try:
            return file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise InvalidJsonError(str(file_path), "file is not UTF-8 text") from e
        except OSError as e:
            raise ConfigIOError(str(file_path), e) from e
    if inline is None or not inline.strip():
        raise EnvReadError("MESC_ENV", "not set")
    return inline


def parse_config(text: str, source: str = "<string>") -> RpcConfig:
    """Parse document text into an RpcConfig (no integrity check)."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidJsonError(source, f"{e.msg} at line {e.lineno} column {e.colno}") from e
    if not isinstance(data, dict):
        raise InvalidJsonError(source, "document must be a JSON object")
    try:
        return RpcConfig.model_validate(data)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        ]
        raise InvalidJsonError(source, "document does not match the MESC schema", errors) from e


def load_config(settings: MescSettings | None = None, *, validate: bool = True) -> RpcConfig:
    """
    Load the MESC config selected by the environment.

    Args:
        settings: Pre-read settings. Read from the environment if not provided.
        validate: Run the integrity validator on the loaded document.

    Returns:
        A new RpcConfig on every call.
    """
    settings = settings or read_settings()
    mode = get_config_mode(settings)
    text = read_config_text(mode, path=settings.path, inline=settings.env)
    source = str(Path(settings.path).expanduser()) if mode is ConfigMode.PATH else "MESC_ENV"
    config = parse_config(text, source)
    if validate:
        validate_config(config, strict_chain_ids=settings.strict_chain_ids)
    logger.debug(f"Loaded MESC config from {source} ({len(config.endpoints)} endpoints)")
    return config


def load_config_from_path(
    path: str | Path,
    *,
    validate: bool = True,
    strict_chain_ids: bool = True,
) -> RpcConfig:
    """Load a config file directly, ignoring MESC_MODE."""
    text = read_config_text(ConfigMode.PATH, path=path)
    config = parse_config(text, str(Path(path).expanduser()))
    if validate:
        validate_config(config, strict_chain_ids=strict_chain_ids)
    return config


def save_config(config: RpcConfig, config_path: str | Path) -> Path:
    """
    Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Destination file; parent directories are created.
    """
    path = Path(config_path).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(config.serialize(indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise ConfigIOError(str(path), e) from e
    logger.debug(f"Saved MESC config to {path}")
    return path
