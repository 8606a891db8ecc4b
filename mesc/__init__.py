"""
mesc - Multiple Endpoint Shared Configuration.

One JSON document tells every tool which RPC endpoint to use.
"""

__version__ = "0.1.0"

from mesc.chain_ids import MAX_CHAIN_ID_DIGITS, NULL_CHAIN_ID, ChainId, to_chain_id
from mesc.config import (
    MESC_VERSION,
    ConfigMode,
    Endpoint,
    MescSettings,
    Profile,
    RpcConfig,
    get_config_mode,
    is_mesc_enabled,
    load_config,
    load_config_from_path,
    parse_config,
    save_config,
    validate_config,
)
from mesc.query import EndpointQuery
from mesc.resolve import (
    find_endpoints,
    get_default_endpoint,
    get_endpoint_by_name,
    get_endpoint_by_network,
    get_endpoint_by_query,
    get_global_metadata,
    resolve_endpoint,
)
from mesc.utils.exceptions import (
    ConfigIOError,
    EnvReadError,
    FeatureNotImplementedError,
    IntegrityError,
    InvalidChainIdError,
    InvalidConfigModeError,
    InvalidInputError,
    InvalidJsonError,
    MescError,
    MescNotEnabledError,
    MissingEndpointError,
    VersionMismatchError,
)

__all__ = [
    "__version__",
    "MAX_CHAIN_ID_DIGITS",
    "MESC_VERSION",
    "NULL_CHAIN_ID",
    "ChainId",
    "ConfigIOError",
    "ConfigMode",
    "Endpoint",
    "EndpointQuery",
    "EnvReadError",
    "FeatureNotImplementedError",
    "IntegrityError",
    "InvalidChainIdError",
    "InvalidConfigModeError",
    "InvalidInputError",
    "InvalidJsonError",
    "MescError",
    "MescNotEnabledError",
    "MescSettings",
    "MissingEndpointError",
    "Profile",
    "RpcConfig",
    "VersionMismatchError",
    "find_endpoints",
    "get_config_mode",
    "get_default_endpoint",
    "get_endpoint_by_name",
    "get_endpoint_by_network",
    "get_endpoint_by_query",
    "get_global_metadata",
    "is_mesc_enabled",
    "load_config",
    "load_config_from_path",
    "parse_config",
    "resolve_endpoint",
    "save_config",
    "to_chain_id",
    "validate_config",
]
