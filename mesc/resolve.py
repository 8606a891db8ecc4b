"""Endpoint resolution: a config plus optional criteria in, one endpoint out.

Every function takes an optional ``config``. When omitted the config is
loaded from the environment on each call, so MESC_MODE=DISABLED fails with
MescNotEnabledError before any file is touched.
"""

from __future__ import annotations

from typing import Any, Union

from loguru import logger

from mesc.chain_ids import ChainId, to_chain_id
from mesc.config.loader import load_config
from mesc.config.schema import Endpoint, Profile, RpcConfig
from mesc.query import EndpointQuery
from mesc.utils.exceptions import InvalidChainIdError, MissingEndpointError

ChainIdLike = Union[ChainId, str, int]


def _config_or_load(config: RpcConfig | None) -> RpcConfig:
    return config if config is not None else load_config()


def _get_profile(config: RpcConfig, profile: str | None) -> Profile | None:
    if profile is None:
        return None
    found = config.profiles.get(profile)
    if found is None:
        logger.warning(f"Unknown profile {profile!r}, falling back to global defaults")
    return found


def _lookup(config: RpcConfig, name: str, source: str) -> Endpoint:
    endpoint = config.endpoints.get(name)
    if endpoint is None:
        raise MissingEndpointError(f"{source} refers to unknown endpoint {name!r}")
    return endpoint


def _network_default(
    config: RpcConfig, profile: str | None, prof: Profile | None, chain_id: ChainId
) -> Endpoint | None:
    if prof is not None and chain_id in prof.network_defaults:
        source = f"profiles[{profile!r}].network_defaults[{str(chain_id)!r}]"
        endpoint = _lookup(config, prof.network_defaults[chain_id], source)
    elif chain_id in config.network_defaults:
        source = f"network_defaults[{str(chain_id)!r}]"
        endpoint = _lookup(config, config.network_defaults[chain_id], source)
    else:
        return None
    logger.debug(f"Resolved endpoint {endpoint.name!r} via {source}")
    return endpoint


def _resolve_default(
    config: RpcConfig, profile: str | None, chain_id: ChainId | None
) -> Endpoint | None:
    """
    Precedence, highest first:
    1. profile network default for chain_id
    2. global network default for chain_id
    3. profile default endpoint
    4. global default endpoint
    With a chain_id, steps 3 and 4 only accept an endpoint on that chain or with no chain id.
    """
    prof = _get_profile(config, profile)
    if chain_id is not None:
        endpoint = _network_default(config, profile, prof, chain_id)
        if endpoint is not None:
            return endpoint

    fallbacks: list[tuple[str, str]] = []
    if prof is not None and prof.default_endpoint is not None:
        fallbacks.append((prof.default_endpoint, f"profiles[{profile!r}].default_endpoint"))
    if config.default_endpoint is not None:
        fallbacks.append((config.default_endpoint, "default_endpoint"))

    for name, source in fallbacks:
        endpoint = _lookup(config, name, source)
        if chain_id is None or endpoint.chain_id is None or endpoint.chain_id == chain_id:
            logger.debug(f"Resolved endpoint {endpoint.name!r} via {source}")
            return endpoint
        logger.debug(
            f"Skipping {source} {name!r}: chain id {endpoint.chain_id_string()} is not {chain_id}"
        )
    return None


def get_default_endpoint(
    profile: str | None = None, *, config: RpcConfig | None = None
) -> Endpoint | None:
    """Profile default endpoint, else the global default; None when neither is set."""
    return _resolve_default(_config_or_load(config), profile, None)


def get_endpoint_by_network(
    chain_id: ChainIdLike, profile: str | None = None, *, config: RpcConfig | None = None
) -> Endpoint | None:
    """Network default for a chain id or network alias, profile first; None when unset."""
    config = _config_or_load(config)
    requested = to_chain_id(chain_id, config)
    return _network_default(config, profile, _get_profile(config, profile), requested)


def get_endpoint_by_name(name: str, *, config: RpcConfig | None = None) -> Endpoint | None:
    """Direct registry lookup; None when no endpoint has that name."""
    return _config_or_load(config).endpoints.get(name)


def get_endpoint_by_query(
    query: str, profile: str | None = None, *, config: RpcConfig | None = None
) -> Endpoint | None:
    """Read free text as an endpoint name, then a network alias, then a chain id."""
    config = _config_or_load(config)
    if query in config.endpoints:
        return config.endpoints[query]
    try:
        chain_id = to_chain_id(query, config)
    except InvalidChainIdError:
        return None
    return _network_default(config, profile, _get_profile(config, profile), chain_id)


def find_endpoints(
    query: EndpointQuery | None = None, *, config: RpcConfig | None = None
) -> list[Endpoint]:
    """All endpoints matching query, sorted by name."""
    config = _config_or_load(config)
    query = query or EndpointQuery()
    endpoints = (config.endpoints[name] for name in sorted(config.endpoints))
    return [endpoint for endpoint in endpoints if query.matches(endpoint)]


def resolve_endpoint(
    config: RpcConfig | None = None,
    profile: str | None = None,
    query: EndpointQuery | None = None,
    *,
    chain_id: ChainIdLike | None = None,
) -> Endpoint:
    """
    Resolve exactly one endpoint.

    With a non-empty query, the registry is filtered and the first match by
    name wins. Otherwise the default precedence applies to chain_id (a chain
    id or network alias) and profile.

    MESC_MODE is only consulted when config is omitted; an explicit config
    resolves even while MESC is DISABLED.

    Raises:
        MescNotEnabledError: config omitted and MESC_MODE=DISABLED.
        MissingEndpointError: nothing matched or no default applies.
    """
    config = _config_or_load(config)
    requested = to_chain_id(chain_id, config) if chain_id is not None else None

    if query is not None and not query.is_empty:
        if requested is not None and query.chain_id is None:
            query = query.with_chain_id(requested)
        matches = find_endpoints(query, config=config)
        if not matches:
            raise MissingEndpointError(f"No endpoint matches {_describe_query(query)}")
        if len(matches) > 1:
            logger.debug(
                f"{len(matches)} endpoints match {_describe_query(query)}, using {matches[0].name!r}"
            )
        return matches[0]

    endpoint = _resolve_default(config, profile, requested)
    if endpoint is None:
        target = f"chain id {requested}" if requested is not None else "default"
        scope = f" in profile {profile!r}" if profile is not None else ""
        raise MissingEndpointError(f"No {target} endpoint configured{scope}")
    return endpoint


def get_global_metadata(*, config: RpcConfig | None = None) -> dict[str, Any]:
    return dict(_config_or_load(config).global_metadata)


def _describe_query(query: EndpointQuery) -> str:
    parts = []
    if query.chain_id is not None:
        parts.append(f"chain_id={query.chain_id}")
    if query.name_contains is not None:
        parts.append(f"name_contains={query.name_contains!r}")
    if query.url_contains is not None:
        parts.append(f"url_contains={query.url_contains!r}")
    return "query(" + ", ".join(parts) + ")"
