"""Referential integrity checks for a loaded RpcConfig."""

from __future__ import annotations

import re

from loguru import logger

from mesc.config.schema import RpcConfig
from mesc.utils.exceptions import IntegrityError, VersionMismatchError

SUPPORTED_MAJOR_VERSION = 1

_VERSION_RE = re.compile(r"^(?:MESC )?(?P<major>[0-9]+)\.(?P<minor>[0-9]+)(?:\.[0-9]+)?$")


def check_mesc_version(version: str) -> None:
    """Accept "MESC <major>.<minor>" or "<major>.<minor>[.<patch>]" up to the supported major."""
    if not isinstance(version, str) or not version.strip():
        raise VersionMismatchError(str(version), "missing version")
    match = _VERSION_RE.match(version.strip())
    if match is None:
        raise VersionMismatchError(version, "not a version string")
    if int(match.group("major")) > SUPPORTED_MAJOR_VERSION:
        raise VersionMismatchError(
            version, f"newer than supported major version {SUPPORTED_MAJOR_VERSION}"
        )


def collect_integrity_issues(config: RpcConfig, *, strict_chain_ids: bool = True) -> list[str]:
    """Return every integrity problem found in config, in a stable order."""
    issues: list[str] = []
    endpoints = config.endpoints

    for key in sorted(endpoints):
        if endpoints[key].name != key:
            issues.append(f"endpoint key {key!r} does not match endpoint name {endpoints[key].name!r}")

    if config.default_endpoint is not None and config.default_endpoint not in endpoints:
        issues.append(f"default_endpoint {config.default_endpoint!r} is not a known endpoint")

    issues.extend(
        _check_network_defaults(config, config.network_defaults, "network_defaults", strict_chain_ids)
    )

    for profile_name in sorted(config.profiles):
        profile = config.profiles[profile_name]
        where = f"profiles[{profile_name!r}]"
        if profile.default_endpoint is not None and profile.default_endpoint not in endpoints:
            issues.append(f"{where}.default_endpoint {profile.default_endpoint!r} is not a known endpoint")
        issues.extend(
            _check_network_defaults(
                config, profile.network_defaults, f"{where}.network_defaults", strict_chain_ids
            )
        )
    return issues


def _check_network_defaults(
    config: RpcConfig,
    network_defaults: dict,
    where: str,
    strict_chain_ids: bool,
) -> list[str]:
    issues: list[str] = []
    for chain_id in sorted(network_defaults):
        name = network_defaults[chain_id]
        endpoint = config.endpoints.get(name)
        if endpoint is None:
            issues.append(f"{where}[{str(chain_id)!r}] {name!r} is not a known endpoint")
            continue
        # An endpoint without a chain id may serve as any network's default.
        if endpoint.chain_id is None or endpoint.chain_id == chain_id:
            continue
        mismatch = (
            f"{where}[{str(chain_id)!r}] {name!r} has chain id {str(endpoint.chain_id)!r}"
        )
        if strict_chain_ids:
            issues.append(mismatch)
        else:
            logger.warning(f"Ignoring chain id mismatch: {mismatch}")
    return issues


def validate_config(config: RpcConfig, *, strict_chain_ids: bool = True) -> None:
    """
    Check a config document without modifying it.

    Raises:
        VersionMismatchError: mesc_version is missing, malformed or too new.
        IntegrityError: one or more dangling or inconsistent references; all are listed in .issues.
    """
    check_mesc_version(config.mesc_version)
    issues = collect_integrity_issues(config, strict_chain_ids=strict_chain_ids)
    if issues:
        raise IntegrityError(issues)
    logger.debug(f"Config valid: {len(config.endpoints)} endpoints, {len(config.profiles)} profiles")
