"""Configuration schema using Pydantic.

The in-memory shape of a MESC document: a registry of named endpoints,
global and per-profile defaults, network aliases and free-form metadata.
Integrity (dangling names, chain id consistency) is checked by
mesc.config.validate, not at construction.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mesc.chain_ids import ChainIdField

# Declared by documents this library writes; bumped at release time.
MESC_VERSION = "MESC 1.0"


class Endpoint(BaseModel):
    """A named RPC address with an optional chain id and open-ended metadata."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    url: str
    chain_id: ChainIdField | None = None
    endpoint_metadata: dict[str, Any] = Field(default_factory=dict)

    def chain_id_string(self) -> str:
        """Chain id digits, or "-" when the endpoint has none."""
        return str(self.chain_id) if self.chain_id is not None else "-"


class Profile(BaseModel):
    """Named override context with its own default endpoint and per-chain defaults."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    default_endpoint: str | None = None
    network_defaults: dict[ChainIdField, str] = Field(default_factory=dict)


class RpcConfig(BaseModel):
    """Whole MESC document."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    mesc_version: str = MESC_VERSION
    default_endpoint: str | None = None
    network_defaults: dict[ChainIdField, str] = Field(default_factory=dict)
    endpoints: dict[str, Endpoint] = Field(default_factory=dict)
    network_names: dict[str, ChainIdField] = Field(default_factory=dict)
    profiles: dict[str, Profile] = Field(default_factory=dict)
    global_metadata: dict[str, Any] = Field(default_factory=dict)

    def to_document(self) -> dict[str, Any]:
        """JSON-ready dict in the on-disk document layout."""
        return self.model_dump(mode="json")

    def serialize(self, indent: int | None = None) -> str:
        """Serialize to JSON text; metadata entries are written back verbatim."""
        return json.dumps(self.to_document(), indent=indent, ensure_ascii=False)

    def validate_integrity(self, *, strict_chain_ids: bool = True) -> None:
        """Raise IntegrityError when the document has dangling or inconsistent references."""
        from mesc.config.validate import validate_config

        validate_config(self, strict_chain_ids=strict_chain_ids)
