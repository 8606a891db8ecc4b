"""Endpoint filter built one validated step at a time."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from mesc.chain_ids import ChainId
from mesc.config.schema import Endpoint
from mesc.utils.exceptions import InvalidInputError


@dataclass(frozen=True)
class EndpointQuery:
    """
    Filter over the endpoint registry. Unset fields match everything.

    Each with_* step validates its argument and returns a new query, so a
    failed step leaves the previous query untouched. Steps commute.
    """
    chain_id: ChainId | None = None
    name_contains: str | None = None
    url_contains: str | None = None

    def with_chain_id(self, chain_id: Union[ChainId, str, int]) -> "EndpointQuery":
        return replace(self, chain_id=ChainId(chain_id))

    def with_name(self, query: str) -> "EndpointQuery":
        return replace(self, name_contains=_require_str(query, "name_contains"))

    def with_url(self, query: str) -> "EndpointQuery":
        return replace(self, url_contains=_require_str(query, "url_contains"))

    @property
    def is_empty(self) -> bool:
        return self.chain_id is None and self.name_contains is None and self.url_contains is None

    def matches(self, endpoint: Endpoint) -> bool:
        if self.chain_id is not None and endpoint.chain_id != self.chain_id:
            return False
        if self.name_contains is not None and self.name_contains not in endpoint.name:
            return False
        if self.url_contains is not None and self.url_contains not in endpoint.url:
            return False
        return True


def _require_str(value: object, field: str) -> str:
    if not isinstance(value, str):
        raise InvalidInputError(f"{field} must be a string, got {type(value).__name__}", field=field)
    return value
