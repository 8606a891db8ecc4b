"""Chain ids: arbitrary-precision decimal strings with numeric ordering.

Chain ids on some networks do not fit in 64 bits, so they are kept as the
digit string they were written as. Ordering left-pads both sides with zeros
to MAX_CHAIN_ID_DIGITS and compares the padded strings, which matches
numeric order without parsing into a fixed-width integer.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Annotated, Any, Union

from pydantic import BeforeValidator, PlainSerializer

from mesc.utils.exceptions import (
    FeatureNotImplementedError,
    InvalidChainIdError,
    InvalidInputError,
    MescError,
)

if TYPE_CHECKING:
    from mesc.config.schema import RpcConfig

# 2**256 - 1 has 78 decimal digits.
MAX_CHAIN_ID_DIGITS = 79

_DIGITS = re.compile(r"[0-9]+")


def _digits_from(value: Any) -> str:
    """Normalize any accepted input to its digit string, or raise."""
    if isinstance(value, ChainId):
        return value._value
    if isinstance(value, (bytes, bytearray, memoryview)):
        raise FeatureNotImplementedError("binary chain_id")
    if isinstance(value, bool):
        raise InvalidChainIdError(value, "booleans are not chain ids")
    if isinstance(value, int):
        if value < 0:
            raise InvalidChainIdError(value, "must be non-negative")
        if value >= 10**MAX_CHAIN_ID_DIGITS:
            raise InvalidChainIdError(value, f"longer than {MAX_CHAIN_ID_DIGITS} digits")
        return str(value)
    if isinstance(value, str):
        if not _DIGITS.fullmatch(value):
            raise InvalidChainIdError(value)
        if len(value) > MAX_CHAIN_ID_DIGITS:
            raise InvalidChainIdError(value, f"longer than {MAX_CHAIN_ID_DIGITS} digits")
        return value
    raise InvalidInputError(f"Cannot build a chain id from {type(value).__name__}", field="chain_id")


class ChainId:
    """Immutable non-negative integer chain id of unbounded size.

    Accepts a digit string, a non-negative int or another ChainId. Byte
    strings raise FeatureNotImplementedError; every other failure raises
    InvalidChainIdError (or InvalidInputError for unrelated types).
    Equality and hashing use the digit string as written.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Union["ChainId", str, int]):
        object.__setattr__(self, "_value", _digits_from(value))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ChainId is immutable")

    def __reduce__(self) -> tuple[type["ChainId"], tuple[str]]:
        return (ChainId, (self._value,))

    @classmethod
    def null_chain_id(cls) -> "ChainId":
        """Zero chain id, used to sort endpoints that have no chain id."""
        return NULL_CHAIN_ID

    @property
    def sort_key(self) -> str:
        return self._value.zfill(MAX_CHAIN_ID_DIGITS)

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"ChainId({self._value!r})"

    def __int__(self) -> int:
        return int(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChainId):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other: "ChainId") -> bool:
        if not isinstance(other, ChainId):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __le__(self, other: "ChainId") -> bool:
        if not isinstance(other, ChainId):
            return NotImplemented
        return self.sort_key <= other.sort_key

    def __gt__(self, other: "ChainId") -> bool:
        if not isinstance(other, ChainId):
            return NotImplemented
        return self.sort_key > other.sort_key

    def __ge__(self, other: "ChainId") -> bool:
        if not isinstance(other, ChainId):
            return NotImplemented
        return self.sort_key >= other.sort_key


NULL_CHAIN_ID = ChainId("0")


def to_chain_id(value: Union[ChainId, str, int], config: "RpcConfig | None" = None) -> ChainId:
    """Build a ChainId, also accepting a network alias from config.network_names."""
    if isinstance(value, str) and config is not None and value in config.network_names:
        return config.network_names[value]
    return ChainId(value)


def _validate_chain_id(value: Any) -> ChainId:
    try:
        return ChainId(value)
    except MescError as exc:
        raise ValueError(exc.message) from exc


ChainIdField = Annotated[
    ChainId,
    BeforeValidator(_validate_chain_id),
    PlainSerializer(lambda chain_id: str(chain_id), return_type=str, when_used="json"),
]
