"""Type vocabulary for CBOR values as represented by cbor2.

A payload is built from plain Python values (``int``, ``bytes``, ``str``,
``list``, ``dict``, ``bool``, ``None``, ``float``) plus ``cbor2.CBORTag`` and
``cbor2.CBORSimpleValue``. The helpers here classify those values by CBOR
major type and provide the substitute values used for type mutations.
"""

from collections.abc import Sequence
from enum import IntEnum, StrEnum
from typing import Any

import cbor2

from ctap_conformance.errors import PayloadDefinitionError

MAX_NESTING_DEPTH = 4
"""Deepest nesting of arrays and maps an authenticator is required to parse."""


class MajorType(IntEnum):
    """CBOR major types (RFC 8949, section 3.1)."""

    UNSIGNED_INTEGER = 0
    NEGATIVE_INTEGER = 1
    BYTE_STRING = 2
    TEXT_STRING = 3
    ARRAY = 4
    MAP = 5
    TAG = 6
    SIMPLE = 7


class ContainerKind(StrEnum):
    """Container shapes used to build over-deep values."""

    ARRAY = "array"
    MAP = "map"


def major_type(value: Any) -> MajorType:
    """Return the CBOR major type ``value`` encodes to.

    Raises:
        PayloadDefinitionError: If the value has no CBOR representation

    """
    match value:
        case bool() | None | float() | cbor2.CBORSimpleValue():
            return MajorType.SIMPLE
        case int() if value >= 0:
            return MajorType.UNSIGNED_INTEGER
        case int():
            return MajorType.NEGATIVE_INTEGER
        case bytes() | bytearray():
            return MajorType.BYTE_STRING
        case str():
            return MajorType.TEXT_STRING
        case list() | tuple():
            return MajorType.ARRAY
        case dict():
            return MajorType.MAP
        case cbor2.CBORTag():
            return MajorType.TAG
    raise PayloadDefinitionError(
        f"Value of type {type(value).__name__} has no CBOR representation"
    )


def _family(value: Any) -> MajorType:
    kind = major_type(value)
    if kind is MajorType.NEGATIVE_INTEGER:
        return MajorType.UNSIGNED_INTEGER
    return kind


def same_type_family(first: Any, second: Any) -> bool:
    """Check whether two values share a major type.

    Unsigned and negative integers count as one family.
    """
    return _family(first) is _family(second)


def type_name(value: Any) -> str:
    """Human-readable name of a value's CBOR type."""
    match value:
        case bool():
            return "boolean"
        case None:
            return "null"
        case float():
            return "float"
        case cbor2.CBORSimpleValue():
            return "simple value"
    return major_type(value).name.lower().replace("_", " ")


WRONG_TYPE_EXAMPLES: Sequence[Any] = (
    42,
    -42,
    b"\x42",
    "42",
    [42],
    {42: 42},
    True,
)
"""One example per substitutable type, in the order cases are generated."""


def wrong_type_examples(value: Any) -> Sequence[Any]:
    """Return the catalog members whose type family differs from ``value``."""
    return [
        example
        for example in WRONG_TYPE_EXAMPLES
        if not same_type_family(example, value)
    ]


def first_wrong_type_example(value: Any) -> Any:
    """Return the first catalog member of a different type family."""
    return wrong_type_examples(value)[0]


def nesting_depth(value: Any) -> int:
    """Return how many containers deep ``value`` nests.

    Scalars have depth 0, an empty array or map has depth 1.
    """
    match value:
        case dict():
            children: list[Any] = [*value.keys(), *value.values()]
        case list() | tuple():
            children = list(value)
        case cbor2.CBORTag():
            return nesting_depth(value.value)
        case _:
            return 0
    return 1 + max((nesting_depth(child) for child in children), default=0)


def nested_container(kind: ContainerKind, levels: int) -> Any:
    """Build an array or map that nests exactly ``levels`` deep."""
    if levels < 1:
        raise PayloadDefinitionError(f"Nesting needs at least one level, got {levels}")

    value: Any = [] if kind is ContainerKind.ARRAY else {}
    for _ in range(levels - 1):
        value = [value] if kind is ContainerKind.ARRAY else {0: value}
    return value


def encode(value: Any) -> bytes:
    """Encode a value as canonical CBOR."""
    return cbor2.dumps(value, canonical=True)
