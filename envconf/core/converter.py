"""
Type-directed conversion of raw environment strings into Python values.

Purpose:
    - Parse scalars with strict, locale-free literal rules
    - Split sequences and mappings on configurable delimiters, recursing into elements
"""

from __future__ import annotations

import math
import re
import struct
from typing import Any

from envconf.errors.errors import InvalidValueError, UnsupportedTypeError
from envconf.types.types import Kind, TypeDescriptor

DEFAULT_ITEM_DELIMITER = ","
DEFAULT_KV_DELIMITER = ":"

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)

_COMPONENT = "converter"


def convert(
    descriptor: TypeDescriptor,
    raw: str,
    item_delimiter: str = DEFAULT_ITEM_DELIMITER,
    kv_delimiter: str = DEFAULT_KV_DELIMITER,
) -> Any:
    """
    Convert `raw` into a value of the type described by `descriptor`.

    Raises InvalidValueError when `raw` does not parse and UnsupportedTypeError
    when the descriptor is outside the handled set. Struct descriptors are
    unsupported here; nested records are walked by the populator.
    """
    match descriptor.kind:
        case Kind.STRING:
            return raw
        case Kind.BOOL:
            return parse_bool(raw)
        case Kind.INTEGER:
            return parse_int(raw)
        case Kind.FLOAT:
            return parse_float(raw, descriptor.bits)
        case Kind.POINTER:
            return convert(descriptor.inner, raw, item_delimiter, kv_delimiter)
        case Kind.BYTES:
            return raw.encode("utf-8")
        case Kind.SEQUENCE:
            return _convert_sequence(descriptor, raw, item_delimiter, kv_delimiter)
        case Kind.MAPPING:
            return _convert_mapping(descriptor, raw, item_delimiter, kv_delimiter)
        case _:
            raise UnsupportedTypeError(type_name=descriptor.name, component=_COMPONENT)


def parse_bool(raw: str) -> bool:
    if raw in TRUE_LITERALS:
        return True
    if raw in FALSE_LITERALS:
        return False
    raise InvalidValueError(
        f"invalid syntax for bool: {raw!r}",
        value=raw,
        expected_type="bool",
        component=_COMPONENT,
    )


def parse_int(raw: str) -> int:
    if not _INTEGER_RE.fullmatch(raw):
        raise InvalidValueError(
            f"invalid syntax for integer: {raw!r}",
            value=raw,
            expected_type="int",
            component=_COMPONENT,
        )
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidValueError(
            f"value out of range for integer: {raw!r}",
            value=raw,
            expected_type="int",
            component=_COMPONENT,
        )
    return value


def parse_float(raw: str, bits: int = 64) -> float:
    if not _FLOAT_RE.fullmatch(raw):
        raise InvalidValueError(
            f"invalid syntax for float: {raw!r}",
            value=raw,
            expected_type=f"float{bits}",
            component=_COMPONENT,
        )
    value = float(raw)
    explicit_inf = "inf" in raw.lower()
    if math.isinf(value) and not explicit_inf:
        raise _float_range_error(raw, bits)
    if bits == 32 and not math.isinf(value) and not math.isnan(value):
        try:
            # Round to the nearest single precision value
            value = struct.unpack("<f", struct.pack("<f", value))[0]
        except OverflowError as exc:
            raise _float_range_error(raw, bits) from exc
        if math.isinf(value):
            raise _float_range_error(raw, bits)
    return value


def _float_range_error(raw: str, bits: int) -> InvalidValueError:
    return InvalidValueError(
        f"value out of range for float{bits}: {raw!r}",
        value=raw,
        expected_type=f"float{bits}",
        component=_COMPONENT,
    )


def _convert_sequence(
    descriptor: TypeDescriptor, raw: str, item_delimiter: str, kv_delimiter: str
) -> list[Any] | tuple[Any, ...]:
    container = descriptor.container or list
    if not raw.strip():
        return container()
    # Elements are not trimmed: "a, b" yields "a" and " b"
    items = [
        convert(descriptor.inner, part, item_delimiter, kv_delimiter)
        for part in raw.split(item_delimiter)
    ]
    return container(items)


def _convert_mapping(
    descriptor: TypeDescriptor, raw: str, item_delimiter: str, kv_delimiter: str
) -> dict[Any, Any]:
    result: dict[Any, Any] = {}
    if not raw.strip():
        return result
    for pair in raw.split(item_delimiter):
        segments = pair.split(kv_delimiter)
        if len(segments) != 2:
            raise InvalidValueError(
                f"invalid map item: {pair!r}",
                value=pair,
                expected_type=descriptor.name,
                component=_COMPONENT,
            )
        key = convert(descriptor.key, segments[0], item_delimiter, kv_delimiter)
        result[key] = convert(descriptor.inner, segments[1], item_delimiter, kv_delimiter)
    return result
