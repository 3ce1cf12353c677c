"""
Type descriptors for envconf.

A TypeDescriptor is a closed tagged variant describing how a raw environment
string maps onto a Python value. Descriptors are derived from field annotations
with `describe()`.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel


class Kind(str, Enum):
    """Kinds of value envconf can populate."""

    STRING = "string"
    BOOL = "bool"
    INTEGER = "integer"
    FLOAT = "float"
    POINTER = "pointer"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    BYTES = "bytes"
    STRUCT = "struct"
    UNSUPPORTED = "unsupported"


SCALAR_KINDS = frozenset({Kind.STRING, Kind.BOOL, Kind.INTEGER, Kind.FLOAT})


@dataclass(frozen=True)
class Bits:
    """Annotation marker declaring the bit width of an int or float field."""

    width: int

    def __post_init__(self) -> None:
        if self.width not in (8, 16, 32, 64):
            raise ValueError(f"unsupported bit width: {self.width}")


@dataclass(frozen=True)
class Default:
    """Annotation marker carrying a field's default value string.

    Example:
        api_port: Annotated[int, Default("8080")] = 0
    """

    value: str


Int8 = Annotated[int, Bits(8)]
Int16 = Annotated[int, Bits(16)]
Int32 = Annotated[int, Bits(32)]
Int64 = Annotated[int, Bits(64)]
Float32 = Annotated[float, Bits(32)]
Float64 = Annotated[float, Bits(64)]


@dataclass(frozen=True)
class TypeDescriptor:
    kind: Kind
    bits: int = 0
    inner: Optional[TypeDescriptor] = None  # pointer target / sequence element / mapping value
    key: Optional[TypeDescriptor] = None  # mapping key
    container: Optional[type] = None  # list or tuple for sequences
    record: Optional[type] = None  # struct kind only
    source: Any = None  # annotation it was built from, for messages

    @property
    def name(self) -> str:
        """Human readable rendering used in errors and variable listings."""
        match self.kind:
            case Kind.INTEGER:
                return f"int{self.bits}"
            case Kind.FLOAT:
                return f"float{self.bits}"
            case Kind.POINTER:
                return f"optional[{self.inner.name}]"
            case Kind.SEQUENCE:
                return f"{self.container.__name__}[{self.inner.name}]"
            case Kind.MAPPING:
                return f"dict[{self.key.name}, {self.inner.name}]"
            case Kind.STRUCT:
                return self.record.__name__
            case Kind.UNSUPPORTED:
                return _annotation_name(self.source)
            case _:
                return self.kind.value


STRING = TypeDescriptor(Kind.STRING)
BOOL = TypeDescriptor(Kind.BOOL)
BYTES = TypeDescriptor(Kind.BYTES)


def integer(bits: int = 64) -> TypeDescriptor:
    return TypeDescriptor(Kind.INTEGER, bits=bits)


def floating(bits: int = 64) -> TypeDescriptor:
    return TypeDescriptor(Kind.FLOAT, bits=bits)


def pointer(inner: TypeDescriptor) -> TypeDescriptor:
    return TypeDescriptor(Kind.POINTER, inner=inner)


def sequence(element: TypeDescriptor, container: type = list) -> TypeDescriptor:
    return TypeDescriptor(Kind.SEQUENCE, inner=element, container=container)


def mapping(key: TypeDescriptor, value: TypeDescriptor) -> TypeDescriptor:
    return TypeDescriptor(Kind.MAPPING, key=key, inner=value)


def is_record_type(tp: Any) -> bool:
    """True for dataclass types and pydantic model classes."""
    if not isinstance(tp, type) or typing.get_origin(tp) is not None:
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def split_annotated(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Strip (possibly nested) Annotated wrappers, returning the base type and metadata."""
    metadata: tuple[Any, ...] = ()
    while typing.get_origin(annotation) is Annotated:
        metadata += annotation.__metadata__
        annotation = annotation.__origin__
    return annotation, metadata


def describe(annotation: Any, metadata: tuple[Any, ...] = ()) -> TypeDescriptor:
    """
    Build a TypeDescriptor from a type annotation.

    Unknown annotations produce an UNSUPPORTED descriptor rather than raising;
    the error surfaces only when a value is actually converted.
    """
    annotation, extra = split_annotated(annotation)
    metadata = tuple(metadata) + extra
    # NewType aliases convert as their underlying type
    while hasattr(annotation, "__supertype__"):
        annotation, extra = split_annotated(annotation.__supertype__)
        metadata += extra
    bits = next((m.width for m in metadata if isinstance(m, Bits)), None)

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin in (Union, types.UnionType):
        non_none = [a for a in args if a is not type(None)]
        if len(non_none) == 1 and len(args) == 2:
            return pointer(describe(non_none[0], metadata))
        return TypeDescriptor(Kind.UNSUPPORTED, source=annotation)

    if annotation is bool:
        return BOOL
    if annotation is str:
        return STRING
    if annotation is int:
        return integer(bits or 64)
    if annotation is float:
        if bits not in (None, 32, 64):
            return TypeDescriptor(Kind.UNSUPPORTED, source=annotation)
        return floating(bits or 64)
    if annotation is bytes:
        return BYTES
    if is_record_type(annotation):
        return TypeDescriptor(Kind.STRUCT, record=annotation, source=annotation)

    if origin in (list, collections.abc.Sequence, collections.abc.MutableSequence):
        if len(args) == 1:
            return sequence(describe(args[0]), list)
    elif origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return sequence(describe(args[0]), tuple)
    elif origin in (dict, collections.abc.Mapping, collections.abc.MutableMapping):
        if len(args) == 2:
            key = describe(args[0])
            if key.kind in SCALAR_KINDS:
                return mapping(key, describe(args[1]))

    return TypeDescriptor(Kind.UNSUPPORTED, source=annotation)


def _annotation_name(annotation: Any) -> str:
    if annotation is None:
        return "unknown"
    if isinstance(annotation, type) and not typing.get_args(annotation):
        return annotation.__name__
    return repr(annotation).replace("typing.", "")
