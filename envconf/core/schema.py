"""
Field descriptor tables for records.

A record is a dataclass instance or a pydantic model instance. The table lists
each field in declaration order with its type descriptor, declared default
string, and whether envconf may assign it.
"""

from __future__ import annotations

import dataclasses
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional

from pydantic import BaseModel

from envconf.errors.errors import UnsupportedTypeError
from envconf.types.types import Default, Kind, TypeDescriptor, describe, split_annotated

# Metadata key holding the default value string on dataclass fields
TAG_NAME = "envconf_default"


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    name: str
    descriptor: TypeDescriptor
    default: Optional[str]
    settable: bool

    @property
    def nested(self) -> bool:
        return self.descriptor.kind is Kind.STRUCT


def envfield(default_value: str, **kwargs: Any) -> Any:
    """
    Declare a dataclass field populated from the environment.

    `default_value` is the fallback string; remaining keyword arguments go to
    `dataclasses.field` (e.g. `default=0` or `default_factory=list`).

    Example:
        api_port: int = envfield("8080", default=0)
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TAG_NAME] = default_value
    return dataclasses.field(metadata=metadata, **kwargs)


def is_record(obj: Any) -> bool:
    """True for dataclass and pydantic model instances (not classes)."""
    if isinstance(obj, type):
        return False
    return dataclasses.is_dataclass(obj) or isinstance(obj, BaseModel)


def fields_of(record: Any) -> tuple[FieldDescriptor, ...]:
    """Return the descriptor table for a record instance or record class."""
    cls = record if isinstance(record, type) else type(record)
    return _fields_of_class(cls)


@lru_cache(maxsize=None)
def _fields_of_class(cls: type) -> tuple[FieldDescriptor, ...]:
    if issubclass(cls, BaseModel):
        return _model_fields(cls)
    return _dataclass_fields(cls)


def _dataclass_fields(cls: type) -> tuple[FieldDescriptor, ...]:
    hints = _type_hints(cls)
    frozen = cls.__dataclass_params__.frozen
    table = []
    for f in dataclasses.fields(cls):
        annotation, metadata = split_annotated(hints.get(f.name, f.type))
        default = f.metadata.get(TAG_NAME)
        if default is None:
            default = _default_from_metadata(metadata)
        table.append(
            FieldDescriptor(
                name=f.name,
                descriptor=describe(annotation, metadata),
                default=default,
                settable=not frozen and not f.name.startswith("_"),
            )
        )
    return tuple(table)


def _model_fields(cls: type[BaseModel]) -> tuple[FieldDescriptor, ...]:
    frozen = bool(cls.model_config.get("frozen", False))
    table = []
    for name, info in cls.model_fields.items():
        # pydantic moves Annotated metadata onto FieldInfo.metadata
        metadata = tuple(info.metadata)
        table.append(
            FieldDescriptor(
                name=name,
                descriptor=describe(info.annotation, metadata),
                default=_default_from_metadata(metadata),
                settable=not frozen and not bool(info.frozen),
            )
        )
    return tuple(table)


def _default_from_metadata(metadata: tuple[Any, ...]) -> Optional[str]:
    for item in metadata:
        if isinstance(item, Default):
            return item.value
    return None


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except NameError as e:
        # String annotations naming classes outside the module namespace
        unresolved = getattr(e, "name", None)
        field_name = next(
            (
                f.name
                for f in dataclasses.fields(cls)
                if isinstance(f.type, str) and unresolved and unresolved in f.type
            ),
            None,
        )
        raise UnsupportedTypeError(
            "unresolvable type annotation",
            type_name=unresolved,
            component="schema",
            details={"record": cls.__qualname__, "field": field_name},
        ) from e
