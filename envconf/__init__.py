"""
envconf: populate dataclasses and pydantic models from environment variables.

Each field with a declared default reads `PREFIX_FIELD_NAME` (field name in
upper snake case); nested records extend the prefix with their own field name.
Unset or empty variables fall back to the declared default string.

Usage:
    from dataclasses import dataclass, field
    from envconf import envfield, unmarshal

    @dataclass
    class Level2:
        count: int = envfield("3", default=0)

    @dataclass
    class Config:
        api_port: int = envfield("8080", default=0)
        fibonacci: list[int] = envfield("0,1,1,2,3,5,8", default_factory=list)
        level2: Level2 = field(default_factory=Level2)

    cfg = Config()
    unmarshal(cfg, "MYAPP")  # MYAPP_API_PORT, MYAPP_FIBONACCI, MYAPP_LEVEL2_COUNT
"""

from envconf.config.options import UnmarshalOptions
from envconf.core.converter import convert
from envconf.core.naming import to_env_var_name
from envconf.core.populator import EnvVariable, Unmarshaller, iter_variables, unmarshal
from envconf.core.schema import TAG_NAME, FieldDescriptor, envfield, fields_of
from envconf.errors.errors import (
    EnvConfError,
    InvalidValueError,
    UnexportedFieldError,
    UnsupportedTypeError,
)
from envconf.types.types import (
    Bits,
    Default,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Kind,
    TypeDescriptor,
    describe,
)

__all__ = [
    # Main entry point
    "unmarshal",
    "Unmarshaller",
    "UnmarshalOptions",
    "iter_variables",
    "EnvVariable",
    # Declaring fields
    "envfield",
    "Default",
    "Bits",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Float32",
    "Float64",
    "TAG_NAME",
    # Building blocks
    "convert",
    "describe",
    "fields_of",
    "to_env_var_name",
    "FieldDescriptor",
    "Kind",
    "TypeDescriptor",
    # Errors
    "EnvConfError",
    "InvalidValueError",
    "UnsupportedTypeError",
    "UnexportedFieldError",
]
