"""
Populate records from the environment.

Walks a record's fields depth-first in declaration order. Nested records are
always recursed into with an extended prefix; every other field with a declared
default is resolved from `PREFIX_FIELD_NAME`, falling back to the default when
the variable is unset or empty, then converted and assigned in place.

The first error aborts the walk; fields handled before it keep their new values.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from envconf.adapters.env_provider import OsEnvironment
from envconf.config.options import UnmarshalOptions, build_options
from envconf.core.converter import DEFAULT_ITEM_DELIMITER, DEFAULT_KV_DELIMITER, convert
from envconf.core.naming import to_env_var_name
from envconf.core.schema import FieldDescriptor, fields_of, is_record
from envconf.errors.errors import EnvConfError, InvalidValueError, UnexportedFieldError
from envconf.ports.environment import Environment
from envconf.types.types import is_record_type

_LOGGER = logging.getLogger(__name__)


class Unmarshaller:
    """Populates records using fixed options and an environment source."""

    def __init__(
        self,
        options: UnmarshalOptions,
        environment: Optional[Environment] = None,
    ) -> None:
        self.options = options
        self.environment = environment if environment is not None else OsEnvironment()

    def populate(self, target: Any) -> None:
        self._populate(target, self.options.prefix)

    def _populate(self, target: Any, prefix: str) -> None:
        if not is_record(target):
            raise InvalidValueError(
                "target must be a dataclass or pydantic model instance",
                expected_type="record",
                component="populator",
                details={"prefix": prefix, "got": type(target).__name__},
            )

        _LOGGER.debug(
            "env_record_enter",
            extra={
                "event": "env_record_enter",
                "record": type(target).__name__,
                "prefix": prefix,
            },
        )
        for fd in fields_of(target):
            env_var = to_env_var_name(fd.name, prefix)
            if fd.nested:
                if fd.name.startswith("_"):
                    continue
                self._populate(getattr(target, fd.name), env_var)

            if not fd.default:
                _LOGGER.debug(
                    "env_field_skipped",
                    extra={
                        "event": "env_field_skipped",
                        "field": fd.name,
                        "prefix": prefix,
                    },
                )
                continue
            self._assign(target, fd, env_var)

    def _assign(self, target: Any, fd: FieldDescriptor, env_var: str) -> None:
        value = self.environment.get(env_var)
        source = "env"
        if not value:
            value = fd.default
            source = "default"

        if not fd.settable:
            raise UnexportedFieldError(
                field=fd.name,
                component="populator",
                details={"env_var": env_var, "record": type(target).__name__},
            )

        try:
            converted = convert(
                fd.descriptor,
                value,
                self.options.item_delimiter,
                self.options.kv_delimiter,
            )
        except EnvConfError as e:
            e.details.setdefault("field", fd.name)
            e.details.setdefault("env_var", env_var)
            raise

        setattr(target, fd.name, converted)
        _LOGGER.debug(
            "env_field_resolved",
            extra={
                "event": "env_field_resolved",
                "field": fd.name,
                "env_var": env_var,
                "source": source,
            },
        )


def unmarshal(
    target: Any,
    prefix: str,
    item_delimiter: str = DEFAULT_ITEM_DELIMITER,
    kv_delimiter: str = DEFAULT_KV_DELIMITER,
    *,
    environment: Optional[Environment] = None,
) -> None:
    """
    Populate `target` in place from environment variables named `PREFIX_FIELD`.

    e.g:
        @dataclass
        class Config:
            api_port: int = envfield("8080", default=0)
            srv_short_name: str = envfield("local", default="")

        cfg = Config()
        unmarshal(cfg, "MYAPP")
        # cfg.api_port takes MYAPP_API_PORT, or 8080 if it is unset or empty
        # cfg.srv_short_name takes MYAPP_SRV_SHORT_NAME, or "local"
    """
    options = build_options(prefix, item_delimiter, kv_delimiter)
    Unmarshaller(options, environment).populate(target)


@dataclass(frozen=True, slots=True)
class EnvVariable:
    name: str
    field_path: str
    type_name: str
    default: str


def iter_variables(record: Any, prefix: str) -> Iterator[EnvVariable]:
    """
    Yield every variable `unmarshal` would read for `record`, in lookup order.

    `record` may be a record class or instance; nested records are expanded
    from their declared types, so no instance is needed.
    """
    cls = record if isinstance(record, type) else type(record)
    if not is_record_type(cls):
        raise InvalidValueError(
            "record must be a dataclass or pydantic model",
            expected_type="record",
            component="populator",
            details={"got": cls.__name__},
        )
    yield from _iter_variables(cls, prefix, ())


def _iter_variables(cls: type, prefix: str, path: tuple[str, ...]) -> Iterator[EnvVariable]:
    for fd in fields_of(cls):
        env_var = to_env_var_name(fd.name, prefix)
        field_path = path + (fd.name,)
        if fd.nested and not fd.name.startswith("_"):
            yield from _iter_variables(fd.descriptor.record, env_var, field_path)
        if fd.default:
            yield EnvVariable(
                name=env_var,
                field_path=".".join(field_path),
                type_name=fd.descriptor.name,
                default=fd.default,
            )
