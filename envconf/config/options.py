from __future__ import annotations

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from envconf.core.converter import DEFAULT_ITEM_DELIMITER, DEFAULT_KV_DELIMITER
from envconf.errors.errors import InvalidValueError

"""
Options for a single unmarshal call.
"""


class UnmarshalOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    prefix: str
    item_delimiter: str = DEFAULT_ITEM_DELIMITER
    kv_delimiter: str = DEFAULT_KV_DELIMITER

    @field_validator("item_delimiter", "kv_delimiter")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if value == "":
            raise ValueError("delimiter must be a non-empty string")
        return value


def build_options(
    prefix: str,
    item_delimiter: str = DEFAULT_ITEM_DELIMITER,
    kv_delimiter: str = DEFAULT_KV_DELIMITER,
) -> UnmarshalOptions:
    """Validate call arguments, translating pydantic errors into InvalidValueError."""
    try:
        return UnmarshalOptions(
            prefix=prefix,
            item_delimiter=item_delimiter,
            kv_delimiter=kv_delimiter,
        )
    except ValidationError as e:
        problems = [
            {"path": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        raise InvalidValueError(
            "invalid unmarshal options",
            component="options",
            details={"errors": problems},
        ) from e
