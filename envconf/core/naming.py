from __future__ import annotations

import re

_MATCH_FIRST_CAP = re.compile(r"(.)([A-Z][a-z]+)")
_MATCH_ALL_CAP = re.compile(r"([a-z0-9])([A-Z])")


def to_snake_case(name: str) -> str:
    """
    Split a camelCase / PascalCase identifier on word boundaries.

    Acronyms stay together: "APIPort" -> "API_Port", "apiPort" -> "api_Port".
    Case is left untouched.
    """
    snake = _MATCH_FIRST_CAP.sub(r"\1_\2", name)
    return _MATCH_ALL_CAP.sub(r"\1_\2", snake)


def to_env_var_name(name: str, prefix: str) -> str:
    """Return the environment variable name for field `name` under `prefix`."""
    return f"{prefix}_{to_snake_case(name).upper()}"
