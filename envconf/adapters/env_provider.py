from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from envconf.ports.environment import Environment

_LOGGER = logging.getLogger(__name__)


class OsEnvironment(Environment):
    """Reads the live process environment on every lookup."""

    def get(self, name: str) -> Optional[str]:
        value = os.environ.get(name)
        _LOGGER.debug(
            "env_lookup",
            extra={
                "event": "env_lookup",
                "env_var": name,
                "found": value is not None,
                "source": "os",
            },
        )
        return value


class MappingEnvironment(Environment):
    def __init__(self, values: Mapping[str, str]) -> None:
        """
        Serve lookups from a fixed mapping instead of the process environment.

        The mapping is copied so later changes by the caller are not observed.
        """
        for key, value in values.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise TypeError("Environment mappings must map str to str")
        self._values = dict(values)

    def get(self, name: str) -> Optional[str]:
        value = self._values.get(name)
        _LOGGER.debug(
            "env_lookup",
            extra={
                "event": "env_lookup",
                "env_var": name,
                "found": value is not None,
                "source": "mapping",
            },
        )
        return value
