"""Environment Port Interface.

Contract: Look up a variable by its exact name; None when it is not set.
Implementations must not cache: every call reflects the current source.
"""

from __future__ import annotations

from typing import Optional, Protocol


class Environment(Protocol):
    def get(self, name: str) -> Optional[str]: ...

    """
    Return the raw string value of the variable `name`, or None if it is unset.
    An empty string is returned as-is; callers decide whether empty means unset.
    """
