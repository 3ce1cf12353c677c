"""
Populate a nested settings record from the environment and print it.

Run:
    MYAPP_API_PORT=9090 MYAPP_NESTED_LEVEL2_COUNT=5 python examples/showcase.py
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from envconf import envfield, iter_variables, unmarshal


@dataclass
class Level2:
    count: int = envfield("3", default=0)
    name: str = envfield("pidgeon", default="")


@dataclass
class Nest:
    egg: str = envfield("chicken", default="")
    level2: Level2 = field(default_factory=Level2)


@dataclass
class Settings:
    api_port: int = envfield("8080", default=0)
    service_env: str = envfield("local", default="")
    country_prefix_map: dict[str, int] = envfield("Argentina:54,USA:1", default_factory=dict)
    fibonacci_slice: list[int] = envfield("0,1,1,2,3,5,8", default_factory=list)
    nested: Nest = field(default_factory=Nest)


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    print("Variables read:")
    for var in iter_variables(Settings, "MYAPP"):
        print(f"  {var.name} (default {var.default!r})")

    settings = Settings()
    unmarshal(settings, "MYAPP")
    print(settings)


if __name__ == "__main__":
    main()
