"""
Name-indexed store of graph mappers.

Mappers defined in a registry can refer to each other by name with `use()`,
regardless of declaration order. References are resolved lazily, the first
time the referring mapper actually needs them.
"""

from collections.abc import Mapping
from typing import Any

from loguru import logger

from graph_mapper.errors import UnknownMapperNameError
from graph_mapper.mapping.graph import GraphMapper
from graph_mapper.utils import Lazy


class MapperRegistry:
    """
    Registry of named GraphMappers.

    Example:
        ```python
            mappers = MapperRegistry()
            mappers.define("person", {
                "from": "Person",
                "to": {"name": "Name", "address": mappers.use("address")},
            })
            mappers.define("address", {"from": "Address", "to": {"city": "City"}})

            mappers.get("person").read(source)
        ```
    """

    def __init__(self, debug: bool = False):
        self.mappers: dict[str, GraphMapper] = {}
        self.debug = debug

    def __contains__(self, name: str) -> bool:
        return name in self.mappers

    def names(self) -> list[str]:
        return list(self.mappers)

    def define(self, name: str, config: Mapping[str, Any]) -> GraphMapper:
        """Compile `config` and store it under `name`, replacing any previous definition."""
        if self.debug and name in self.mappers:
            logger.debug(f"Redefining mapper '{name}'")
        mapper = GraphMapper(config)
        self.mappers[name] = mapper
        return mapper

    def get(self, name: str) -> GraphMapper:
        mapper = self.mappers.get(name)
        if mapper is None:
            raise UnknownMapperNameError(name)
        return mapper

    def use(self, name: str, override: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """
        Reference the mapper `name` from another mapper's `to` table.

        Args:
            name: Registered (or not yet registered) mapper name.
            override: Config merged onto the referenced mapper with `extend()`,
                e.g. ``{"from": "MainAddress"}`` to read it from another root.

        Returns:
            A path configuration holding a lazily resolved `mapper`.
        """

        def resolve() -> GraphMapper:
            mapper = self.get(name)
            if override:
                mapper = mapper.extend(override)
            if self.debug:
                logger.debug(f"Resolved mapper reference '{name}'")
            return mapper

        return {"mapper": Lazy(resolve)}
