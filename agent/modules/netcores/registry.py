"""Read-only catalog of the tools this module exposes."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from modules.netcores.manifest import MANIFEST
from shared.schemas.tools import ToolDefinition


class ToolRegistry:
    """Ordered, immutable set of tool definitions keyed by exact name."""

    def __init__(self, definitions: Iterable[ToolDefinition]):
        self._tools = tuple(definitions)
        self._by_name: dict[str, ToolDefinition] = {}
        for definition in self._tools:
            if definition.name in self._by_name:
                raise ValueError(f"Duplicate tool name: {definition.name}")
            self._by_name[definition.name] = definition

    def list(self) -> tuple[ToolDefinition, ...]:
        """All definitions in declaration order."""
        return self._tools

    def find(self, name: str) -> ToolDefinition | None:
        """Case-sensitive lookup; None when the name is not registered."""
        return self._by_name.get(name)

    def names(self) -> tuple[str, ...]:
        return tuple(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._tools)

    def __len__(self) -> int:
        return len(self._tools)


def default_registry() -> ToolRegistry:
    """Registry holding the eight NetCores tools from the module manifest."""
    return ToolRegistry(MANIFEST.tools)
