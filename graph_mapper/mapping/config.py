"""
Configuration schemas for graph mappers.

Configurations are plain dictionaries supplied by the caller. They are parsed
with these models when a mapper is compiled, while the original dictionaries
are kept for `extend()` and `pick()`.
"""

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import Field

from graph_mapper._base import BaseConfig, ConfigFragment
from graph_mapper.errors import ConfigurationConflictError
from graph_mapper.mapping.paths import MISSING

# Source path sugar: "same path as the target key"
SAME_AS_TARGET = "="


class MapperConfig(BaseConfig):
    """
    Top-level mapper configuration.

    `to` maps each target path to a path configuration, `from` is the root
    source path prepended to every source path beneath this mapper.
    """

    from_: str | None = Field(None, alias="from", description="Root source path")
    to: dict[str, Any] = Field(description="Target path -> path configuration")
    default_value: Any = Field(
        MISSING,
        description="Returned by read(prevent_empty_target=True) for an empty result",
    )
    finalize: Callable[[Any], Any] | None = Field(
        None,
        description="Applied to the assembled target before read() returns it",
    )
    strict: bool = Field(
        True, description="Reject conflicting path configurations at compile time"
    )


class PathConfig(ConfigFragment):
    """Configuration of a single target path."""

    from_: str | list[str] | None = Field(None, alias="from")
    read: Callable[..., Any] | list[Callable[..., Any]] | None = None
    write: Callable[..., Any] | list[Callable[..., Any]] | None = None
    to: dict[str, Any] | None = None
    array: bool = False
    mapper: Callable[[], Any] | None = None
    default_value: Any = MISSING
    finalize: Callable[[Any], Any] | None = None

    @property
    def is_nested(self) -> bool:
        return self.array or self.to is not None or self.mapper is not None

    def source_paths(self, target_path: str) -> list[str]:
        """Configured source paths, with `=` resolved against the target key."""
        paths = self.from_ if isinstance(self.from_, list) else [self.from_]
        return [target_path if path == SAME_AS_TARGET else path for path in paths]


def _is_registry_reference(value: Any) -> bool:
    return isinstance(value, Mapping) and callable(value.get("mapper"))


def check_conflicts(target_path: str, config: Mapping[str, Any]) -> None:
    """Reject path configurations whose keys contradict each other.

    Raises:
        ConfigurationConflictError: on `to` combined with a registry reference,
            or on `to` combined with several `from` sources.
    """
    to = config.get("to")

    if _is_registry_reference(to):
        raise ConfigurationConflictError(
            target_path,
            "registry.use() cannot be placed under 'to'; "
            "assign it to the target path directly",
        )
    if to is not None and config.get("mapper") is not None:
        raise ConfigurationConflictError(
            target_path,
            "'to' and 'mapper' cannot be combined; use one or the other",
        )
    if to is not None and isinstance(config.get("from"), (list, tuple)):
        raise ConfigurationConflictError(
            target_path,
            "'to' cannot be used with multiple 'from' sources; "
            "nested mappings need a single source root",
        )
    if config.get("array") and to is None and config.get("mapper") is None:
        raise ConfigurationConflictError(
            target_path,
            "'array' needs a 'to' table or a 'mapper' for its elements",
        )
