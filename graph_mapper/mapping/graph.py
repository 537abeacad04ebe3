"""
GraphMapper: declarative, bidirectional mapping between two nested trees.

A GraphMapper is compiled from a configuration such as

    {
        "from": "Person",
        "to": {
            "name": {
                "from": ["FirstName", "LastName"],
                "read": lambda first, last: f"{first} {last}",
                "write": lambda name: name.split(" "),
            },
            "address": {"from": "Address", "to": {"city": "City"}},
        },
    }

and can then `read` source trees into target trees and `write` target trees
back into source trees. Compilation happens once, in the constructor; the
compiled path mappers are never changed afterwards. Derived mappers
(`extend`, `pick`) are new GraphMapper instances built from new configs.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from loguru import logger
from pydantic import BaseModel

from graph_mapper._base import validate_config
from graph_mapper.errors import InvalidConfigurationError, UnknownTargetPathError
from graph_mapper.mapping.config import MapperConfig, PathConfig, check_conflicts
from graph_mapper.mapping.mappers import (
    ARRAY_MARKER,
    ArrayMapper,
    ChildMapper,
    MultiSourcePropertyMapper,
    NestedPathMapper,
    PathMapper,
    ScalarPropertyMapper,
)
from graph_mapper.mapping.paths import (
    MISSING,
    PATH_SEPARATOR,
    is_container,
    join_path,
    split_path,
)
from graph_mapper.mapping.pipe import TransformPipeline
from graph_mapper.utils import Lazy

# Top-level keys carried over to mappers derived with pick()
_PICK_INHERITED_KEYS = ("from", "strict", "debug")


class GraphMapper:
    """
    Maps a source tree to a target tree and back.

    Args:
        config: Mapping with a required `to` table and the optional keys
            `from`, `default_value`, `finalize`, `strict` and `debug`.
        strict: Overrides the config's `strict` flag. When enabled (the
            default) conflicting path configurations fail at construction.

    Raises:
        InvalidConfigurationError: If the configuration is malformed.
        ConfigurationConflictError: If a path configuration combines keys that
            cannot be used together (strict mode only).
    """

    def __init__(self, config: Mapping[str, Any], *, strict: bool | None = None):
        if not isinstance(config, Mapping):
            raise InvalidConfigurationError(
                f"Mapper configuration must be a mapping, got {type(config).__name__}",
            )

        self.config = dict(config)
        if strict is not None:
            self.config["strict"] = strict

        settings = validate_config(MapperConfig, self.config)
        self.strict = settings.strict
        self.debug = settings.debug
        self.root_source_path = settings.from_
        self.default_value = settings.default_value
        self.finalize = settings.finalize

        self.path_mappers: list[PathMapper] = []
        self.path_mappers_index: dict[str, PathMapper] = {}

        for target_path, path_config in settings.to.items():
            path_mapper = build_path_mapper(
                target_path,
                path_config,
                self.root_source_path,
                strict=self.strict,
            )
            self.path_mappers.append(path_mapper)
            self.path_mappers_index[target_path] = path_mapper

        if self.debug:
            logger.debug(f"Compiled {self!r} with {self.path_mappers}")

    def __repr__(self) -> str:
        return f"GraphMapper(from={self.root_source_path!r}, to={list(self.path_mappers_index)})"

    def read(self, source: Any, *, prevent_empty_target: bool = False) -> Any:
        """
        Map a source tree to a new target tree.

        Args:
            source: Source mapping (or pydantic model instance).
            prevent_empty_target: Return the configured `default_value`
                instead of a target whose direct fields are all ``None`` or
                absent. Only direct fields are checked: a nested ``{}`` counts
                as a value. The option applies to nested mappers as well.

        Returns:
            The target tree, after `finalize` if configured. ``None`` if the
            source is not a mapping, or if the target was empty and no
            `default_value` is configured.
        """
        result = self._read(source, prevent_empty_target=prevent_empty_target)
        return None if result is MISSING else result

    def write(self, target: Any) -> dict[str, Any] | None:
        """
        Map a target tree back to a new source tree.

        Returns:
            The source tree, or ``None`` if `target` is not a mapping.
        """
        result = self._write(target)
        return None if result is MISSING else result

    def _read(self, source: Any, *, prevent_empty_target: bool = False) -> Any:
        source = _as_tree(source)
        if not is_container(source):
            return MISSING

        target: dict[str, Any] = {}
        for path_mapper in self.path_mappers:
            path_mapper.read(source, target, prevent_empty_target=prevent_empty_target)

        if prevent_empty_target and all(value is None for value in target.values()):
            return copy.deepcopy(self.default_value)

        return self._finalize(target)

    def _write(self, target: Any) -> Any:
        target = _as_tree(target)
        if not is_container(target):
            return MISSING

        source: dict[str, Any] = {}
        for path_mapper in self.path_mappers:
            path_mapper.write(target, source)
        return source

    def _finalize(self, target: dict[str, Any]) -> Any:
        if self.finalize is None:
            return target
        if isinstance(self.finalize, type) and issubclass(self.finalize, BaseModel):
            return self.finalize.model_validate(target)
        return self.finalize(target)

    def source_list(self, target_paths: Iterable[str] | None = None) -> list[str]:
        """
        Absolute source paths needed to build the target.

        Args:
            target_paths: Restrict the list to these target paths (see `pick`).
        """
        if target_paths is not None:
            return self.pick(target_paths).source_list()

        paths: list[str] = []
        for path_mapper in self.path_mappers:
            paths.extend(path_mapper.source_list())
        return paths

    def source_tree(self, target_paths: Iterable[str] | None = None) -> dict[str, Any]:
        """
        Describe the source paths as a tree grouped by shared prefixes.

        Each level lists its leaf names under ``fields`` and its sub-levels
        under ``from``; levels holding a mapped list carry ``array: True``.
        Duplicate paths collapse into one entry.
        """
        return _describe_source_node(_path_list_to_tree(self.source_list(target_paths)))

    def extend(self, config: Mapping[str, Any]) -> GraphMapper:
        """Return a new mapper built from this config deep-merged with `config`."""
        return GraphMapper(deep_merge(self.config, config))

    def pick(self, target_paths: Iterable[str]) -> GraphMapper:
        """
        Return a new mapper restricted to `target_paths`.

        Paths configured verbatim are kept as they are. Dotted paths beneath a
        child or array mapper are picked from that nested mapper.

        Raises:
            UnknownTargetPathError: If a path is neither configured directly
                nor reachable through a nested mapper.
        """
        configured = self.config["to"]
        picked: dict[str, Any] = {}
        nested: dict[str, list[str]] = {}

        for path in target_paths:
            if path in configured:
                picked[path] = configured[path]
            else:
                head, _, rest = path.partition(PATH_SEPARATOR)
                nested.setdefault(head, []).append(rest)

        for head, rest_paths in nested.items():
            path_mapper = self.path_mappers_index.get(head)
            if not isinstance(path_mapper, NestedPathMapper):
                logger.warning(f"Cannot pick '{head}' from {self!r}")
                raise UnknownTargetPathError(head)
            if head in picked:
                # The whole subtree was requested already
                continue

            sub_mapper = path_mapper.mapper.pick(rest_paths)
            fragment = {k: v for k, v in configured[head].items() if k != "to"}
            fragment["mapper"] = Lazy.resolved(sub_mapper)
            picked[head] = fragment

        config = {k: self.config[k] for k in _PICK_INHERITED_KEYS if k in self.config}
        config["to"] = picked
        return GraphMapper(config)


def build_path_mapper(
    target_path: str,
    raw_config: Any,
    root_source_path: str | None,
    *,
    strict: bool = True,
) -> PathMapper:
    """Compile one `to` entry into its path mapper variant."""
    if isinstance(raw_config, str):
        raw_config = {"from": raw_config}
    elif not isinstance(raw_config, Mapping):
        raise InvalidConfigurationError(
            f"Target path '{target_path}' must map to a source path or a mapping, "
            f"got {type(raw_config).__name__}",
        )

    if strict:
        check_conflicts(target_path, raw_config)

    config = validate_config(PathConfig, raw_config, context=target_path)

    if config.is_nested:
        return _build_nested_mapper(target_path, config, root_source_path, strict)

    if config.from_ is None:
        raise InvalidConfigurationError(
            f"Target path '{target_path}' needs a 'from' source path",
        )

    source_paths = [
        join_path(root_source_path, path) for path in config.source_paths(target_path)
    ]
    pipeline = TransformPipeline(read=config.read, write=config.write)

    if isinstance(config.from_, list):
        return MultiSourcePropertyMapper(target_path, source_paths, pipeline)
    return ScalarPropertyMapper(target_path, source_paths, pipeline)


def _build_nested_mapper(
    target_path: str,
    config: PathConfig,
    root_source_path: str | None,
    strict: bool,
) -> PathMapper:
    # Without strict checks a list of sources nests under its first entry
    from_ = config.source_paths(target_path)[0] if config.from_ is not None else None

    overrides: dict[str, Any] = {}
    if config.default_value is not MISSING:
        overrides["default_value"] = config.default_value
    if config.finalize is not None:
        overrides["finalize"] = config.finalize
    nested_config: dict[str, Any] = {"to": config.to, "strict": strict, **overrides}

    resolve = None
    if config.mapper is not None:
        resolve = _with_overrides(config.mapper, overrides) if overrides else config.mapper

    if config.array:
        if from_ is None:
            raise InvalidConfigurationError(
                f"Array target path '{target_path}' needs a 'from' source path",
            )
        # Elements are handed over directly, so the element mapper has no root
        if resolve is None:
            resolve = Lazy.resolved(GraphMapper(nested_config))
        return ArrayMapper(target_path, resolve, join_path(root_source_path, from_))

    if resolve is not None:
        return ChildMapper(target_path, resolve, root_source_path)

    if from_ is not None:
        nested_config["from"] = from_
    return ChildMapper(target_path, Lazy.resolved(GraphMapper(nested_config)), root_source_path)


def _with_overrides(
    resolve: Callable[[], GraphMapper],
    overrides: dict[str, Any],
) -> Lazy[GraphMapper]:
    """Resolve a referenced mapper with the entry's `default_value` / `finalize` applied."""

    def resolve_with_overrides() -> GraphMapper:
        mapper = resolve()
        return GraphMapper({**mapper.config, **overrides})

    return Lazy(resolve_with_overrides)


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge `override` into a copy of `base`. Mappings merge, other values replace."""
    merged = {
        key: deep_merge(value, {}) if isinstance(value, Mapping) else value
        for key, value in base.items()
    }
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = deep_merge(merged[key], value)
        elif isinstance(value, Mapping):
            merged[key] = deep_merge(value, {})
        else:
            merged[key] = value
    return merged


def _as_tree(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump()
    return value


def _path_list_to_tree(paths: Iterable[str]) -> dict[str, Any]:
    tree: dict[str, Any] = {}
    for path in paths:
        *parents, leaf = split_path(path)
        node = tree
        for segment in parents:
            child = node.get(segment)
            if not isinstance(child, dict):
                child = node[segment] = {}
            node = child
        node.setdefault(leaf, True)
    return tree


def _describe_source_node(node: Mapping[str, Any]) -> dict[str, Any]:
    output: dict[str, Any] = {}
    for key, child in node.items():
        if key == ARRAY_MARKER:
            output["array"] = True
        elif child is True:
            output.setdefault("fields", []).append(key)
        else:
            output.setdefault("from", {})[key] = _describe_source_node(child)
    return output
