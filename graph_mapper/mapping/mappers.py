"""
Path mappers: the compiled form of a single `to` entry.

Every entry of a mapper configuration becomes exactly one of four variants,
chosen once when the configuration is compiled:

- ScalarPropertyMapper: one source path, one target path
- MultiSourcePropertyMapper: several source paths combined into one target path
- ChildMapper: a target subtree handled by a nested GraphMapper
- ArrayMapper: a target list whose elements are handled by a nested GraphMapper
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, MutableMapping
from typing import TYPE_CHECKING, Any, Final

from graph_mapper.mapping.paths import (
    MISSING,
    ensure_container,
    get_path,
    join_path,
    merge_tree,
    set_path,
)
from graph_mapper.mapping.pipe import TransformPipeline
from graph_mapper.utils import Lazy

if TYPE_CHECKING:
    from graph_mapper.mapping.graph import GraphMapper

# Marks an array-typed position in source_list() output
ARRAY_MARKER: Final = "[]"


class PathMapper(ABC):
    """
    Abstract base class for all path mappers.

    A path mapper reads from a source tree into a target tree under
    construction, and writes the other way around. Source paths are absolute:
    any ancestor root source path is already prepended.
    """

    def __init__(self, target_path: str):
        self.target_path = target_path

    @abstractmethod
    def read(
        self,
        source: Any,
        target: MutableMapping,
        *,
        prevent_empty_target: bool = False,
    ) -> None:
        """Read from `source` and assign into `target`."""
        raise NotImplementedError()

    @abstractmethod
    def write(self, target: Any, source: MutableMapping) -> None:
        """Read from `target` and assign into `source`."""
        raise NotImplementedError()

    @abstractmethod
    def source_list(self) -> list[str]:
        """Absolute source paths this mapper touches."""
        raise NotImplementedError()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.target_path!r})"


class PropertyMapper(PathMapper):
    """Maps one target path to source paths through a transform pipeline."""

    def __init__(
        self,
        target_path: str,
        source_paths: list[str],
        pipeline: TransformPipeline | None = None,
    ):
        super().__init__(target_path)
        self.source_paths = source_paths
        self.pipeline = pipeline or TransformPipeline()

    def read(self, source, target, *, prevent_empty_target=False):
        values = [get_path(source, path) for path in self.source_paths]
        set_path(target, self.target_path, self.pipeline.read(*values))

    def source_list(self) -> list[str]:
        return list(self.source_paths)


class ScalarPropertyMapper(PropertyMapper):
    def write(self, target, source):
        value = self.pipeline.write(get_path(target, self.target_path))
        set_path(source, self.source_paths[0], value)


class MultiSourcePropertyMapper(PropertyMapper):
    """
    Property mapper over an ordered list of source paths.

    On read, the values of all source paths are passed positionally to the read
    pipeline. On write, the pipeline result is spread back over the source
    paths: element ``i`` goes to source path ``i``.
    """

    def write(self, target, source):
        values = self.pipeline.write(get_path(target, self.target_path))
        if not isinstance(values, (list, tuple)):
            values = [values]

        # A shorter result leaves the trailing source paths unassigned
        for path, value in zip(self.source_paths, values):
            set_path(source, path, value)


class NestedPathMapper(PathMapper):
    """Path mapper that delegates to a nested GraphMapper, resolved once."""

    def __init__(self, target_path: str, resolve: Callable[[], GraphMapper]):
        super().__init__(target_path)
        self._resolve = resolve if isinstance(resolve, Lazy) else Lazy(resolve)

    @property
    def mapper(self) -> GraphMapper:
        return self._resolve()


class ChildMapper(NestedPathMapper):
    """
    Maps a target subtree with a nested GraphMapper.

    `root_source_path` is the parent's root: the nested mapper receives the
    parent's slice of the source and applies its own `from` beneath it.
    """

    def __init__(
        self,
        target_path: str,
        resolve: Callable[[], GraphMapper],
        root_source_path: str | None = None,
    ):
        super().__init__(target_path, resolve)
        self.root_source_path = root_source_path

    def read(self, source, target, *, prevent_empty_target=False):
        value = self.mapper._read(
            self._get_source(source),
            prevent_empty_target=prevent_empty_target,
        )
        set_path(target, self.target_path, value)

    def write(self, target, source):
        value = self.mapper._write(get_path(target, self.target_path))
        if value is MISSING:
            return

        # Siblings may write beneath the same source objects
        if self.root_source_path:
            source = ensure_container(source, self.root_source_path)
        merge_tree(source, value)

    def source_list(self) -> list[str]:
        return [join_path(self.root_source_path, path) for path in self.mapper.source_list()]

    def _get_source(self, source):
        if self.root_source_path:
            return get_path(source, self.root_source_path)
        return source


class ArrayMapper(NestedPathMapper):
    """
    Maps a target list to a source list, element by element.

    The nested mapper sees one element at a time, so its own paths are relative
    to the element. Elements it cannot map come out as ``None`` to keep the
    positions of the remaining elements.
    """

    def __init__(
        self,
        target_path: str,
        resolve: Callable[[], GraphMapper],
        source_path: str,
    ):
        super().__init__(target_path, resolve)
        self.source_path = source_path

    def read(self, source, target, *, prevent_empty_target=False):
        items = get_path(source, self.source_path)
        if not isinstance(items, (list, tuple)):
            return

        mapper = self.mapper
        values = [
            mapper._read(item, prevent_empty_target=prevent_empty_target)
            for item in items
        ]
        set_path(target, self.target_path, [_none_if_missing(v) for v in values])

    def write(self, target, source):
        items = get_path(target, self.target_path)
        if not isinstance(items, (list, tuple)):
            return

        mapper = self.mapper
        values = [_none_if_missing(mapper._write(item)) for item in items]
        set_path(source, self.source_path, values)

    def source_list(self) -> list[str]:
        paths = [join_path(self.source_path, ARRAY_MARKER)]
        paths.extend(join_path(self.source_path, path) for path in self.mapper.source_list())
        return paths


def _none_if_missing(value: Any) -> Any:
    return None if value is MISSING else value
