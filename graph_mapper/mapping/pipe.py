"""
Transform pipelines for property mappers.

A pipeline turns the configured `read` and `write` specs (a single callable or
an ordered list of callables) into one read function and one write function.
Any function may return `MISSING` to drop the field from the output.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import Any, NamedTuple

from graph_mapper.mapping.paths import MISSING

Transform = Callable[..., Any]
TransformSpec = Transform | Sequence[Transform] | None


def pass_thru(*values: Any) -> Any:
    """Identity transform. With several source values, the first one wins."""
    return values[0] if values else MISSING


def pipe(fns: Sequence[Transform]) -> Transform:
    """Compose `fns` left to right.

    The first function receives every positional argument, each following
    function receives the previous result.
    """
    if not fns:
        return pass_thru
    first, *rest = fns

    def piped(*args: Any) -> Any:
        result = first(*args)
        for fn in rest:
            result = fn(result)
        return result

    return piped


def compose(spec: TransformSpec) -> Transform:
    if spec is None:
        return pass_thru
    if callable(spec):
        return spec
    return pipe(list(spec))


class Step(NamedTuple):
    """A read transform paired with the write transform that undoes it."""

    read: Transform | None = None
    write: Transform | None = None


class TransformPipeline:
    """
    Read and write functions for a single property mapping.

    Both `read` and `write` run in the order they are configured. Pipelines
    assembled from paired steps with `from_steps` invert the order on write,
    so that reads ``[f1, f2, f3]`` write back as ``[f3', f2', f1']``.
    """

    def __init__(self, read: TransformSpec = None, write: TransformSpec = None):
        self.read = compose(read)
        self.write = compose(write)

    @classmethod
    def from_steps(cls, steps: Iterable[Step]) -> "TransformPipeline":
        steps = list(steps)
        reads = [step.read for step in steps if step.read is not None]
        writes = [step.write for step in reversed(steps) if step.write is not None]
        return cls(read=reads, write=writes)
