"""
Graph Mapping Module

This module provides declarative, bidirectional mapping between nested
key-value trees. A configuration describes which source paths feed which
target paths; the compiled mapper reads source trees into target trees and
writes target trees back into source trees.

The module includes:
- GraphMapper: compiles a configuration and orchestrates read/write/pick
- MapperRegistry: named mappers that reference each other lazily
- Path mappers: scalar, multi-source, child and array variants
- TransformPipeline: read/write transform composition
- helpers: prebuilt path configurations for common conversions
"""

from . import helpers
from .config import MapperConfig, PathConfig
from .graph import GraphMapper
from .mappers import (
    ARRAY_MARKER,
    ArrayMapper,
    ChildMapper,
    MultiSourcePropertyMapper,
    PathMapper,
    ScalarPropertyMapper,
)
from .paths import MISSING, get_path, set_path
from .pipe import Step, TransformPipeline, pipe
from .registry import MapperRegistry

__all__ = [
    "GraphMapper",
    "MapperRegistry",
    "MapperConfig",
    "PathConfig",
    "PathMapper",
    "ScalarPropertyMapper",
    "MultiSourcePropertyMapper",
    "ChildMapper",
    "ArrayMapper",
    "ARRAY_MARKER",
    "TransformPipeline",
    "Step",
    "pipe",
    "MISSING",
    "get_path",
    "set_path",
    "helpers",
]
