"""
graph_mapper

Declarative, bidirectional graph-to-graph data mapping.

Describe once how the paths of an external representation (an API payload, a
legacy schema row) correspond to the paths of an application object, then
translate in both directions without field-by-field glue code:
- read: source tree -> target tree
- write: target tree -> source tree
- source_list / source_tree: which source paths a mapping depends on
- pick / extend: derive restricted or adjusted mappers
"""

__version__ = "0.1.0"

from graph_mapper._base import BaseConfig
from graph_mapper.errors import (
    ConfigurationConflictError,
    GraphMapperError,
    InvalidConfigurationError,
    UnknownMapperNameError,
    UnknownTargetPathError,
)
from graph_mapper.mapping import (
    MISSING,
    GraphMapper,
    MapperRegistry,
    Step,
    TransformPipeline,
    helpers,
)

__all__ = [
    # Version info
    "__version__",
    # Mapping
    "GraphMapper",
    "MapperRegistry",
    "TransformPipeline",
    "Step",
    "MISSING",
    "helpers",
    # Configuration
    "BaseConfig",
    # Errors
    "GraphMapperError",
    "InvalidConfigurationError",
    "ConfigurationConflictError",
    "UnknownTargetPathError",
    "UnknownMapperNameError",
]
