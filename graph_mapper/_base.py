from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from graph_mapper.errors import InvalidConfigurationError


class BaseConfig(BaseModel):
    """
    Base configuration class for mappers.
    This class can be extended to define the options accepted by a mapper
    configuration tree.
    """

    model_config = ConfigDict(
        extra="forbid",  # Disallow unknown configuration keys
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    debug: bool = False  # Debug mode flag


class ConfigFragment(BaseModel):
    "Base schema for a single entry beneath a mapper's `to` table"

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )


M = TypeVar("M", bound=BaseModel)


def validate_config(
    schema: type[M],
    data: Any,
    *,
    context: str | None = None,
) -> M:
    """Validate raw configuration data against a schema.

    Args:
        schema: Pydantic model describing the accepted keys.
        data: Raw configuration mapping.
        context: Optional target path, used to point at the offending entry.

    Returns:
        The parsed configuration model.

    Raises:
        InvalidConfigurationError: If the data does not match the schema.
    """
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        where = f" for target path '{context}'" if context else ""
        raise InvalidConfigurationError(
            f"Invalid mapper configuration{where}: {e}",
        ) from e
