"""
Pytest configuration and shared fixtures for graph mapper tests.
"""

import pytest
from loguru import logger

from graph_mapper.mapping import MapperRegistry, helpers


@pytest.fixture
def person_source():
    """Fixture for a source tree shaped like a legacy person record."""
    return {
        "Person": {
            "Job": "Batman",
            "FirstName": "Bruce",
            "LastName": "Wayne",
            "Address": {
                "City": "Gotham",
                "Country": "USA",
            },
        },
    }


@pytest.fixture
def person_target():
    """Fixture for the application-shaped counterpart of person_source."""
    return {
        "name": "Bruce Wayne Batman",
        "address": {
            "city": "Gotham",
            "state": {
                "country": "USA",
            },
        },
    }


@pytest.fixture
def person_registry():
    """Fixture for a registry where person references address and address references state."""
    mappers = MapperRegistry()

    mappers.define(
        "person",
        {
            "from": "Person",
            "to": {
                "name": helpers.join(["FirstName", "LastName", "Job"]),
                "address": mappers.use("address"),
            },
        },
    )

    mappers.define(
        "address",
        {
            "from": "Address",
            "to": {
                "city": "City",
                "state": mappers.use("state"),
            },
        },
    )

    mappers.define("state", {"to": {"country": "Country"}})
    return mappers


@pytest.fixture
def log_records():
    """Fixture collecting loguru messages emitted during a test."""
    records = []
    handler_id = logger.add(records.append, level="DEBUG", format="{message}")
    yield records
    logger.remove(handler_id)
