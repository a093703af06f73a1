"""
Root conftest for the pytest test suite.

This file contains the main fixtures that are used across the entire test suite.

Each test runs against a fresh, isolated in-memory SQLite database that is
initialized and torn down by an async, autouse fixture. Report builder tests
that use an in-memory repository simply ignore it.

Key Fixtures:
- `anyio_backend`: Specifies the asyncio backend.
- `initialize_test_db`: (autouse) Creates a fresh DB schema for each test.
- `app_for_testing`: Provides the FastAPI application instance with its production
  lifespan disabled to allow `initialize_test_db` to manage the test DB.
- `client`: Provides a TestClient against `app_for_testing`.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from tortoise import Tortoise

from chai_adda.core.config import MODEL_MODULES
from chai_adda.main import app as actual_app


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """
    Specifies the asyncio backend.
    """
    return "asyncio"


@pytest_asyncio.fixture(scope="function", autouse=True)
async def initialize_test_db() -> AsyncGenerator[None, None]:
    """
    Initializes the database for each test function.

    This async, autouse fixture creates a fresh in-memory database and schema
    for each test and tears it down afterwards.
    """
    test_db_config = {
        "connections": {"default": "sqlite://:memory:"},
        "apps": {
            "models": {
                "models": MODEL_MODULES,
                "default_connection": "default",
            }
        },
        "use_tz": True,
        "timezone": "UTC",
    }
    await Tortoise.init(config=test_db_config)
    await Tortoise.generate_schemas()

    yield

    await Tortoise.close_connections()


@pytest.fixture(scope="function")
def app_for_testing() -> Generator[FastAPI, Any, None]:
    """
    Provides a FastAPI application instance for testing, with its
    production lifespan manager disabled to allow the test DB fixture
    to manage the database connection.
    """
    original_lifespan = actual_app.router.lifespan_context

    @asynccontextmanager
    async def dummy_lifespan(app: FastAPI):
        yield

    actual_app.router.lifespan_context = dummy_lifespan

    yield actual_app

    # Restore the original lifespan context and any overridden dependencies
    actual_app.router.lifespan_context = original_lifespan
    actual_app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(app_for_testing: FastAPI) -> Generator[TestClient, Any, None]:
    """
    Provides a starlette TestClient.
    """
    with TestClient(app_for_testing) as tc:
        yield tc
