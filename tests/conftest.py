"""
Shared test fixtures and configuration for the todo_gateway test suite.
"""

import json
from typing import Any, List

import pytest
import aioresponses

from todo_gateway.config.models import ClientConfig, ViewConfig
from todo_gateway.graphql.client import TodoClient

TEST_ENDPOINT = "http://todo.test/graphql"


class StubTodoClient(TodoClient):
    """
    TodoClient whose network call is replaced by canned response bodies.

    Each call consumes the next response; the last one is repeated. A
    response that is an exception is raised instead of returned.
    """

    def __init__(self, *responses: Any) -> None:
        super().__init__(ClientConfig(endpoint=TEST_ENDPOINT))
        self.responses: List[Any] = list(responses)
        self.queries: List[str] = []

    async def fetch_raw(self, query: str) -> str:
        self.queries.append(query)
        if len(self.responses) > 1:
            response = self.responses.pop(0)
        else:
            response = self.responses[0]
        if isinstance(response, Exception):
            raise response
        if isinstance(response, str):
            return response
        return json.dumps(response)


@pytest.fixture
def stub_client():
    """Factory for StubTodoClient instances."""
    return StubTodoClient


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(endpoint=TEST_ENDPOINT, timeout=5.0)


@pytest.fixture
def view_config() -> ViewConfig:
    return ViewConfig()


@pytest.fixture
def mock_aiohttp():
    """Mock outbound aiohttp requests, letting local test servers through."""
    with aioresponses.aioresponses(passthrough=["http://127.0.0.1"]) as m:
        yield m


@pytest.fixture
def sample_todos() -> list:
    return [
        {"id": "a", "text": "A todo not to forget", "done": False},
        {"id": "b", "text": "This is the most important", "done": True},
    ]


def pytest_collection_modifyitems(config, items):
    """Tag tests that start local servers as integration tests."""
    for item in items:
        if "test_gateway" in item.nodeid or "test_upstream" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
