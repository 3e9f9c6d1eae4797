"""
Pytest configuration and shared fixtures for the function adapter.

This module provides common test fixtures and configuration used across
unit and integration tests.
"""

import os
from typing import Any, Callable, Dict, Iterator, List, Optional

import pytest
from flask import Request
from pydantic import BaseModel
from werkzeug.test import EnvironBuilder

from function_adapter.catalog import FunctionCatalog
from function_adapter.converters import get_json_mapper
from function_adapter.handlers.models.invocation_context import InvocationContext
from function_adapter.handlers.resolver import resolve_function
from function_adapter.messaging import Message


# Test environment configuration
@pytest.fixture(scope="session", autouse=True)
def test_environment():
    """Set up test environment variables."""
    os.environ.update({
        "FUNCTION_DEFINITION": "",
        "JSON_MAPPER": "json",
        "POWERTOOLS_SERVICE_NAME": "test-gcf-function-adapter",
        "LOG_LEVEL": "DEBUG",
    })


class Point(BaseModel):
    x: int
    y: int = 0


class Recorder:
    """Collects the arguments functions under test were called with."""

    def __init__(self):
        self.calls: List[Any] = []

    def __call__(self, value: Any) -> None:
        self.calls.append(value)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def catalog(recorder: Recorder) -> FunctionCatalog:
    """Catalog with a representative set of functions."""
    catalog = FunctionCatalog()

    @catalog.function
    def echo(payload):
        return payload

    @catalog.function
    def uppercase(value: str) -> str:
        return value.upper()

    @catalog.function
    def reverse(value: str) -> str:
        return value[::-1]

    @catalog.function
    def move(point: Point) -> Point:
        return Point(x=point.x + 1, y=point.y + 1)

    @catalog.function
    def capture(message: Message) -> None:
        recorder(message)

    @catalog.function
    def consume(value: str) -> None:
        recorder(value)

    @catalog.function
    def hello() -> str:
        recorder(None)
        return 'hello'

    @catalog.function
    def countdown() -> Iterator[int]:
        yield from (3, 2, 1)

    return catalog


@pytest.fixture
def build_context(catalog: FunctionCatalog) -> Callable[..., InvocationContext]:
    """Factory resolving an invocation context the way the invoker does at cold start."""
    def _build(name: str, target_catalog: Optional[FunctionCatalog] = None) -> InvocationContext:
        target_catalog = target_catalog or catalog
        json_mapper = get_json_mapper()
        function = resolve_function(target_catalog, name, json_mapper)
        return InvocationContext(catalog=target_catalog, function=function, json_mapper=json_mapper)

    return _build


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """Factory for Flask requests as delivered by the Cloud Functions host."""
    def _make(
        data: bytes = b'',
        headers: Optional[Dict[str, str]] = None,
        content_type: Optional[str] = None,
        method: str = 'POST',
        path: str = '/',
    ) -> Request:
        builder = EnvironBuilder(method=method, path=path, data=data, headers=headers, content_type=content_type)
        try:
            return Request(builder.get_environ())
        finally:
            builder.close()

    return _make


@pytest.fixture
def event_context() -> Dict[str, Any]:
    """Sample background event context."""
    return {
        "eventId": "123",
        "timestamp": "2024-01-01T12:00:00.000Z",
        "eventType": "google.pubsub.topic.publish",
        "resource": "projects/test-project/topics/test-topic",
    }


# Pytest configuration
def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
