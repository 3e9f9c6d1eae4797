"""
Sample functions served by the Cloud Functions entry point.

Select one with the ``FUNCTION_DEFINITION`` environment variable, compose
several (``uppercase|reverse``), or leave it empty and route each request with
the ``Function-Definition`` header.
"""

from typing import Iterator

from pydantic import BaseModel, Field

from function_adapter.catalog import function
from function_adapter.handlers.utils.observability import logger
from function_adapter.messaging import HTTP_STATUS_CODE, Message


class Person(BaseModel):
    """Greeting request."""

    name: str = Field(min_length=1, max_length=50, description='Name of the person to greet')


@function
def uppercase(value: str) -> str:
    return value.upper()


@function
def reverse(value: str) -> str:
    return value[::-1]


@function
def echo(payload):
    return payload


@function
def greet(person: Person) -> Message:
    """Greet a person, answering 201 with the greeted name as a header."""
    return Message(
        payload={'greeting': f'Hello {person.name}'},
        headers={HTTP_STATUS_CODE: 201, 'X-Greeted': person.name},
    )


@function
def countdown() -> Iterator[int]:
    yield from (3, 2, 1)


@function
def log_event(value: str) -> None:
    logger.info('Received event', extra={'event_payload': value})
