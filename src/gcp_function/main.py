"""
Cloud Functions entry points.

The ``FunctionInvoker`` is built when this module is imported, which is the
instance cold start; a misconfigured function definition therefore fails the
deployment instead of the first request.

Deploy with one of the targets:

- ``handle_http``: HTTP trigger
- ``handle_event``: legacy background trigger (``--signature-type=event``)
- ``handle_cloud_event``: CloudEvent trigger
"""

from typing import Any

import functions_framework
from flask import Request, Response

from function_adapter.handlers.function_invoker import FunctionInvoker
from gcp_function import functions  # noqa: F401  registers the sample functions

invoker = FunctionInvoker()


def _to_text(data: Any) -> str:
    if isinstance(data, str):
        return data
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode('utf-8', errors='replace')
    return invoker.context.json_mapper.to_bytes(data).decode('utf-8')


@functions_framework.http
def handle_http(request: Request) -> Response:
    """HTTP trigger entry point."""
    return invoker.service(request)


def handle_event(data: Any, context: Any) -> None:
    """Legacy background trigger entry point."""
    invoker.accept(_to_text(data), context)


@functions_framework.cloud_event
def handle_cloud_event(cloud_event: Any) -> None:
    """CloudEvent trigger entry point; the event attributes become the event context."""
    invoker.accept(_to_text(cloud_event.data), cloud_event.get_attributes())
