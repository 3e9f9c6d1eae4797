"""
HTTP invocation: translates a Cloud Functions HTTP request into a message and
the function's result message back into an HTTP response.
"""

from typing import Any, Dict

from flask import Request, Response

from function_adapter.handlers.models.invocation_context import InvocationContext
from function_adapter.handlers.utils.observability import TRACE_CONTEXT_HEADER, logger
from function_adapter.handlers.utils.payload import payload_to_bytes
from function_adapter.messaging.headers import HTTP_STATUS_CODE, is_status_code, to_header_value
from function_adapter.messaging.message import Message


def copy_request_headers(request: Request) -> Dict[str, Any]:
    """Copy request headers verbatim. The WSGI host has already merged repeated names."""
    return dict(request.headers.items())


def handle_http(context: InvocationContext, request: Request) -> Response:
    """
    Invoke the resolved function for an HTTP request.

    Exceptions raised by the function propagate to the host.

    Args:
        context: Invocation context built at cold start
        request: Incoming Flask request

    Returns:
        Response built from the result message, or a default response when the function returned nothing
    """
    logger.set_correlation_id(request.headers.get(TRACE_CONTEXT_HEADER))

    function = context.function
    message = None
    if not function.is_input_type_void:
        message = Message(payload=request.get_data(), headers=copy_request_headers(request))

    logger.debug('Invoking function', extra={
        'function_definition': context.function_name,
        'http_method': request.method,
        'path': request.path,
    })
    result = function(message)

    response = Response()
    if result is None:
        return response

    for key, value in result.headers.items():
        if key == HTTP_STATUS_CODE:
            continue
        response.headers.set(key, to_header_value(value).render())

    # body after headers: set_data owns Content-Length
    response.set_data(payload_to_bytes(result.payload, context.json_mapper))

    if request.content_type:
        response.content_type = request.content_type

    if HTTP_STATUS_CODE in result.headers:
        status_code = result.headers[HTTP_STATUS_CODE]
        if is_status_code(status_code):
            response.status_code = status_code
        else:
            logger.warning('The statusCode should be an Integer value', extra={'status_code': repr(status_code)})

    return response
