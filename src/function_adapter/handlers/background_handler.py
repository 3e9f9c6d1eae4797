"""
Background (event) invocation. The host offers no channel back to the event
source, so results are logged and dropped.
"""

from collections.abc import Mapping
from typing import Any, Optional

from function_adapter.handlers.models.invocation_context import InvocationContext
from function_adapter.handlers.utils.observability import logger
from function_adapter.handlers.utils.payload import payload_to_bytes
from function_adapter.messaging.headers import GCF_CONTEXT
from function_adapter.messaging.message import Message


def _event_id(event_context: Any) -> Optional[str]:
    if isinstance(event_context, Mapping):
        event_id = event_context.get('eventId') or event_context.get('event_id') or event_context.get('id')
    else:
        event_id = getattr(event_context, 'event_id', None)
    return str(event_id) if event_id else None


def handle_background(context: InvocationContext, payload: str, event_context: Any) -> None:
    """
    Invoke the resolved function for a background event.

    Args:
        context: Invocation context built at cold start
        payload: Raw event payload
        event_context: Event metadata, attached verbatim as the ``gcf_context`` header
    """
    logger.set_correlation_id(_event_id(event_context))

    function = context.function
    message = None
    if not function.is_input_type_void:
        message = Message(payload=payload, headers={GCF_CONTEXT: event_context})

    logger.debug('Invoking function', extra={'function_definition': context.function_name})
    result = function(message)

    if result is not None:
        dropped = payload_to_bytes(result.payload, context.json_mapper).decode('utf-8', errors='replace')
        logger.info(f'Dropping background function result: {dropped}')
