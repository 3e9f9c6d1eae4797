"""
Message envelope and header helpers.
"""

from function_adapter.messaging.headers import (
    FUNCTION_DEFINITION_HEADER,
    GCF_CONTEXT,
    HTTP_STATUS_CODE,
    HeaderValue,
    MultiHeaderValue,
    SingleHeaderValue,
    is_status_code,
    to_header_value,
)
from function_adapter.messaging.message import Message

__all__ = [
    'Message',
    'HeaderValue',
    'SingleHeaderValue',
    'MultiHeaderValue',
    'to_header_value',
    'is_status_code',
    'HTTP_STATUS_CODE',
    'GCF_CONTEXT',
    'FUNCTION_DEFINITION_HEADER',
]
