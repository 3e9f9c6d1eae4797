"""
Serialization of result payloads written back to the host.
"""

from collections.abc import Iterable
from typing import Any

from function_adapter.converters.json_mapper import JsonMapper


def payload_to_bytes(payload: Any, json_mapper: JsonMapper) -> bytes:
    """
    Serialize a result payload.

    Payloads converted by the catalog are already bytes. Outputs of publisher
    functions reach the adapter unconverted: iterables are drained into a list
    and written as a JSON array, other objects as JSON.
    """
    if payload is None:
        return b''
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload)
    if isinstance(payload, str):
        return payload.encode('utf-8')
    if isinstance(payload, Iterable) and not isinstance(payload, dict):
        payload = list(payload)
    return json_mapper.to_bytes(payload)
