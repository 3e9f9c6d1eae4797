"""
Pluggable JSON mappers used for payload conversion.

Two implementations are available, selected by the ``JSON_MAPPER`` environment
variable: the standard library ``json`` module (default) and ``pydantic_core``.
Both produce compact output so that re-encoded documents keep their wire form.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Type, Union

from pydantic_core import from_json, to_json, to_jsonable_python

from function_adapter.exceptions import MessageConversionError

DEFAULT_JSON_MAPPER = 'json'


class JsonMapper(ABC):
    """Converts between Python objects and JSON bytes."""

    name: str = ''

    @abstractmethod
    def to_bytes(self, value: Any) -> bytes:
        """Serialize ``value`` to JSON bytes."""

    @abstractmethod
    def from_bytes(self, data: Union[bytes, str]) -> Any:
        """Deserialize JSON ``data``."""


class StdlibJsonMapper(JsonMapper):
    name = 'json'

    def to_bytes(self, value: Any) -> bytes:
        try:
            return json.dumps(value, separators=(',', ':'), default=to_jsonable_python).encode('utf-8')
        except (TypeError, ValueError) as e:
            raise MessageConversionError(f'Failed to serialize {type(value).__name__} to JSON',
                                         payload=value, original_error=e) from e

    def from_bytes(self, data: Union[bytes, str]) -> Any:
        try:
            return json.loads(data)
        except (TypeError, ValueError) as e:
            raise MessageConversionError('Payload is not valid JSON', payload=data, original_error=e) from e


class PydanticJsonMapper(JsonMapper):
    name = 'pydantic'

    def to_bytes(self, value: Any) -> bytes:
        try:
            return to_json(value)
        except ValueError as e:
            raise MessageConversionError(f'Failed to serialize {type(value).__name__} to JSON',
                                         payload=value, original_error=e) from e

    def from_bytes(self, data: Union[bytes, str]) -> Any:
        try:
            return from_json(data)
        except ValueError as e:
            raise MessageConversionError('Payload is not valid JSON', payload=data, original_error=e) from e


_JSON_MAPPERS: Dict[str, Type[JsonMapper]] = {
    StdlibJsonMapper.name: StdlibJsonMapper,
    PydanticJsonMapper.name: PydanticJsonMapper,
}


def get_json_mapper(name: str = DEFAULT_JSON_MAPPER) -> JsonMapper:
    """
    Get a JSON mapper instance by name.

    Args:
        name: Mapper name, empty selects the default mapper

    Returns:
        JSON mapper instance

    Raises:
        ValueError: If no mapper is registered under ``name``
    """
    mapper_class = _JSON_MAPPERS.get(name or DEFAULT_JSON_MAPPER)
    if mapper_class is None:
        raise ValueError(f"Unknown JSON mapper '{name}', expected one of {sorted(_JSON_MAPPERS)}")
    return mapper_class()
