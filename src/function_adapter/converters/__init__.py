from function_adapter.converters.json_mapper import (
    DEFAULT_JSON_MAPPER,
    JsonMapper,
    PydanticJsonMapper,
    StdlibJsonMapper,
    get_json_mapper,
)

__all__ = [
    'DEFAULT_JSON_MAPPER',
    'JsonMapper',
    'StdlibJsonMapper',
    'PydanticJsonMapper',
    'get_json_mapper',
]
