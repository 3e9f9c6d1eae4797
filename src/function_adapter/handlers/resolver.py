"""
Function resolution performed once per instance, at cold start.
"""

from typing import Optional

from function_adapter.catalog.invocation import APPLICATION_JSON, FunctionHandle
from function_adapter.catalog.registry import ROUTER_NAME, FunctionCatalog
from function_adapter.converters.json_mapper import JsonMapper
from function_adapter.exceptions import FunctionNotFoundError
from function_adapter.handlers.utils.observability import logger


def resolve_function(catalog: FunctionCatalog, name: str, json_mapper: Optional[JsonMapper] = None) -> FunctionHandle:
    """
    Resolve the function handle to serve invocations with.

    Looks up ``name`` for ``application/json`` output and falls back to the
    routing function when nothing matches (an empty name always falls back).
    Publisher outputs are left unconverted, the adapter serializes them itself.

    Args:
        catalog: Catalog to resolve from
        name: Configured function definition, may be empty
        json_mapper: Mapper used for payload conversion, defaults to the catalog's

    Returns:
        Resolved function handle; its ``definition`` is the canonical function name

    Raises:
        FunctionNotFoundError: If neither ``name`` nor the routing function resolves
    """
    function = catalog.lookup(name, APPLICATION_JSON, json_mapper=json_mapper)
    if function is None:
        logger.debug(f"No function named '{name}', falling back to '{ROUTER_NAME}'",
                     extra={'registered_functions': sorted(catalog.get_names())})
        function = catalog.lookup(ROUTER_NAME, APPLICATION_JSON, json_mapper=json_mapper)

    if function is None:
        raise FunctionNotFoundError(f"Failed to lookup function '{name}'", definition=name)

    if function.is_output_publisher:
        function = function.with_skip_output_conversion()

    logger.info(f"Located function: '{function.definition}'")
    return function
