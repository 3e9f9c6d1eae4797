"""
Function catalog: registration, lookup and invocation of named functions.
"""

from function_adapter.catalog.invocation import (
    APPLICATION_JSON,
    TEXT_PLAIN,
    ComposedFunction,
    FunctionHandle,
    FunctionInvocationWrapper,
    FunctionKind,
    FunctionRegistration,
)
from function_adapter.catalog.registry import (
    ROUTER_NAME,
    FunctionCatalog,
    function,
    get_function_catalog,
)
from function_adapter.catalog.routing import RoutingFunction

__all__ = [
    'APPLICATION_JSON',
    'TEXT_PLAIN',
    'ROUTER_NAME',
    'FunctionCatalog',
    'FunctionHandle',
    'FunctionInvocationWrapper',
    'ComposedFunction',
    'RoutingFunction',
    'FunctionKind',
    'FunctionRegistration',
    'function',
    'get_function_catalog',
]
