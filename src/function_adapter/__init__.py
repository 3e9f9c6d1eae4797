"""
Function adapter for Google Cloud Functions.

Bridges an in-process function catalog to the Cloud Functions HTTP and
background invocation contracts: a function is resolved by name (falling back
to the routing function), host input is wrapped in a ``Message``, the function
is invoked and its result message is translated back into host output.
"""

__version__ = "1.0.0"

from function_adapter.catalog import FunctionCatalog, RoutingFunction, function, get_function_catalog
from function_adapter.exceptions import FunctionAdapterError, FunctionNotFoundError, MessageConversionError
from function_adapter.handlers.function_invoker import FunctionInvoker
from function_adapter.messaging import Message

__all__ = [
    "__version__",
    "FunctionInvoker",
    "FunctionCatalog",
    "RoutingFunction",
    "Message",
    "function",
    "get_function_catalog",
    "FunctionAdapterError",
    "FunctionNotFoundError",
    "MessageConversionError",
]
