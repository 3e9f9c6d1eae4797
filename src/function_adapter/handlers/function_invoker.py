"""
Cloud Functions entry point adapter.

A ``FunctionInvoker`` is constructed once per instance. Construction performs
the cold start: it reads the adapter configuration, imports the module that
registers user functions, selects the JSON mapper and resolves the function
to serve. The resulting ``InvocationContext`` is immutable and shared by every
subsequent HTTP or background invocation.

Configuration (environment variables):

- ``FUNCTION_DEFINITION``: function name or composition, empty selects the routing function
- ``JSON_MAPPER``: ``json`` (default) or ``pydantic``
- ``FUNCTION_MODULE``: module imported before resolution
"""

from importlib import import_module
from typing import Any, Optional

from flask import Request, Response

from function_adapter.catalog.invocation import FunctionHandle
from function_adapter.catalog.registry import FunctionCatalog, get_function_catalog
from function_adapter.converters.json_mapper import get_json_mapper
from function_adapter.handlers.background_handler import handle_background
from function_adapter.handlers.http_handler import handle_http
from function_adapter.handlers.models.env_vars import AdapterEnvVars, get_adapter_env_vars
from function_adapter.handlers.models.invocation_context import InvocationContext
from function_adapter.handlers.resolver import resolve_function
from function_adapter.handlers.utils.observability import logger
from function_adapter.messaging import headers


class FunctionInvoker:
    """Serves Cloud Functions HTTP and background invocations with a catalog function."""

    # Reserved result header holding the HTTP status code
    HTTP_STATUS_CODE = headers.HTTP_STATUS_CODE

    def __init__(self, catalog: Optional[FunctionCatalog] = None, env_vars: Optional[AdapterEnvVars] = None):
        """
        Perform the cold start.

        Args:
            catalog: Catalog to resolve from, defaults to the global catalog
            env_vars: Adapter configuration, defaults to the process environment

        Raises:
            FunctionNotFoundError: If no function and no routing function can be resolved
            ValidationError: If the environment holds an invalid configuration
        """
        if env_vars is None:
            env_vars = get_adapter_env_vars()

        if env_vars.FUNCTION_MODULE:
            logger.info(f'Initializing: {env_vars.FUNCTION_MODULE}')
            import_module(env_vars.FUNCTION_MODULE)

        if catalog is None:
            catalog = get_function_catalog()

        if env_vars.uses_router:
            logger.info('No function definition configured, serving the routing function')

        json_mapper = get_json_mapper(env_vars.JSON_MAPPER)
        function = resolve_function(catalog, env_vars.FUNCTION_DEFINITION, json_mapper)

        self._context = InvocationContext(catalog=catalog, function=function, json_mapper=json_mapper)
        logger.append_keys(function_definition=self._context.function_name)

    @property
    def context(self) -> InvocationContext:
        return self._context

    @property
    def catalog(self) -> FunctionCatalog:
        return self._context.catalog

    @property
    def function(self) -> FunctionHandle:
        return self._context.function

    @property
    def function_name(self) -> str:
        return self._context.function_name

    def service(self, request: Request) -> Response:
        """Handle a Cloud Functions HTTP invocation."""
        return handle_http(self._context, request)

    def accept(self, payload: str, event_context: Any) -> None:
        """Handle a Cloud Functions background invocation."""
        handle_background(self._context, payload, event_context)
