"""
In-process function catalog.

Functions are plain Python callables registered under a name, either directly
or with the ``function`` decorator:

    from function_adapter.catalog import function

    @function
    def uppercase(value: str) -> str:
        return value.upper()

    @function('greeter')
    def greet(person: Person) -> dict:
        return {'greeting': f'Hello {person.name}'}

Definitions passed to ``lookup`` name one function or compose several with
``|`` (``,`` is accepted as well), e.g. ``uppercase|reverse``.
"""

import re
from typing import Any, Callable, Dict, List, Optional, Set, Union

from function_adapter.catalog.invocation import (
    APPLICATION_JSON,
    ComposedFunction,
    FunctionHandle,
    FunctionInvocationWrapper,
    FunctionKind,
    FunctionRegistration,
)
from function_adapter.catalog.routing import RouteSelector, RoutingFunction
from function_adapter.converters.json_mapper import JsonMapper, get_json_mapper
from function_adapter.handlers.utils.observability import logger

ROUTER_NAME = RoutingFunction.FUNCTION_NAME

_DEFINITION_DELIMITER = re.compile(r'[|,]')


class FunctionCatalog:
    """Registry of named functions."""

    def __init__(
        self,
        json_mapper: Optional[JsonMapper] = None,
        routing_enabled: bool = True,
        route_selector: Optional[RouteSelector] = None,
    ):
        self.json_mapper = json_mapper or get_json_mapper()
        self.routing_enabled = routing_enabled
        self.route_selector = route_selector
        self._registrations: Dict[str, FunctionRegistration] = {}

    def register(self, target: Callable[..., Any], name: Optional[str] = None) -> FunctionRegistration:
        """
        Register a callable.

        Args:
            target: Callable taking at most one argument
            name: Registration name, defaults to the callable's ``__name__``

        Returns:
            The registration describing the function's declared types

        Raises:
            ValueError: If the name is reserved, malformed or the callable has an unsupported signature
        """
        registration = FunctionRegistration.from_callable(target, name)
        if registration.name == ROUTER_NAME:
            raise ValueError(f"'{ROUTER_NAME}' is reserved for the routing function")
        if _DEFINITION_DELIMITER.search(registration.name):
            raise ValueError(f"Function name '{registration.name}' must not contain '|' or ','")

        if registration.name in self._registrations:
            logger.debug(f"Replacing function '{registration.name}'")
        self._registrations[registration.name] = registration

        logger.debug(f"Registered {registration.kind.value} '{registration.name}'")
        return registration

    def function(self, name: Union[str, Callable[..., Any], None] = None) -> Callable:
        """
        Decorator registering a function in this catalog.

        Usable bare (``@catalog.function``) or with a name
        (``@catalog.function('name')``). The decorated callable is returned unchanged.
        """
        if callable(name):
            self.register(name)
            return name

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.register(func, name)
            return func

        return decorator

    def lookup(
        self,
        definition: Optional[str],
        *accepted_output_types: str,
        json_mapper: Optional[JsonMapper] = None,
    ) -> Optional[FunctionHandle]:
        """
        Look up a function handle for a definition.

        Args:
            definition: Function name, composition (``a|b``) or the routing function name
            accepted_output_types: Content types the output should be converted to
            json_mapper: Mapper used for payload conversion, defaults to the catalog's

        Returns:
            Function handle, or None when the definition is empty or unknown
        """
        definition = (definition or '').strip()
        if not definition:
            return None

        accepted_output_types = accepted_output_types or (APPLICATION_JSON,)
        json_mapper = json_mapper or self.json_mapper

        if definition == ROUTER_NAME:
            if not self.routing_enabled:
                return None
            return RoutingFunction(
                self,
                route_selector=self.route_selector,
                accepted_output_types=accepted_output_types,
                json_mapper=json_mapper,
            )

        names = [name.strip() for name in _DEFINITION_DELIMITER.split(definition)]
        handles: List[FunctionHandle] = []
        for name in names:
            registration = self._registrations.get(name)
            if registration is None:
                return None
            handles.append(FunctionInvocationWrapper(registration, accepted_output_types, json_mapper))

        if len(handles) == 1:
            return handles[0]
        return ComposedFunction(handles)

    def get_names(self, kind: Union[FunctionKind, str, None] = None) -> Set[str]:
        """
        Get registered function names.

        Args:
            kind: Restrict to suppliers, consumers or functions

        Returns:
            Set of registered names
        """
        if kind is None:
            return set(self._registrations)
        kind = FunctionKind(kind)
        return {name for name, registration in self._registrations.items() if registration.kind is kind}

    def __contains__(self, name: object) -> bool:
        return name in self._registrations

    def __len__(self) -> int:
        return len(self._registrations)


# Global catalog populated by the module level ``function`` decorator
_function_catalog = FunctionCatalog()


def get_function_catalog() -> FunctionCatalog:
    """Get the global function catalog."""
    return _function_catalog


def function(name: Union[str, Callable[..., Any], None] = None) -> Callable:
    """Register a function in the global catalog, see ``FunctionCatalog.function``."""
    return _function_catalog.function(name)
