"""
Routing function: the router-dispatch variant of ``FunctionHandle``.

The routing function is resolved when no function matches the configured
definition. Instead of being bound to one target it selects the target for
every message it receives:

1. the ``Function-Definition`` message header (matched case-insensitively)
2. the catalog's ``route_selector`` callable, if one was configured
"""

from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence, Tuple

from function_adapter.catalog.invocation import APPLICATION_JSON, FunctionHandle
from function_adapter.converters.json_mapper import JsonMapper
from function_adapter.exceptions import FunctionNotFoundError
from function_adapter.handlers.utils.observability import logger
from function_adapter.messaging.headers import FUNCTION_DEFINITION_HEADER
from function_adapter.messaging.message import Message

if TYPE_CHECKING:
    from function_adapter.catalog.registry import FunctionCatalog

RouteSelector = Callable[[Message], Optional[str]]


class RoutingFunction(FunctionHandle):
    """Dispatches each message to a function selected at invocation time."""

    FUNCTION_NAME = 'functionRouter'

    def __init__(
        self,
        catalog: 'FunctionCatalog',
        route_selector: Optional[RouteSelector] = None,
        accepted_output_types: Sequence[str] = (APPLICATION_JSON,),
        json_mapper: Optional[JsonMapper] = None,
    ):
        self.catalog = catalog
        self.route_selector = route_selector
        self.accepted_output_types: Tuple[str, ...] = tuple(accepted_output_types)
        self.json_mapper = json_mapper
        self.definition = self.FUNCTION_NAME

    @property
    def input_type(self) -> Optional[Any]:
        return Message

    @property
    def is_output_publisher(self) -> bool:
        return False

    def __call__(self, message: Optional[Message] = None) -> Optional[Message]:
        definition = self._route(message)
        if definition == self.FUNCTION_NAME:
            raise FunctionNotFoundError('The routing function cannot route to itself', definition=definition)

        target = self.catalog.lookup(definition, *self.accepted_output_types, json_mapper=self.json_mapper)
        if target is None:
            raise FunctionNotFoundError(f"Failed to route to function '{definition}'", definition=definition)
        if self.skip_output_conversion:
            target = target.with_skip_output_conversion()

        logger.debug('Routing message', extra={'function_definition': target.definition})
        return target(message)

    def _route(self, message: Optional[Message]) -> str:
        if message is not None:
            definition = message.get_header(FUNCTION_DEFINITION_HEADER)
            if isinstance(definition, (list, tuple)):
                definition = definition[0] if definition else None
            if definition:
                return str(definition).strip()

            if self.route_selector is not None:
                definition = self.route_selector(message)
                if definition:
                    return definition

        raise FunctionNotFoundError(
            f"Failed to determine target function: set the '{FUNCTION_DEFINITION_HEADER}' header "
            'or configure a route selector'
        )
