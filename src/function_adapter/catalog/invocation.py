"""
Invocable function handles.

A handle wraps a registered Python callable together with the input and output
types declared by its signature. Calling a handle with a ``Message`` converts the
payload into the declared input type, invokes the callable and converts the
result back into a ``Message`` with a byte payload.

Handles come in three variants sharing the ``FunctionHandle`` interface:

- ``FunctionInvocationWrapper``: a single registered function
- ``ComposedFunction``: registered functions chained left to right
- ``RoutingFunction`` (see ``routing``): selects the target per message
"""

import collections.abc
import copy
import inspect
import types
import typing
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from pydantic import TypeAdapter, ValidationError

from function_adapter.converters.json_mapper import JsonMapper, get_json_mapper
from function_adapter.exceptions import MessageConversionError
from function_adapter.messaging.message import Message

APPLICATION_JSON = 'application/json'
TEXT_PLAIN = 'text/plain'

# Input headers that no longer describe a converted output payload
_NON_PROPAGATED_HEADERS = frozenset({'content-length'})

_PUBLISHER_ORIGINS = (
    collections.abc.Iterator,
    collections.abc.Generator,
    collections.abc.Iterable,
)


class FunctionKind(str, Enum):
    """Shape of a registered function."""

    SUPPLIER = 'supplier'
    CONSUMER = 'consumer'
    FUNCTION = 'function'


def _type_hints(target: Callable) -> Dict[str, Any]:
    if not (inspect.isfunction(target) or inspect.ismethod(target)):
        target = getattr(target, '__call__', target)
    try:
        return typing.get_type_hints(target)
    except (NameError, TypeError):
        return {}


def _is_publisher_type(annotation: Any) -> bool:
    origin = typing.get_origin(annotation) or annotation
    return inspect.isclass(origin) and origin in _PUBLISHER_ORIGINS


def _is_union(annotation: Any) -> bool:
    return typing.get_origin(annotation) in (typing.Union, types.UnionType)


def _strip_optional(annotation: Any) -> Any:
    if not _is_union(annotation):
        return annotation
    args = tuple(arg for arg in typing.get_args(annotation) if arg is not type(None))
    if len(args) == 1:
        return args[0]
    return typing.Union[args]


def _is_text_union(annotation: Any) -> bool:
    return _is_union(annotation) and set(typing.get_args(annotation)) <= {str, bytes}


@dataclass(frozen=True)
class FunctionRegistration:
    """A Python callable registered in the catalog, with its declared types."""

    name: str
    target: Callable[..., Any]
    kind: FunctionKind
    input_type: Optional[Any]
    output_type: Any
    output_is_publisher: bool

    @classmethod
    def from_callable(cls, target: Callable[..., Any], name: Optional[str] = None) -> 'FunctionRegistration':
        """
        Inspect a callable and derive its registration.

        Args:
            target: Function, lambda or callable object taking at most one argument
            name: Registration name, defaults to the callable's ``__name__``

        Raises:
            ValueError: If the callable requires more than one argument or has no usable name
        """
        name = name or getattr(target, '__name__', None)
        if not name or name == '<lambda>':
            raise ValueError('A name is required to register an anonymous function')

        parameters = [
            parameter for parameter in inspect.signature(target).parameters.values()
            if parameter.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
            and parameter.default is inspect.Parameter.empty
        ]
        if len(parameters) > 1:
            raise ValueError(f"Function '{name}' must accept at most one argument, got {len(parameters)}")

        hints = _type_hints(target)
        output_type = hints.get('return', Any)
        output_is_publisher = (
            _is_publisher_type(output_type)
            or inspect.isgeneratorfunction(target)
        )

        if not parameters:
            kind = FunctionKind.SUPPLIER
            input_type = None
        else:
            input_type = hints.get(parameters[0].name, Any)
            kind = FunctionKind.CONSUMER if output_type is type(None) else FunctionKind.FUNCTION

        return cls(
            name=name,
            target=target,
            kind=kind,
            input_type=input_type,
            output_type=output_type,
            output_is_publisher=output_is_publisher,
        )

    @cached_property
    def input_adapter(self) -> TypeAdapter:
        return TypeAdapter(self.input_type)

    @cached_property
    def payload_type(self) -> Optional[Any]:
        """Input type with ``None`` removed from an optional annotation."""
        return _strip_optional(self.input_type)


class FunctionHandle(ABC):
    """Invocable reference to a function resolved from the catalog."""

    definition: str = ''
    skip_output_conversion: bool = False

    @property
    @abstractmethod
    def input_type(self) -> Optional[Any]:
        """Declared input type, ``None`` when the function takes no input."""

    @property
    @abstractmethod
    def is_output_publisher(self) -> bool:
        """Whether the function produces a stream of values."""

    @property
    def is_input_type_void(self) -> bool:
        return self.input_type is None

    @abstractmethod
    def __call__(self, message: Optional[Message] = None) -> Optional[Message]:
        """Invoke the function with a message and return the result message."""

    def with_skip_output_conversion(self) -> 'FunctionHandle':
        """Return a copy of this handle that leaves output payloads unconverted."""
        handle = copy.copy(self)
        handle.skip_output_conversion = True
        return handle

    def __repr__(self) -> str:
        return f"{type(self).__name__}(definition='{self.definition}')"


class FunctionInvocationWrapper(FunctionHandle):
    """Handle for a single registered function."""

    def __init__(
        self,
        registration: FunctionRegistration,
        accepted_output_types: Sequence[str] = (APPLICATION_JSON,),
        json_mapper: Optional[JsonMapper] = None,
    ):
        self.registration = registration
        self.definition = registration.name
        self.accepted_output_types: Tuple[str, ...] = tuple(accepted_output_types) or (APPLICATION_JSON,)
        self.json_mapper = json_mapper or get_json_mapper()

    @property
    def input_type(self) -> Optional[Any]:
        return self.registration.input_type

    @property
    def is_output_publisher(self) -> bool:
        return self.registration.output_is_publisher

    @property
    def kind(self) -> FunctionKind:
        return self.registration.kind

    def __call__(self, message: Optional[Message] = None) -> Optional[Message]:
        if self.kind is FunctionKind.SUPPLIER:
            result = self.registration.target()
        else:
            result = self.registration.target(self._convert_input(message))
        return self._convert_output(result, message)

    def _convert_input(self, message: Optional[Message]) -> Any:
        if message is None:
            return None

        input_type = self.registration.payload_type
        if input_type is Message:
            return message

        payload = message.payload
        if hasattr(payload, 'read'):
            payload = payload.read()
        if input_type is Any or input_type is object:
            return payload

        if _is_text_union(input_type):
            if isinstance(payload, (bytes, str)):
                return payload
            input_type = bytes

        if input_type is bytes:
            return payload.encode('utf-8') if isinstance(payload, str) else bytes(payload)

        if input_type is str:
            if isinstance(payload, (bytes, bytearray)):
                try:
                    return bytes(payload).decode('utf-8')
                except UnicodeDecodeError as e:
                    raise MessageConversionError(f"Payload for '{self.definition}' is not UTF-8 text",
                                                 payload=payload, original_error=e) from e
            return str(payload)

        data = self.json_mapper.from_bytes(payload) if isinstance(payload, (bytes, bytearray, str)) else payload
        try:
            return self.registration.input_adapter.validate_python(data)
        except ValidationError as e:
            raise MessageConversionError(
                f"Payload does not match input type of '{self.definition}': {e.error_count()} error(s)",
                payload=data,
                original_error=e,
            ) from e

    def _convert_output(self, result: Any, input_message: Optional[Message]) -> Optional[Message]:
        if result is None:
            return None

        if isinstance(result, Message):
            output = result
        else:
            headers = {}
            if input_message is not None:
                headers = {
                    key: value for key, value in input_message.headers.items()
                    if key.lower() not in _NON_PROPAGATED_HEADERS
                }
            output = Message(payload=result, headers=headers)

        if self.skip_output_conversion:
            return output
        return output.with_payload(self._payload_to_bytes(output.payload))

    def _payload_to_bytes(self, payload: Any) -> bytes:
        if isinstance(payload, (bytes, bytearray)):
            return bytes(payload)
        if isinstance(payload, str):
            return payload.encode('utf-8')
        if isinstance(payload, collections.abc.Iterator):
            payload = list(payload)
        if TEXT_PLAIN in self.accepted_output_types and APPLICATION_JSON not in self.accepted_output_types:
            return str(payload).encode('utf-8')
        return self.json_mapper.to_bytes(payload)


class ComposedFunction(FunctionHandle):
    """Registered functions chained so each output feeds the next input."""

    def __init__(self, functions: Sequence[FunctionHandle]):
        if len(functions) < 2:
            raise ValueError('Composition requires at least two functions')
        self.functions: Tuple[FunctionHandle, ...] = tuple(functions)
        self.definition = '|'.join(function.definition for function in self.functions)

    @property
    def input_type(self) -> Optional[Any]:
        return self.functions[0].input_type

    @property
    def is_output_publisher(self) -> bool:
        return self.functions[-1].is_output_publisher

    def with_skip_output_conversion(self) -> 'FunctionHandle':
        composed = super().with_skip_output_conversion()
        composed.functions = self.functions[:-1] + (self.functions[-1].with_skip_output_conversion(),)
        return composed

    def __call__(self, message: Optional[Message] = None) -> Optional[Message]:
        result = message
        for function in self.functions:
            result = function(result)
            if result is None:
                return None
        return result
