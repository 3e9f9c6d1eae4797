"""
Header value model and reserved header names.

Outbound header values are normalized into a tagged union so that the
comma-join of multi-valued headers is explicit rather than decided by type
inspection at every call site.
"""

from dataclasses import dataclass
from typing import Any, Tuple, Union

# Reserved outbound header carrying the HTTP status code
HTTP_STATUS_CODE = 'statusCode'

# Reserved inbound header carrying the background event context
GCF_CONTEXT = 'gcf_context'

# Request header naming the target function for the routing function
FUNCTION_DEFINITION_HEADER = 'Function-Definition'

MULTI_VALUE_SEPARATOR = ','

_MULTI_VALUE_TYPES = (list, tuple, set, frozenset)


@dataclass(frozen=True)
class SingleHeaderValue:
    value: str

    def render(self) -> str:
        return self.value


@dataclass(frozen=True)
class MultiHeaderValue:
    values: Tuple[str, ...]

    def render(self) -> str:
        return MULTI_VALUE_SEPARATOR.join(self.values)


HeaderValue = Union[SingleHeaderValue, MultiHeaderValue]


def to_header_value(raw: Any) -> HeaderValue:
    """
    Normalize a raw message header value.

    Lists, tuples and sets become a multi value whose elements are stringified
    in iteration order; anything else is stringified as a single value.
    """
    if isinstance(raw, _MULTI_VALUE_TYPES):
        return MultiHeaderValue(tuple(str(item) for item in raw))
    return SingleHeaderValue(str(raw))


def is_status_code(value: Any) -> bool:
    """Check if a ``statusCode`` header value can be applied as HTTP status."""
    return isinstance(value, int) and not isinstance(value, bool)
