"""
Per-instance invocation context built at cold start.
"""

from dataclasses import dataclass

from function_adapter.catalog.invocation import FunctionHandle
from function_adapter.catalog.registry import FunctionCatalog
from function_adapter.converters.json_mapper import JsonMapper


@dataclass(frozen=True)
class InvocationContext:
    """Everything an invocation handler needs, resolved once and never rebuilt."""

    catalog: FunctionCatalog
    function: FunctionHandle
    json_mapper: JsonMapper

    @property
    def function_name(self) -> str:
        return self.function.definition
