"""
Generic message envelope used as the invocation and return contract of
catalog functions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class Message:
    """A payload together with its headers."""

    payload: Any
    headers: Dict[str, Any] = field(default_factory=dict)

    def get_header(self, name: str, default: Any = None) -> Any:
        """Case-insensitive header lookup."""
        if name in self.headers:
            return self.headers[name]
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return default

    def with_payload(self, payload: Any) -> 'Message':
        """Return a copy of this message carrying a different payload."""
        return Message(payload=payload, headers=dict(self.headers))
