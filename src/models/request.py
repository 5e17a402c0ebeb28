"""
Render request model

Request-scoped state of the structured data engine. One RenderRequest
drives exactly one display() call and is reset afterwards, so the same
holder can serve the next directive of a rewrite pass.
"""

from dataclasses import dataclass, fields
from typing import Optional


@dataclass
class RenderRequest:
    """
    Values collected for a single render

    Attributes:
        property: Property valid for the current type, or None
        content: Human-readable content to wrap, or None for attribute-only output
        machine_content: Machine-readable value for meta output (e.g. an ISO date)
        fallback_type: Type to scope when property is unusable
        fallback_property: Property valid for fallback_type, or None

    Example:
        >>> request = RenderRequest(property="url", content="home")
        >>> request.reset()
        >>> request.property is None
        True
    """
    property: Optional[str] = None
    content: Optional[str] = None
    machine_content: Optional[str] = None
    fallback_type: Optional[str] = None
    fallback_property: Optional[str] = None

    def reset(self) -> None:
        """Clear every field; invoked by the engine at the end of each render"""
        for f in fields(self):
            setattr(self, f.name, None)

    def empty_is(self) -> bool:
        """True when no field is set"""
        return all(getattr(self, f.name) is None for f in fields(self))
