"""
Rewriter-specific data models

Type-safe structures describing what the markup scanner found inside a tag.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class AttributeSpan:
    """
    One attribute located inside a start tag

    Attributes:
        name: Attribute name as written in the source
        value: Unquoted attribute value, or None for a bare attribute
        start: Position of the first character of the name
        end: Position just past the value (closing quote included)

    Example:
        For "<tag data-sd='url'>" the attribute is
        AttributeSpan(name="data-sd", value="url", start=5, end=18)
    """
    name: str
    value: Optional[str]
    start: int
    end: int


@dataclass
class TagScan:
    """
    Result of scanning one start tag

    Returned by DirectiveRewriter.tag_scan() for a complete tag.

    Attributes:
        name: Tag name (e.g., "div", "meta")
        attributes: Attributes in source order
        end: Position just past the closing '>'
    """
    name: str
    attributes: List[AttributeSpan]
    end: int
