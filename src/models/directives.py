"""
Directive token and resolution plan models

Defines the structures produced by the directive tokenizer and resolver,
plus the enumerations that steer how a resolved property is displayed.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from ..lib.vocabulary import VocabularyRegistry


class DisplayType(Enum):
    """
    How the engine renders a property

    AUTO lets the engine decide from the property's kind; the others force
    a specific shape regardless of kind.
    """
    AUTO = ""          # decided from the property kind
    INLINE = "inline"  # bare attribute fragment
    SPAN = "span"      # <span ...>content</span>
    DIV = "div"        # <div ...>content</div>
    META = "meta"      # <meta ... content='...'/>


class PropertyKind(Enum):
    """Data kind of a property, derived from its first expected type"""
    TEXT = "text"
    META = "meta"
    NESTED = "nested"


@dataclass
class DirectiveToken:
    """
    One classified piece of a directive string

    Attributes:
        type: Vocabulary type the token refers to, if any
        property: Property name, if any
        expected_type: Explicit expected type of the property, if any

    Example:
        "Article.author.Person" -> DirectiveToken("Article", "author", "Person")
        "author.Person"         -> DirectiveToken(None, "author", "Person")
        "Article"               -> DirectiveToken("Article", None, None)
    """
    type: Optional[str] = None
    property: Optional[str] = None
    expected_type: Optional[str] = None

    def empty_is(self) -> bool:
        """True for malformed tokens, which carry nothing"""
        return self.type is None and self.property is None and self.expected_type is None


@dataclass
class ResolutionPlan:
    """
    Aggregated meaning of a whole directive

    Attributes:
        set_type: Type that becomes current (last Type token wins)
        specialized: Fallbacks tied to a type: {type: {property: expected_type}}
        global_fallbacks: Fallbacks valid for any type, in priority order:
                          {property: expected_type}

    Example:
        For "Article.articleBody description":
        ResolutionPlan(
            set_type=None,
            specialized={"Article": {"articleBody": None}},
            global_fallbacks={"description": None}
        )
    """
    set_type: Optional[str] = None
    specialized: Dict[str, Dict[str, Optional[str]]] = field(default_factory=dict)
    global_fallbacks: Dict[str, Optional[str]] = field(default_factory=dict)

    def candidate_select(
        self, current_type: str, vocabulary: "VocabularyRegistry"
    ) -> Optional[Tuple[str, Optional[str]]]:
        """
        Pick the (property, expected_type) pair to render for the current type

        Specialized fallbacks of the current type win over global ones;
        within each group the first property valid for the current type is
        used.

        Args:
            current_type: Type currently active in the engine
            vocabulary: Registry used to validate properties

        Returns:
            (property, expected_type) or None when nothing applies
        """
        for name, expected_type in self.specialized.get(current_type, {}).items():
            if vocabulary.property_has(current_type, name):
                return name, expected_type

        for name, expected_type in self.global_fallbacks.items():
            if vocabulary.property_has(current_type, name):
                return name, expected_type

        return None
