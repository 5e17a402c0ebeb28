"""
Markup renderers for structdata

A renderer knows the attribute syntax of one semantic flavour and builds
fragments from it. The fragment shapes (bare attributes, span, div, meta)
are shared; subclasses only define how a property and a scope are written:

    Microdata: itemprop='author' itemscope itemtype='https://schema.org/Person'
    RDFa:      property='author' vocab='https://schema.org' typeof='Person'
"""

from typing import Dict, Optional, Type

from ..config import appsettings
from ..models.directives import DisplayType


class SemanticError(Exception):
    """Raised when a semantic flavour name has no renderer"""
    pass


class Renderer:
    """
    Base renderer: fragment assembly over an abstract attribute syntax

    Attributes:
        name: Lower-case semantic name (e.g., "microdata")
        base_url: Vocabulary base URL used in scope annotations
    """

    name: str = ""

    def __init__(self, base_url: Optional[str] = None) -> None:
        self.base_url = (base_url or appsettings.schema_url).rstrip("/")

    def html_property(self, property: str) -> str:
        """Attribute declaring a property"""
        raise NotImplementedError

    def html_scope(self, scope: str) -> str:
        """Attributes declaring an item of vocabulary type scope"""
        raise NotImplementedError

    def attributes_join(
        self, property: Optional[str] = None, scope: Optional[str] = None, inverse: bool = False
    ) -> str:
        """
        Join scope and property attributes, skipping absent pieces

        Scope comes first; inverse puts the property first.
        """
        parts = []
        if scope:
            parts.append(self.html_scope(scope))
        if property:
            parts.append(self.html_property(property))
        if inverse:
            parts.reverse()
        return " ".join(parts)

    def html_meta(
        self,
        content: Optional[str],
        property: Optional[str] = None,
        scope: Optional[str] = None,
        inverse: bool = False,
    ) -> str:
        """
        Self-closing meta element carrying content as a machine-readable value

        Example:
            >>> MicrodataRenderer().html_meta('2014-01-01', 'datePublished')
            "<meta itemprop='datePublished' content='2014-01-01'/>"
        """
        attributes = self.attributes_join(property, scope, inverse)
        if attributes:
            attributes += " "
        return f"<meta {attributes}content='{content or ''}'/>"

    def html_div(
        self,
        content: Optional[str],
        property: Optional[str] = None,
        scope: Optional[str] = None,
        inverse: bool = False,
    ) -> str:
        """Content wrapped in a div carrying the attributes"""
        return self._element_wrap("div", content, property, scope, inverse)

    def html_span(
        self,
        content: Optional[str],
        property: Optional[str] = None,
        scope: Optional[str] = None,
        inverse: bool = False,
    ) -> str:
        """Content wrapped in a span carrying the attributes"""
        return self._element_wrap("span", content, property, scope, inverse)

    def _element_wrap(
        self,
        tag: str,
        content: Optional[str],
        property: Optional[str],
        scope: Optional[str],
        inverse: bool,
    ) -> str:
        attributes = self.attributes_join(property, scope, inverse)
        if attributes:
            return f"<{tag} {attributes}>{content or ''}</{tag}>"
        return f"<{tag}>{content or ''}</{tag}>"

    def render(
        self,
        display_type: DisplayType,
        content: Optional[str] = None,
        property: Optional[str] = None,
        scope: Optional[str] = None,
        inverse: bool = False,
    ) -> str:
        """
        Produce a fragment of an explicit shape

        Args:
            display_type: Shape to produce; AUTO and INLINE give bare attributes
            content: Content to wrap (meta uses it as the content value)
            property: Property name, or None
            scope: Scope type, or None
            inverse: Put the property before the scope

        Returns:
            Markup fragment
        """
        if display_type is DisplayType.SPAN:
            return self.html_span(content, property, scope, inverse)
        if display_type is DisplayType.DIV:
            return self.html_div(content, property, scope, inverse)
        if display_type is DisplayType.META:
            return self.html_meta(content, property, scope, inverse)
        return self.attributes_join(property, scope, inverse)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url='{self.base_url}')"


class MicrodataRenderer(Renderer):
    """HTML Microdata: itemprop / itemscope itemtype"""

    name = "microdata"

    def html_property(self, property: str) -> str:
        return f"itemprop='{property}'"

    def html_scope(self, scope: str) -> str:
        return f"itemscope itemtype='{self.base_url}/{scope}'"


class RDFaRenderer(Renderer):
    """RDFa Lite: property / vocab typeof"""

    name = "rdfa"

    def html_property(self, property: str) -> str:
        return f"property='{property}'"

    def html_scope(self, scope: str) -> str:
        return f"vocab='{self.base_url}' typeof='{scope}'"


# Closed set of supported semantic flavours, keyed by lower-case name
RENDERERS: Dict[str, Type[Renderer]] = {
    MicrodataRenderer.name: MicrodataRenderer,
    RDFaRenderer.name: RDFaRenderer,
}


def renderer_create(semantic: str, base_url: Optional[str] = None) -> Renderer:
    """
    Instantiate the renderer for a semantic flavour name (case-insensitive)

    Raises:
        SemanticError: If the name is not one of RENDERERS
    """
    renderer_class = RENDERERS.get((semantic or "").lower())
    if renderer_class is None:
        raise SemanticError(
            f"Unknown semantic '{semantic}'. Available: {', '.join(sorted(RENDERERS))}"
        )
    return renderer_class(base_url)


_microdata = MicrodataRenderer()


def html_meta(
    content: Optional[str],
    property: Optional[str] = None,
    scope: Optional[str] = None,
    inverse: bool = False,
) -> str:
    """Microdata meta fragment, for callers that need no fallback resolution"""
    return _microdata.html_meta(content, property, scope, inverse)


def html_div(
    content: Optional[str],
    property: Optional[str] = None,
    scope: Optional[str] = None,
    inverse: bool = False,
) -> str:
    """Microdata div fragment"""
    return _microdata.html_div(content, property, scope, inverse)


def html_span(
    content: Optional[str],
    property: Optional[str] = None,
    scope: Optional[str] = None,
    inverse: bool = False,
) -> str:
    """Microdata span fragment"""
    return _microdata.html_span(content, property, scope, inverse)
