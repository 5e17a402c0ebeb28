"""
Structured data engine

Turns a (type, property, content, fallback) request into markup through a
Renderer, consulting the vocabulary registry to decide whether the property
is usable, whether it nests another item and which shape it needs.

The engine holds two kinds of state:
- the current type, set by type_set() and kept across renders of a pass;
- a RenderRequest, filled by the setters and reset after every display().

Example:
    >>> engine = StructuredData(MicrodataRenderer(), vocabulary_default())
    >>> engine.type_set('Article').property_set('url').display()
    "itemprop='url'"
    >>> engine.property_set('url').content_set('home').display()
    "<span itemprop='url'>home</span>"
"""

from typing import Optional

from ..models.directives import DisplayType, PropertyKind
from ..models.request import RenderRequest
from .renderers import Renderer
from .vocabulary import VocabularyRegistry
from .log import LOG


class StructuredData:
    """
    Render-request builder and resolution-to-markup engine

    Setters validate against the vocabulary and return self for chaining.
    Not safe to share between concurrent rewrite passes; DirectiveRewriter
    serialises access to its engine.
    """

    def __init__(
        self, renderer: Renderer, vocabulary: VocabularyRegistry, enabled: bool = True
    ) -> None:
        """
        Args:
            renderer: Attribute syntax to emit (Microdata or RDFa)
            vocabulary: Type/property registry
            enabled: When False display() returns content without markup
        """
        self.renderer = renderer
        self.vocabulary = vocabulary
        self.enabled = enabled
        self.type: str = vocabulary.root_type
        self.request = RenderRequest()

    def enable(self, flag: bool = True) -> "StructuredData":
        """Turn markup generation on or off"""
        self.enabled = bool(flag)
        return self

    def enabled_get(self) -> bool:
        return self.enabled

    def type_set(self, type_name: Optional[str]) -> "StructuredData":
        """Set the current type; unknown names fall back to the root type"""
        self.type = self.vocabulary.type_resolve(type_name)
        return self

    def type_get(self) -> str:
        return self.type

    def property_set(self, property_name: Optional[str]) -> "StructuredData":
        """Request a property; kept only when valid for the current type"""
        if self.vocabulary.property_has(self.type, property_name):
            self.request.property = property_name
        else:
            self.request.property = None
        return self

    def content_set(
        self, content: Optional[str], machine_content: Optional[str] = None
    ) -> "StructuredData":
        """
        Set the human-readable content and, optionally, a machine-readable value

        machine_content replaces content as the value of meta output,
        e.g. content_set('01 January 2011', '2011-01-01T00:00:00+00:00').
        """
        self.request.content = content
        self.request.machine_content = machine_content
        return self

    def fallback_set(
        self, type_name: Optional[str], property_name: Optional[str]
    ) -> "StructuredData":
        """
        Declare what to render when the requested property is unusable

        An unknown type falls back to the root type; a property that is not
        valid for the (resolved) fallback type is dropped.
        """
        self.request.fallback_type = self.vocabulary.type_resolve(type_name)
        if self.vocabulary.property_has(self.request.fallback_type, property_name):
            self.request.fallback_property = property_name
        else:
            self.request.fallback_property = None
        return self

    def property_get(self) -> Optional[str]:
        return self.request.property

    def content_get(self) -> Optional[str]:
        return self.request.content

    def fallbackType_get(self) -> Optional[str]:
        return self.request.fallback_type

    def fallbackProperty_get(self) -> Optional[str]:
        return self.request.fallback_property

    def display(
        self, display_type: DisplayType = DisplayType.AUTO, empty_output: bool = False
    ) -> str:
        """
        Render the current request and reset it

        Args:
            display_type: AUTO decides the shape from the property kind;
                          other values force that shape
            empty_output: When no markup is produced (disabled, or no
                          usable property or fallback), return '' instead
                          of the content

        Returns:
            Markup fragment, or the bare content when nothing applies
        """
        try:
            if not self.enabled:
                return self._content_passthrough(empty_output)

            if self.request.property:
                return self._property_render(display_type)

            if self.request.fallback_type:
                return self._fallback_render(display_type)

            # Nothing usable: property and scope are omitted, content remains
            return self._content_passthrough(empty_output)
        finally:
            self.request.reset()

    def scope_display(self, type_name: Optional[str] = None) -> str:
        """Scope annotation for type_name (default: the current type)"""
        if not self.enabled:
            return ""
        scope = self.vocabulary.type_resolve(type_name) if type_name else self.type
        return self.renderer.html_scope(scope)

    def _content_passthrough(self, empty_output: bool) -> str:
        if empty_output:
            return ""
        return self.request.content or ""

    def _property_render(self, display_type: DisplayType) -> str:
        """Render a property that is valid for the current type"""
        request = self.request
        renderer = self.renderer
        property_name = request.property
        content = request.content

        if display_type is DisplayType.META:
            value = request.machine_content if request.machine_content is not None else content
            return renderer.html_meta(value, property_name)
        if display_type is not DisplayType.AUTO:
            return renderer.render(display_type, content, property_name)

        kind = self.vocabulary.propertyKind_get(self.type, property_name)
        LOG(f"Rendering {self.type}.{property_name} as {kind.value}", level=3)

        if kind is PropertyKind.NESTED:
            expected = self.vocabulary.expectedTypes_get(self.type, property_name)
            nested_type = expected[0]
            nested_property = None
            # A fallback type among the expected types narrows the nested item
            if request.fallback_type in expected:
                nested_type = request.fallback_type
                nested_property = request.fallback_property

            if content is None:
                html = renderer.html_property(property_name) + " " + renderer.html_scope(nested_type)
                if nested_property:
                    html += " " + renderer.html_property(nested_property)
                return html

            inner = renderer.html_span(content, nested_property) if nested_property else content
            return renderer.html_span(inner, property_name, nested_type, inverse=True)

        if content is None:
            return renderer.html_property(property_name)

        if kind is PropertyKind.META:
            value = request.machine_content if request.machine_content is not None else content
            return renderer.html_meta(value, property_name) + content

        return renderer.html_span(content, property_name)

    def _fallback_render(self, display_type: DisplayType) -> str:
        """Render the fallback type (and property) when the property is unusable"""
        request = self.request
        renderer = self.renderer
        fallback_type = request.fallback_type
        fallback_property = request.fallback_property
        content = request.content

        if display_type is not DisplayType.AUTO:
            if display_type is DisplayType.META and request.machine_content is not None:
                content = request.machine_content
            return renderer.render(display_type, content, fallback_property, fallback_type)

        if not fallback_property:
            if content is None:
                return renderer.html_scope(fallback_type)
            return renderer.html_span(content, None, fallback_type)

        if content is None:
            return renderer.html_scope(fallback_type) + " " + renderer.html_property(fallback_property)

        kind = self.vocabulary.propertyKind_get(fallback_type, fallback_property)
        if kind is PropertyKind.META:
            value = request.machine_content if request.machine_content is not None else content
            return renderer.html_meta(value, fallback_property, fallback_type)

        return renderer.html_span(renderer.html_span(content, fallback_property), None, fallback_type)

    def __repr__(self) -> str:
        return (
            f"StructuredData(renderer={self.renderer.name}, type='{self.type}', "
            f"enabled={self.enabled})"
        )
