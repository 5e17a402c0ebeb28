"""
Markup rewriter for data-<suffix> directives

Scans markup text left to right, finds start tags carrying a registered
directive attribute and replaces that attribute with the structured data
markup produced by the engine.

    <tag data-sd='Article.author.Person'>content</tag>
        -> <tag itemprop='author' itemscope itemtype='https://schema.org/Person'>content</tag>

The scanner works character by character:
1. Text outside tags is copied verbatim
2. Comments and the raw text of <script>/<style> are copied verbatim
3. Start tags are split into attributes (quoted values may contain '>')
4. The first registered directive attribute of each tag is replaced,
   any later directive attributes on the same tag are left untouched

Example:
    >>> rewriter = DirectiveRewriter('Microdata')
    >>> rewriter.parse("<tag data-sd='url'>home</tag>")
    "<tag itemprop='url'>home</tag>"
"""

import threading
from typing import Iterable, List, Optional, Set, Union

from ..config import appsettings
from ..models.rewriter import AttributeSpan, TagScan
from ..models.directives import DisplayType
from .directives import directive_resolve
from .engine import StructuredData
from .renderers import renderer_create
from .vocabulary import VocabularyRegistry, vocabulary_default
from .log import LOG


# Elements whose content is raw text and never holds tags
RAW_TEXT_ELEMENTS = {"script", "style"}


class DirectiveRewriter:
    """
    Rewrites directive attributes in markup text

    Attributes:
        handler: StructuredData engine; its current type persists across
                 parse() calls until the semantic is changed
        vocabulary: Type/property registry shared with the engine
        suffixes: Registered attribute suffixes (lower case, non-empty)

    A lock serialises parse() with suffix and semantic changes, so a
    rewriter never runs two passes at once and its suffix set cannot change
    while a pass is in progress.
    """

    def __init__(
        self,
        semantic: Optional[str] = None,
        suffixes: Optional[Union[str, Iterable[str]]] = None,
        vocabulary: Optional[VocabularyRegistry] = None,
        enabled: Optional[bool] = None,
    ) -> None:
        """
        Args:
            semantic: "Microdata" or "RDFa" (default from settings)
            suffixes: Extra suffixes to register besides the default one
            vocabulary: Registry to use (default: bundled schema.org subset)
            enabled: Emit markup (default from settings)

        Raises:
            SemanticError: If semantic names no known renderer
        """
        self._lock = threading.Lock()
        self.vocabulary = vocabulary or vocabulary_default()
        self.enabled = appsettings.enabled if enabled is None else enabled
        self.suffixes: List[str] = []
        self.handler: StructuredData
        self.semantic_set(semantic or appsettings.semantic)
        self.suffix_add(appsettings.default_suffix)
        if suffixes:
            self.suffix_add(suffixes)

    def semantic_set(self, semantic: str) -> "DirectiveRewriter":
        """
        Switch the semantic flavour; this creates a fresh engine

        Raises:
            SemanticError: If semantic names no known renderer
        """
        renderer = renderer_create(semantic)
        with self._lock:
            self.handler = StructuredData(renderer, self.vocabulary, self.enabled)
        LOG(f"Semantic set to {renderer.name}", level=2)
        return self

    def semantic_get(self) -> str:
        """Lower-case name of the active semantic (e.g., 'microdata')"""
        return self.handler.renderer.name

    def enable(self, flag: bool = True) -> "DirectiveRewriter":
        with self._lock:
            self.enabled = bool(flag)
            self.handler.enable(self.enabled)
        return self

    def suffix_add(self, suffixes: Union[str, Iterable[str]]) -> "DirectiveRewriter":
        """
        Register one or more attribute suffixes

        Suffixes are lower-cased; empty strings and duplicates are ignored.
        """
        if isinstance(suffixes, str):
            suffixes = [suffixes]
        with self._lock:
            for suffix in suffixes:
                suffix = (suffix or "").strip().lower()
                if not suffix:
                    LOG("Ignoring empty directive suffix", level=3)
                    continue
                if suffix not in self.suffixes:
                    self.suffixes.append(suffix)
        return self

    def suffix_remove(self, suffixes: Union[str, Iterable[str]]) -> "DirectiveRewriter":
        """Unregister one or more attribute suffixes"""
        if isinstance(suffixes, str):
            suffixes = [suffixes]
        with self._lock:
            for suffix in suffixes:
                suffix = (suffix or "").strip().lower()
                if suffix in self.suffixes:
                    self.suffixes.remove(suffix)
        return self

    def suffixes_get(self) -> List[str]:
        return list(self.suffixes)

    def parse(self, html: str) -> str:
        """
        Rewrite every directive attribute in a markup string

        Args:
            html: Markup text

        Returns:
            Markup with directive attributes replaced by structured data
        """
        with self._lock:
            attribute_names = {appsettings.attributeName_make(s) for s in self.suffixes}
            return self._markup_rewrite(html, attribute_names)

    def _markup_rewrite(self, html: str, attribute_names: Set[str]) -> str:
        """Single left-to-right pass over html"""
        result: List[str] = []
        pos = 0
        length = len(html)
        rewritten_count = 0

        while pos < length:
            lt = html.find("<", pos)
            if lt == -1:
                result.append(html[pos:])
                break

            result.append(html[pos:lt])

            # Comments pass through untouched
            if html.startswith("<!--", lt):
                close = html.find("-->", lt + 4)
                end = length if close == -1 else close + 3
                result.append(html[lt:end])
                pos = end
                continue

            # Only "<" followed by a letter opens a start tag
            if lt + 1 >= length or not html[lt + 1].isalpha():
                result.append("<")
                pos = lt + 1
                continue

            tag = self.tag_scan(html, lt)
            if tag is None:
                # Unterminated tag: keep the '<' as text and move on
                result.append("<")
                pos = lt + 1
                continue

            tag_html, rewritten = self.tag_rewrite(html, lt, tag, attribute_names)
            result.append(tag_html)
            rewritten_count += rewritten
            pos = tag.end

            if tag.name.lower() in RAW_TEXT_ELEMENTS:
                pos = self.rawText_skip(html, pos, tag.name, result)

        LOG(f"Rewrote {rewritten_count} directive attribute(s)", level=2)
        return "".join(result)

    def tag_scan(self, html: str, start: int) -> Optional[TagScan]:
        """
        Split the start tag beginning at start into its attributes

        Args:
            html: Markup text
            start: Position of the '<' opening the tag

        Returns:
            TagScan, or None when the tag (or a quoted value) never closes

        Example:
            For "<meta data-sd='x' content='a>b' />" the scan yields two
            attributes and ends after the final '>'.
        """
        length = len(html)
        pos = start + 1

        while pos < length and not html[pos].isspace() and html[pos] not in "/>":
            pos += 1
        name = html[start + 1:pos]
        attributes: List[AttributeSpan] = []

        while pos < length:
            char = html[pos]
            if char == ">":
                return TagScan(name=name, attributes=attributes, end=pos + 1)
            if char.isspace() or char == "/":
                pos += 1
                continue

            attr_start = pos
            while pos < length and not html[pos].isspace() and html[pos] not in "=/>":
                pos += 1
            attr_name = html[attr_start:pos]
            value = None

            look = pos
            while look < length and html[look].isspace():
                look += 1
            if look < length and html[look] == "=":
                look += 1
                while look < length and html[look].isspace():
                    look += 1
                if look < length and html[look] in "\"'":
                    quote = html[look]
                    close = html.find(quote, look + 1)
                    if close == -1:
                        return None
                    value = html[look + 1:close]
                    pos = close + 1
                else:
                    value_start = look
                    while look < length and not html[look].isspace() and html[look] != ">":
                        look += 1
                    value = html[value_start:look]
                    pos = look

            attributes.append(AttributeSpan(name=attr_name, value=value, start=attr_start, end=pos))

        return None

    def tag_rewrite(
        self, html: str, start: int, tag: TagScan, attribute_names: Set[str]
    ) -> tuple[str, int]:
        """
        Replace the first directive attribute of a scanned tag

        Returns:
            (tag markup, number of attributes rewritten: 0 or 1)
        """
        rewritten = False
        parts: List[str] = []
        pos = start

        for attribute in tag.attributes:
            if rewritten:
                break
            if attribute.value is None or attribute.name.lower() not in attribute_names:
                continue

            parts.append(html[pos:attribute.start])
            parts.append(self.directive_display(attribute.value))
            pos = attribute.end
            rewritten = True

        parts.append(html[pos:tag.end])
        return "".join(parts), int(rewritten)

    def rawText_skip(self, html: str, pos: int, tag_name: str, result: List[str]) -> int:
        """
        Copy the raw text of a script/style element up to its closing tag

        The closing tag name is compared case-insensitively in place, so
        offsets always index the original text.
        """
        name = tag_name.lower()
        end = len(html)
        close = html.find("</", pos)
        while close != -1:
            if html[close + 2:close + 2 + len(name)].lower() == name:
                end = close
                break
            close = html.find("</", close + 2)
        result.append(html[pos:end])
        return end

    def directive_display(self, directive: str) -> str:
        """
        Resolve one directive against the engine and render its markup

        - A Type token makes that type current.
        - A specialized fallback of the current type, or else the first
          global fallback valid for it, renders as a property attribute,
          followed by the scope of its expected type when one is given.
        - With no usable property, a Type token renders the current scope.
        - Otherwise nothing is rendered.
        """
        handler = self.handler
        plan = directive_resolve(directive, self.vocabulary)
        LOG(f"Directive '{directive}' -> {plan}", level=3)

        if plan.set_type:
            handler.type_set(plan.set_type)

        candidate = plan.candidate_select(handler.type_get(), self.vocabulary)
        if candidate is not None:
            property_name, expected_type = candidate
            html = handler.property_set(property_name).display(DisplayType.INLINE, True)
            if expected_type and html:
                html += " " + handler.scope_display(expected_type)
            return html

        if plan.set_type:
            return handler.scope_display()

        return ""
