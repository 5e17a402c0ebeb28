"""
Directive tokenizer and resolver

A directive is the value of a data-<suffix> attribute: space-separated
tokens of one to three dot-separated segments.

    Type                    -> sets the current type
    property                -> global fallback
    property.ExpectedType   -> global fallback with an expected type
    Type.property           -> specialized fallback for Type
    Type.property.Expected  -> specialized fallback with an expected type

One and two segment tokens are ambiguous on their own ("Article" vs
"author", "Article.author" vs "author.Person"), so classification asks the
vocabulary registry whether the first segment is a known type.

Example:
    >>> plan = directive_resolve("Article.author.Person description", vocabulary_default())
    >>> plan.specialized
    {'Article': {'author': 'Person'}}
    >>> plan.global_fallbacks
    {'description': None}
"""

from typing import List

from ..models.directives import DirectiveToken, ResolutionPlan
from .vocabulary import VocabularyRegistry
from .log import LOG


def token_classify(piece: str, vocabulary: VocabularyRegistry) -> DirectiveToken:
    """
    Classify one directive piece into type / property / expected type

    Malformed pieces (blank, any empty segment such as a leading or trailing
    dot, more than three segments) give an empty token instead of an error.

    Args:
        piece: A single whitespace-free token of the directive
        vocabulary: Registry used to tell types from properties

    Returns:
        DirectiveToken with the recognised fields set
    """
    piece = piece.strip()
    if not piece:
        return DirectiveToken()

    segments = piece.split(".")
    if any(not segment for segment in segments):
        LOG(f"Dropping malformed directive token '{piece}'", level=3)
        return DirectiveToken()

    if len(segments) == 1:
        if vocabulary.type_has(segments[0]):
            return DirectiveToken(type=segments[0])
        return DirectiveToken(property=segments[0])

    if len(segments) == 2:
        first, second = segments
        if vocabulary.type_has(first):
            return DirectiveToken(type=first, property=second)
        return DirectiveToken(property=first, expected_type=second)

    if len(segments) == 3:
        return DirectiveToken(type=segments[0], property=segments[1], expected_type=segments[2])

    LOG(f"Dropping directive token '{piece}' with {len(segments)} segments", level=3)
    return DirectiveToken()


def directive_tokenize(directive: str, vocabulary: VocabularyRegistry) -> List[DirectiveToken]:
    """
    Split a directive on runs of whitespace and classify each piece

    Returns:
        Tokens in source order; malformed pieces are kept as empty tokens
    """
    return [token_classify(piece, vocabulary) for piece in (directive or "").split()]


def plan_resolve(tokens: List[DirectiveToken]) -> ResolutionPlan:
    """
    Aggregate classified tokens into a resolution plan

    - The last Type-only token becomes set_type.
    - Tokens with a type and a property become specialized fallbacks
      (last write per type/property pair wins).
    - Tokens with only a property become global fallbacks, keeping
      first-seen order as priority order.
    """
    plan = ResolutionPlan()

    for token in tokens:
        if token.empty_is():
            continue

        if token.type and not token.property:
            plan.set_type = token.type
        elif token.type and token.property:
            plan.specialized.setdefault(token.type, {})[token.property] = token.expected_type
        elif token.property:
            plan.global_fallbacks[token.property] = token.expected_type

    return plan


def directive_resolve(directive: str, vocabulary: VocabularyRegistry) -> ResolutionPlan:
    """Tokenize and resolve a directive string in one step"""
    return plan_resolve(directive_tokenize(directive, vocabulary))
