"""
structdata - schema.org structured data from compact directives

Rewrites data-<suffix> directive attributes into Microdata or RDFa markup.
"""

__version__ = "1.0.0"

from .vocabulary import VocabularyRegistry, VocabularyError, vocabulary_default
from .directives import token_classify, directive_tokenize, plan_resolve, directive_resolve
from .renderers import (
    Renderer,
    MicrodataRenderer,
    RDFaRenderer,
    SemanticError,
    renderer_create,
    html_meta,
    html_div,
    html_span,
)
from .engine import StructuredData
from .rewriter import DirectiveRewriter
from .log import LOG, state_connectToLogger

__all__ = [
    "VocabularyRegistry",
    "VocabularyError",
    "vocabulary_default",
    "token_classify",
    "directive_tokenize",
    "plan_resolve",
    "directive_resolve",
    "Renderer",
    "MicrodataRenderer",
    "RDFaRenderer",
    "SemanticError",
    "renderer_create",
    "html_meta",
    "html_div",
    "html_span",
    "StructuredData",
    "DirectiveRewriter",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
