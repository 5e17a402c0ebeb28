"""
structdata - schema.org structured data from compact directives

Authors write data-sd='Article.author.Person'; structdata rewrites it into
itemprop='author' itemscope itemtype='https://schema.org/Person'.
"""

__version__ = "1.0.0"

from .lib import (
    DirectiveRewriter,
    StructuredData,
    VocabularyRegistry,
    SemanticError,
    VocabularyError,
    renderer_create,
    html_meta,
    html_div,
    html_span,
    LOG,
    state_connectToLogger,
)
from .models import DisplayType

__all__ = [
    "DirectiveRewriter",
    "StructuredData",
    "VocabularyRegistry",
    "SemanticError",
    "VocabularyError",
    "renderer_create",
    "html_meta",
    "html_div",
    "html_span",
    "DisplayType",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
