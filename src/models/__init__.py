"""
Models package for structdata

Contains data structures and type definitions for the rewrite pipeline.
"""

from .state import ProgramState, pipeline
from .directives import DirectiveToken, ResolutionPlan, DisplayType, PropertyKind
from .request import RenderRequest
from .rewriter import AttributeSpan, TagScan

__all__ = [
    "ProgramState",
    "pipeline",
    "DirectiveToken",
    "ResolutionPlan",
    "DisplayType",
    "PropertyKind",
    "RenderRequest",
    "AttributeSpan",
    "TagScan",
]
