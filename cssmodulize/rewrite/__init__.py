"""The className rewrite engine."""

from .boundaries import BoundaryResolution, SegmentSplit, Side, resolve_boundary, split_segment
from .dispatcher import ClassNameRewriter, RewriteResult
from .synthesizer import synthesize
from .tokens import class_tokens, local_name, split_tokens

__all__ = [
    "BoundaryResolution",
    "ClassNameRewriter",
    "RewriteResult",
    "SegmentSplit",
    "Side",
    "class_tokens",
    "local_name",
    "resolve_boundary",
    "split_segment",
    "split_tokens",
    "synthesize",
]
