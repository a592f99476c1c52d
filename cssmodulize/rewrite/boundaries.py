"""
Resolution of static text that touches an embedded expression.

In ``icon-${variant}`` the token ``icon-`` has no whitespace between it and
the expression, so at runtime it forms one class together with the value of
``variant``. Such a *fused* token must stay textually attached to the
expression; only *free* tokens may be looked up in the class map.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .tokens import class_tokens


class Side(Enum):
    """Where a static segment sits relative to the expression it touches."""

    LEFT = "left"    # segment precedes the expression: its last character touches it
    RIGHT = "right"  # segment follows the expression: its first character touches it


@dataclass
class BoundaryResolution:
    fused_token: Optional[str]
    free_tokens: List[str] = field(default_factory=list)


@dataclass
class SegmentSplit:
    """A static segment cut into the parts fused to each neighbour and the rest.

    ``bridge`` is set when the segment holds no whitespace at all and sits
    between two expressions, gluing them into one class (it may be ``""``).
    """
    head: Optional[str] = None
    free: List[str] = field(default_factory=list)
    tail: Optional[str] = None
    bridge: Optional[str] = None


def resolve_boundary(text: str, side: Side) -> BoundaryResolution:
    tokens = class_tokens(text)
    edge = text[-1:] if side is Side.LEFT else text[:1]
    if not edge or edge.isspace() or not tokens:
        return BoundaryResolution(fused_token=None, free_tokens=tokens)
    if side is Side.LEFT:
        return BoundaryResolution(fused_token=tokens[-1], free_tokens=tokens[:-1])
    return BoundaryResolution(fused_token=tokens[0], free_tokens=tokens[1:])


def split_segment(text: str, *, after_expression: bool, before_expression: bool) -> SegmentSplit:
    """Split a static segment given which sides touch a fusible expression."""
    if after_expression and before_expression and not any(ch.isspace() for ch in text):
        return SegmentSplit(bridge=text)

    head = tail = None
    free = class_tokens(text)
    if after_expression:
        resolution = resolve_boundary(text, Side.RIGHT)
        head = resolution.fused_token
        free = resolution.free_tokens
    if before_expression:
        resolution = resolve_boundary(text, Side.LEFT)
        tail = resolution.fused_token
        if tail is not None:
            # the segment holds whitespace here, so head and tail are distinct tokens
            free = free[:-1]
    return SegmentSplit(head=head, free=free, tail=tail)


__all__ = ["Side", "BoundaryResolution", "SegmentSplit", "resolve_boundary", "split_segment"]
