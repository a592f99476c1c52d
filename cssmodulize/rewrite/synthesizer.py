"""Assembly of rewrite arguments into the final class attribute value."""

from __future__ import annotations

from typing import Sequence

from ..ast import CallExpression, Expression, Identifier, MemberExpression


def synthesize(arguments: Sequence[Expression], merge_fn_name: str) -> Expression:
    """Return ``styles.x`` for a lone module reference, else ``merge(...args)``."""
    if not arguments:
        raise ValueError("cannot synthesize a class value from no arguments")
    if len(arguments) == 1 and isinstance(arguments[0], MemberExpression):
        return arguments[0]
    return CallExpression(callee=Identifier(merge_fn_name), arguments=list(arguments))


__all__ = ["synthesize"]
