"""Render class expression ASTs back to JavaScript source."""

from __future__ import annotations

import re
from typing import List

from ..ast import (
    BINARY_PRECEDENCE,
    ArrayExpression,
    BinaryExpression,
    BooleanLiteral,
    CallExpression,
    ConditionalExpression,
    Expression,
    Identifier,
    LogicalExpression,
    MemberExpression,
    NullLiteral,
    NumericLiteral,
    ObjectExpression,
    Precedence,
    Property,
    RawExpression,
    StringLiteral,
    TemplateLiteral,
)

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_QUOTES = {"single": "'", "double": '"'}
_STRING_ESCAPES = {
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
    "\v": "\\v",
    "\0": "\\0",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def is_identifier_name(name: str) -> bool:
    """True when ``name`` can follow a dot in member access."""
    return bool(_IDENTIFIER.match(name))


def quote_string(value: str, quote: str = "single") -> str:
    try:
        mark = _QUOTES[quote]
    except KeyError:
        raise ValueError(f"Unknown quote style {quote!r}") from None
    out: List[str] = [mark]
    for char in value:
        if char == mark:
            out.append("\\" + char)
        elif char in _STRING_ESCAPES:
            out.append(_STRING_ESCAPES[char])
        elif ord(char) < 0x20:
            out.append(f"\\x{ord(char):02x}")
        else:
            out.append(char)
    out.append(mark)
    return "".join(out)


def _template_raw(cooked: str) -> str:
    return cooked.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def precedence_of(node: Expression) -> Precedence:
    if isinstance(node, RawExpression):
        return node.precedence
    if isinstance(node, ConditionalExpression):
        return Precedence.CONDITIONAL
    if isinstance(node, (BinaryExpression, LogicalExpression)):
        return BINARY_PRECEDENCE.get(node.operator, Precedence.RELATIONAL)
    if isinstance(node, (CallExpression, MemberExpression)):
        return Precedence.CALL
    return Precedence.PRIMARY


class ExpressionPrinter:
    """Print expressions with the fewest parentheses that keep their meaning."""

    def __init__(self, quote: str = "single") -> None:
        if quote not in _QUOTES:
            raise ValueError(f"Unknown quote style {quote!r}")
        self.quote = quote

    def print(self, node: Expression) -> str:
        return self._print(node)

    def _wrap(self, node: Expression, minimum: Precedence) -> str:
        text = self._print(node)
        if precedence_of(node) < minimum:
            return f"({text})"
        return text

    def _print(self, node: Expression) -> str:  # noqa: C901 - one branch per node kind
        if isinstance(node, StringLiteral):
            return quote_string(node.value, self.quote)
        if isinstance(node, TemplateLiteral):
            pieces = ["`", _template_raw(node.quasis[0])]
            for expression, quasi in zip(node.expressions, node.quasis[1:]):
                pieces.append("${" + self._print(expression) + "}")
                pieces.append(_template_raw(quasi))
            pieces.append("`")
            return "".join(pieces)
        if isinstance(node, Identifier):
            return node.name
        if isinstance(node, NumericLiteral):
            return node.raw
        if isinstance(node, BooleanLiteral):
            return "true" if node.value else "false"
        if isinstance(node, NullLiteral):
            return "null"
        if isinstance(node, RawExpression):
            return node.text
        if isinstance(node, MemberExpression):
            target = self._wrap(node.object, Precedence.CALL)
            if isinstance(node.object, NumericLiteral) and not node.computed:
                target = f"({target})"
            if node.computed:
                return f"{target}[{self._print(node.property)}]"
            if is_identifier_name(node.property):
                return f"{target}.{node.property}"
            return f"{target}[{quote_string(node.property, self.quote)}]"
        if isinstance(node, CallExpression):
            callee = self._wrap(node.callee, Precedence.CALL)
            arguments = ", ".join(self._wrap(argument, Precedence.ASSIGNMENT) for argument in node.arguments)
            return f"{callee}({arguments})"
        if isinstance(node, ConditionalExpression):
            test = self._wrap(node.test, Precedence.LOGICAL_OR)
            consequent = self._wrap(node.consequent, Precedence.ASSIGNMENT)
            alternate = self._wrap(node.alternate, Precedence.ASSIGNMENT)
            return f"{test} ? {consequent} : {alternate}"
        if isinstance(node, (BinaryExpression, LogicalExpression)):
            return self._print_operation(node)
        if isinstance(node, ArrayExpression):
            return "[" + ", ".join(self._wrap(element, Precedence.ASSIGNMENT) for element in node.elements) + "]"
        if isinstance(node, ObjectExpression):
            if not node.properties:
                return "{}"
            return "{ " + ", ".join(self._print_member(member) for member in node.properties) + " }"
        if isinstance(node, Property):
            return self._print_member(node)
        raise TypeError(f"Cannot print node of type {type(node).__name__}")

    def _print_operation(self, node) -> str:
        level = precedence_of(node)
        if node.operator == "**":
            left_minimum, right_minimum = Precedence.POSTFIX, level
        else:
            left_minimum, right_minimum = level, Precedence(level + 1)
        left = self._wrap(node.left, _mixing_guard(node, node.left, left_minimum))
        right = self._wrap(node.right, _mixing_guard(node, node.right, right_minimum))
        return f"{left} {node.operator} {right}"

    def _print_member(self, member) -> str:
        if isinstance(member, RawExpression):
            return member.text
        value = self._wrap(member.value, Precedence.ASSIGNMENT)
        if member.computed:
            return f"[{self._print(member.key)}]: {value}"
        if member.shorthand and isinstance(member.key, Identifier):
            return member.key.name
        if isinstance(member.key, Identifier):
            return f"{member.key.name}: {value}"
        return f"{self._print(member.key)}: {value}"


def _mixing_guard(parent: Expression, child: Expression, minimum: Precedence) -> Precedence:
    # '??' cannot be mixed with '&&' or '||' without parentheses
    if (
        isinstance(parent, LogicalExpression)
        and isinstance(child, LogicalExpression)
        and child.operator != parent.operator
        and "??" in (child.operator, parent.operator)
    ):
        return Precedence.PRIMARY
    return minimum


def print_expression(node: Expression, quote: str = "single") -> str:
    """Render ``node`` as JavaScript source text."""
    return ExpressionPrinter(quote=quote).print(node)


__all__ = ["ExpressionPrinter", "print_expression", "quote_string", "is_identifier_name", "precedence_of"]
