"""Conversion of tree-sitter expression nodes into the class expression AST."""

from __future__ import annotations

import re
from typing import Any, List, Optional

from ..ast import (
    LOGICAL_OPERATORS,
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
    SourceLocation,
    StringLiteral,
    TemplateLiteral,
)
from .source import ParsedSource

_ESCAPE = re.compile(r"\\(u\{[0-9A-Fa-f]+\}|u[0-9A-Fa-f]{4}|x[0-9A-Fa-f]{2}|[0-7]{1,3}|\r\n|[\s\S])")
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v"}
_LINE_CONTINUATIONS = {"\r\n", "\n", "\r", "\u2028", "\u2029"}

_RAW_PRECEDENCE = {
    "sequence_expression": Precedence.SEQUENCE,
    "assignment_expression": Precedence.ASSIGNMENT,
    "augmented_assignment_expression": Precedence.ASSIGNMENT,
    "arrow_function": Precedence.ASSIGNMENT,
    "yield_expression": Precedence.ASSIGNMENT,
    "spread_element": Precedence.ASSIGNMENT,
    "as_expression": Precedence.RELATIONAL,
    "satisfies_expression": Precedence.RELATIONAL,
    "unary_expression": Precedence.UNARY,
    "await_expression": Precedence.UNARY,
    "update_expression": Precedence.UNARY,
    "non_null_expression": Precedence.POSTFIX,
    "new_expression": Precedence.CALL,
    "call_expression": Precedence.CALL,
    "member_expression": Precedence.CALL,
    "subscript_expression": Precedence.CALL,
}


def decode_escapes(raw: str) -> str:
    """Cook the escape sequences of a JavaScript string or template body."""

    def replace(match: "re.Match[str]") -> str:
        body = match.group(1)
        if body.startswith("u{"):
            return chr(int(body[2:-1], 16))
        if body[0] == "u" and len(body) == 5:
            return chr(int(body[1:], 16))
        if body[0] == "x" and len(body) == 3:
            return chr(int(body[1:], 16))
        if body[0] in "01234567":
            return chr(int(body, 8))
        if body in _LINE_CONTINUATIONS:
            return ""
        return _SIMPLE_ESCAPES.get(body, body)

    cooked = _ESCAPE.sub(replace, raw)
    # join surrogate pairs written as two \u escapes
    return cooked.encode("utf-16", "surrogatepass").decode("utf-16")


def named_children(node: Any) -> List[Any]:
    """Named children of ``node`` without comments."""
    return [child for child in node.named_children if child.type != "comment"]


class ExpressionBuilder:
    """Build :mod:`cssmodulize.ast` nodes from a parsed source."""

    def __init__(self, parsed: ParsedSource) -> None:
        self.parsed = parsed

    def build_attribute_value(self, value: Any) -> Optional[Expression]:
        """Expression for a JSX attribute value, ``None`` when there is none."""
        if value.type == "string":
            # JSX attribute strings take no backslash escapes
            return StringLiteral(self.parsed.text(value)[1:-1], loc=self._loc(value))
        if value.type == "jsx_expression":
            inner = named_children(value)
            if not inner or inner[0].type == "spread_element":
                return None
            return self.build(inner[0])
        return None

    def build(self, node: Any) -> Expression:  # noqa: C901 - one branch per node kind
        kind = node.type
        loc = self._loc(node)
        if kind == "parenthesized_expression":
            inner = named_children(node)
            if len(inner) != 1:
                return self._raw(node, Precedence.PRIMARY)
            built = self.build(inner[0])
            if isinstance(built, RawExpression):
                return self._raw(node, Precedence.PRIMARY)
            return built
        if kind == "string":
            return StringLiteral(decode_escapes(self.parsed.text(node)[1:-1]), loc=loc)
        if kind == "template_string":
            return self._build_template(node)
        if kind in ("identifier", "undefined"):
            return Identifier(self.parsed.text(node), loc=loc)
        if kind == "number":
            return NumericLiteral(self.parsed.text(node), loc=loc)
        if kind in ("true", "false"):
            return BooleanLiteral(kind == "true", loc=loc)
        if kind == "null":
            return NullLiteral(loc=loc)
        if kind == "ternary_expression":
            return ConditionalExpression(
                test=self.build(node.child_by_field_name("condition")),
                consequent=self.build(node.child_by_field_name("consequence")),
                alternate=self.build(node.child_by_field_name("alternative")),
                loc=loc,
            )
        if kind == "binary_expression":
            operator = node.child_by_field_name("operator").type
            left = self.build(node.child_by_field_name("left"))
            right = self.build(node.child_by_field_name("right"))
            if operator in LOGICAL_OPERATORS:
                return LogicalExpression(operator=operator, left=left, right=right, loc=loc)
            return BinaryExpression(operator=operator, left=left, right=right, loc=loc)
        if kind == "call_expression":
            return self._build_call(node)
        if kind == "member_expression":
            prop = node.child_by_field_name("property")
            if self._is_optional(node) or prop is None or prop.type != "property_identifier":
                return self._raw(node)
            return MemberExpression(
                object=self.build(node.child_by_field_name("object")),
                property=self.parsed.text(prop),
                loc=loc,
            )
        if kind == "subscript_expression":
            index = node.child_by_field_name("index")
            if self._is_optional(node) or index is None:
                return self._raw(node)
            return MemberExpression(
                object=self.build(node.child_by_field_name("object")),
                property=self.build(index),
                computed=True,
                loc=loc,
            )
        if kind == "array":
            return ArrayExpression(elements=[self.build(child) for child in named_children(node)], loc=loc)
        if kind == "object":
            return ObjectExpression(properties=[self._build_member(child) for child in named_children(node)], loc=loc)
        return self._raw(node)

    def _build_template(self, node: Any) -> TemplateLiteral:
        source = self.parsed.source
        quasis: List[str] = []
        expressions: List[Expression] = []
        cursor = node.start_byte + 1
        for child in node.named_children:
            if child.type != "template_substitution":
                continue
            quasis.append(decode_escapes(source[cursor:child.start_byte].decode("utf-8")))
            inner = named_children(child)
            expressions.append(self.build(inner[0]) if inner else self._raw(child))
            cursor = child.end_byte
        quasis.append(decode_escapes(source[cursor:node.end_byte - 1].decode("utf-8")))
        return TemplateLiteral(quasis=quasis, expressions=expressions, loc=self._loc(node))

    def _build_call(self, node: Any) -> Expression:
        arguments = node.child_by_field_name("arguments")
        if (
            self._is_optional(node)
            or arguments is None
            or arguments.type != "arguments"
            or node.child_by_field_name("type_arguments") is not None
        ):
            return self._raw(node)
        return CallExpression(
            callee=self.build(node.child_by_field_name("function")),
            arguments=[self.build(child) for child in named_children(arguments)],
            loc=self._loc(node),
        )

    def _build_member(self, node: Any):
        loc = self._loc(node)
        if node.type == "shorthand_property_identifier":
            name = self.parsed.text(node)
            return Property(key=Identifier(name), value=Identifier(name), shorthand=True, loc=loc)
        if node.type != "pair":
            return self._raw(node)
        key = node.child_by_field_name("key")
        value = self.build(node.child_by_field_name("value"))
        if key.type == "computed_property_name":
            inner = named_children(key)
            if len(inner) != 1:
                return self._raw(node)
            return Property(key=self.build(inner[0]), value=value, computed=True, loc=loc)
        if key.type == "property_identifier":
            return Property(key=Identifier(self.parsed.text(key)), value=value, loc=loc)
        if key.type == "string":
            return Property(key=self.build(key), value=value, loc=loc)
        if key.type == "number":
            return Property(key=NumericLiteral(self.parsed.text(key)), value=value, loc=loc)
        return self._raw(node)

    @staticmethod
    def _is_optional(node: Any) -> bool:
        return node.child_by_field_name("optional_chain") is not None

    def _raw(self, node: Any, precedence: Optional[Precedence] = None) -> RawExpression:
        if precedence is None:
            precedence = _RAW_PRECEDENCE.get(node.type, Precedence.PRIMARY)
        return RawExpression(self.parsed.text(node), precedence=precedence, loc=self._loc(node))

    def _loc(self, node: Any) -> SourceLocation:
        row, column = node.start_point
        return SourceLocation(line=row + 1, column=column, file=self.parsed.path)


__all__ = ["ExpressionBuilder", "decode_escapes", "named_children"]
