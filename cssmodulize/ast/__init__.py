"""AST node definitions for class attribute values."""

from .expressions import (
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
    ObjectMember,
    Property,
    RawExpression,
    StringLiteral,
    TemplateLiteral,
    is_blank_string,
    module_member,
)
from .precedence import BINARY_PRECEDENCE, LOGICAL_OPERATORS, Precedence
from .source_location import SourceLocation

__all__ = [
    "ArrayExpression",
    "BinaryExpression",
    "BooleanLiteral",
    "CallExpression",
    "ConditionalExpression",
    "Expression",
    "Identifier",
    "LogicalExpression",
    "MemberExpression",
    "NullLiteral",
    "NumericLiteral",
    "ObjectExpression",
    "ObjectMember",
    "Property",
    "RawExpression",
    "StringLiteral",
    "TemplateLiteral",
    "is_blank_string",
    "module_member",
    "BINARY_PRECEDENCE",
    "LOGICAL_OPERATORS",
    "Precedence",
    "SourceLocation",
]
