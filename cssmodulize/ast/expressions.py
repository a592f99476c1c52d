"""
Expression AST for class attribute values.

Only the node kinds the className rewrite engine inspects are modelled
structurally. Everything else a JSX expression container can hold is kept
as a :class:`RawExpression` carrying its original source text, so printing a
tree that contains it reproduces that part verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .precedence import Precedence
from .source_location import SourceLocation

__all__ = [
    "Expression",
    "StringLiteral",
    "TemplateLiteral",
    "CallExpression",
    "ConditionalExpression",
    "BinaryExpression",
    "LogicalExpression",
    "ArrayExpression",
    "ObjectExpression",
    "Property",
    "Identifier",
    "MemberExpression",
    "NumericLiteral",
    "BooleanLiteral",
    "NullLiteral",
    "RawExpression",
    "ObjectMember",
    "module_member",
    "is_blank_string",
]


@dataclass
class Expression:
    """Base class for all expression types."""

    loc: Optional[SourceLocation] = field(default=None, kw_only=True, compare=False, repr=False)

    @property
    def line(self) -> Optional[int]:
        return self.loc.line if self.loc else None


# ==================== Class-bearing expressions ====================


@dataclass
class StringLiteral(Expression):
    """String literal, ``value`` holds the cooked text: 'card bg-white'"""
    value: str


@dataclass
class TemplateLiteral(Expression):
    """Template literal: `a ${b} c`

    ``quasis`` holds the cooked static segments and always has exactly one
    more entry than ``expressions``.
    """
    quasis: List[str] = field(default_factory=lambda: [""])
    expressions: List[Expression] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.quasis) != len(self.expressions) + 1:
            raise ValueError("TemplateLiteral needs one more quasi than expressions")


@dataclass
class CallExpression(Expression):
    """Function call: callee(arg1, arg2, ...)"""
    callee: Expression
    arguments: List[Expression] = field(default_factory=list)


@dataclass
class ConditionalExpression(Expression):
    """Conditional expression: test ? consequent : alternate"""
    test: Expression
    consequent: Expression
    alternate: Expression


@dataclass
class BinaryExpression(Expression):
    """Binary operation other than the short-circuit operators: left op right"""
    operator: str
    left: Expression
    right: Expression


@dataclass
class LogicalExpression(Expression):
    """Short-circuit operation: left && right, left || right, left ?? right"""
    operator: str
    left: Expression
    right: Expression


@dataclass
class ArrayExpression(Expression):
    """Array literal: [expr1, expr2, ...]"""
    elements: List[Expression] = field(default_factory=list)


@dataclass
class Property(Expression):
    """Object member: key: value, [key]: value, or shorthand key"""
    key: Expression
    value: Expression
    computed: bool = False
    shorthand: bool = False


ObjectMember = Union[Property, "RawExpression"]


@dataclass
class ObjectExpression(Expression):
    """Object literal, used by merge utilities as {className: condition}"""
    properties: List[ObjectMember] = field(default_factory=list)


# ==================== Opaque expressions ====================


@dataclass
class Identifier(Expression):
    """Variable reference: x"""
    name: str


@dataclass
class MemberExpression(Expression):
    """Member access: object.property or object[property]

    ``property`` is a plain name for dotted access and an expression when
    ``computed`` is set.
    """
    object: Expression
    property: Union[str, Expression]
    computed: bool = False


@dataclass
class NumericLiteral(Expression):
    """Number literal, kept in its source spelling: 1e3, 0x10"""
    raw: str


@dataclass
class BooleanLiteral(Expression):
    value: bool


@dataclass
class NullLiteral(Expression):
    pass


@dataclass
class RawExpression(Expression):
    """Any other expression, preserved as source text."""
    text: str
    precedence: Precedence = Precedence.PRIMARY


def module_member(style_object_name: str, local_name: str) -> MemberExpression:
    """Build the ``styles.localName`` reference for a mapped class."""
    return MemberExpression(object=Identifier(style_object_name), property=local_name)


def is_blank_string(node: Expression) -> bool:
    """True for a string literal that renders no class at all."""
    return isinstance(node, StringLiteral) and not node.value.strip()
