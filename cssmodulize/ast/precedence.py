"""JavaScript operator precedence levels used by the parser and printer."""

from __future__ import annotations

from enum import IntEnum
from typing import Dict


class Precedence(IntEnum):
    """Binding strength of an expression; higher binds tighter."""

    SEQUENCE = 1
    ASSIGNMENT = 2
    CONDITIONAL = 3
    LOGICAL_OR = 4
    LOGICAL_AND = 5
    BITWISE_OR = 6
    BITWISE_XOR = 7
    BITWISE_AND = 8
    EQUALITY = 9
    RELATIONAL = 10
    SHIFT = 11
    ADDITIVE = 12
    MULTIPLICATIVE = 13
    EXPONENT = 14
    UNARY = 15
    POSTFIX = 16
    CALL = 17
    PRIMARY = 18


BINARY_PRECEDENCE: Dict[str, Precedence] = {
    "??": Precedence.LOGICAL_OR,
    "||": Precedence.LOGICAL_OR,
    "&&": Precedence.LOGICAL_AND,
    "|": Precedence.BITWISE_OR,
    "^": Precedence.BITWISE_XOR,
    "&": Precedence.BITWISE_AND,
    "==": Precedence.EQUALITY,
    "!=": Precedence.EQUALITY,
    "===": Precedence.EQUALITY,
    "!==": Precedence.EQUALITY,
    "<": Precedence.RELATIONAL,
    ">": Precedence.RELATIONAL,
    "<=": Precedence.RELATIONAL,
    ">=": Precedence.RELATIONAL,
    "instanceof": Precedence.RELATIONAL,
    "in": Precedence.RELATIONAL,
    "<<": Precedence.SHIFT,
    ">>": Precedence.SHIFT,
    ">>>": Precedence.SHIFT,
    "+": Precedence.ADDITIVE,
    "-": Precedence.ADDITIVE,
    "*": Precedence.MULTIPLICATIVE,
    "/": Precedence.MULTIPLICATIVE,
    "%": Precedence.MULTIPLICATIVE,
    "**": Precedence.EXPONENT,
}

LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})


__all__ = ["Precedence", "BINARY_PRECEDENCE", "LOGICAL_OPERATORS"]
