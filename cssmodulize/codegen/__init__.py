"""Code generation for rewritten class expressions."""

from .printer import ExpressionPrinter, is_identifier_name, print_expression, quote_string

__all__ = ["ExpressionPrinter", "print_expression", "quote_string", "is_identifier_name"]
