"""
The className rewrite engine.

:class:`ClassNameRewriter` walks the expression assigned to a class attribute
and returns the list of merge-utility arguments that replace it, or ``None``
when none of its class tokens is defined by the stylesheet. Each node kind
has its own handler returning its own list; callers compose the results.

String literals, template literals and ``+`` concatenations are all treated
as a *sequence* of static text and embedded expressions. The sequence is cut
into groups at whitespace: a static group is one class token, a group made
of a single expression is a free-standing value, and a group in which static
text touches an expression (``icon-${name}``) is fused and stays together.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from ..ast import (
    ArrayExpression,
    BinaryExpression,
    CallExpression,
    ConditionalExpression,
    Expression,
    Identifier,
    LogicalExpression,
    MemberExpression,
    ObjectExpression,
    Property,
    StringLiteral,
    TemplateLiteral,
    is_blank_string,
    module_member,
)
from ..errors import (
    AmbiguousTemplateFusionError,
    ClassNameRewriteError,
    UnsafeCallTargetError,
    UnsupportedOperatorError,
)
from .boundaries import split_segment
from .synthesizer import synthesize
from .tokens import class_tokens, local_name

logger = logging.getLogger(__name__)

Part = Union[str, Expression]
Rebuild = Callable[[List[Part]], Expression]


@dataclass
class RewriteResult:
    """Outcome of rewriting one class attribute value."""

    arguments: Optional[List[Expression]] = None
    replacement: Optional[Expression] = None
    error: Optional[ClassNameRewriteError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def changed(self) -> bool:
        return self.replacement is not None


class ClassNameRewriter:
    """Rewrite class attribute values against one stylesheet's class map."""

    def __init__(
        self,
        class_name_map: Mapping[str, str],
        style_object_name: str,
        merge_fn_name: str,
        *,
        path: Optional[str] = None,
    ) -> None:
        self.class_name_map = class_name_map
        self.style_object_name = style_object_name
        self.merge_fn_name = merge_fn_name
        self.path = path
        self._handlers: Dict[type, Callable[[Expression], Optional[List[Expression]]]] = {
            StringLiteral: self._rewrite_string,
            TemplateLiteral: self._rewrite_template,
            CallExpression: self._rewrite_call,
            ConditionalExpression: self._rewrite_conditional,
            BinaryExpression: self._rewrite_binary,
            LogicalExpression: self._rewrite_logical,
            ArrayExpression: self._rewrite_array,
            ObjectExpression: self._rewrite_object,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def rewrite(self, node: Expression) -> Optional[List[Expression]]:
        """Return the replacement arguments for ``node`` or ``None``.

        Raises:
            ClassNameRewriteError: when the value cannot be rewritten safely.
        """
        handler = self._handlers.get(type(node))
        if handler is None:
            return None
        return handler(node)

    def rewrite_value(self, node: Expression) -> RewriteResult:
        """Rewrite a whole attribute value into a typed result."""
        try:
            arguments = self.rewrite(node)
        except ClassNameRewriteError as exc:
            if self.path and exc.path is None:
                exc.with_path(self.path)
            logger.debug("Rewrite failed: %s", exc.format())
            return RewriteResult(error=exc)
        if arguments is None:
            return RewriteResult()
        return RewriteResult(arguments=arguments, replacement=synthesize(arguments, self.merge_fn_name))

    def lookup(self, class_name: str) -> Optional[MemberExpression]:
        """Module reference for ``class_name`` if the stylesheet defines it."""
        name = local_name(class_name)
        if name in self.class_name_map:
            return module_member(self.style_object_name, name)
        return None

    # ------------------------------------------------------------------
    # Sequences: strings, templates and concatenation
    # ------------------------------------------------------------------
    def _rewrite_string(self, node: StringLiteral) -> Optional[List[Expression]]:
        return self._rewrite_sequence([node.value], _rebuild_template)

    def _rewrite_template(self, node: TemplateLiteral) -> Optional[List[Expression]]:
        parts: List[Part] = [node.quasis[0]]
        for expression, quasi in zip(node.expressions, node.quasis[1:]):
            parts.append(expression)
            parts.append(quasi)
        return self._rewrite_sequence(parts, _rebuild_template)

    def _rewrite_binary(self, node: BinaryExpression) -> Optional[List[Expression]]:
        operands: List[Expression] = []
        current: Expression = node
        while isinstance(current, BinaryExpression):
            if current.operator != "+":
                raise UnsupportedOperatorError(
                    f"className value uses unsupported operator '{current.operator}'",
                    path=self.path,
                    line=current.line,
                )
            operands.append(current.right)
            current = current.left
        operands.append(current)
        operands.reverse()

        # JS adds left to right: operands before the first string may be numbers
        first_string = next(
            (index for index, operand in enumerate(operands) if isinstance(operand, StringLiteral)),
            None,
        )
        if first_string is not None and first_string > 1:
            operands = [_fold_concat(operands[:first_string])] + operands[first_string:]

        parts: List[Part] = [""]
        for operand in operands:
            if isinstance(operand, StringLiteral):
                parts[-1] += operand.value
            else:
                parts.append(operand)
                parts.append("")

        string_context = first_string is not None
        return self._rewrite_sequence(parts, lambda items: _rebuild_concat(items, string_context))

    def _rewrite_sequence(self, parts: Sequence[Part], rebuild: Rebuild) -> Optional[List[Expression]]:
        arguments: List[Expression] = []
        changed = False
        for group in self._group_parts(parts):
            if len(group) == 1 and isinstance(group[0], str):
                reference = self.lookup(group[0])
                if reference is None:
                    arguments.append(StringLiteral(group[0]))
                else:
                    arguments.append(reference)
                    changed = True
            elif len(group) == 1:
                result = self.rewrite(group[0])
                if result is None:
                    arguments.append(group[0])
                else:
                    arguments.extend(result)
                    changed = True
            else:
                fused, fused_changed = self._rewrite_fused(group, rebuild)
                arguments.append(fused)
                changed = changed or fused_changed
        if not changed:
            return None
        # each argument now stands alone, so edge whitespace inside it is noise
        return [_trim_edges(argument) for argument in arguments]

    def _group_parts(self, parts: Sequence[Part]) -> List[List[Part]]:
        groups: List[List[Part]] = []
        pending: List[Part] = []
        for index, part in enumerate(parts):
            if not isinstance(part, str):
                if pending and _frees_edge(parts, index, leading=True):
                    groups.append(pending)
                    pending = []
                pending.append(part)
                if _frees_edge(parts, index, leading=False):
                    groups.append(pending)
                    pending = []
                continue

            previous = parts[index - 1] if index > 0 else None
            following = parts[index + 1] if index + 1 < len(parts) else None
            split = split_segment(
                part,
                after_expression=isinstance(previous, Expression)
                and not _frees_edge(parts, index - 1, leading=False),
                before_expression=isinstance(following, Expression)
                and not _frees_edge(parts, index + 1, leading=True),
            )
            if split.bridge is not None:
                if split.bridge:
                    pending.append(split.bridge)
                continue
            if split.head is not None:
                pending.append(split.head)
            if pending:
                groups.append(pending)
                pending = []
            groups.extend([token] for token in split.free)
            if split.tail is not None:
                pending.append(split.tail)
        if pending:
            groups.append(pending)
        return groups

    def _rewrite_fused(self, group: List[Part], rebuild: Rebuild) -> Tuple[Expression, bool]:
        items: List[Part] = []
        changed = False
        for item in group:
            if isinstance(item, str):
                items.append(item)
                continue
            result = self.rewrite(item)
            if result is None:
                items.append(item)
            elif len(result) == 1:
                items.append(result[0])
                changed = True
            else:
                raise AmbiguousTemplateFusionError(
                    "className value glues several classes to adjacent text",
                    path=self.path,
                    line=item.line,
                )
        return rebuild(items), changed

    # ------------------------------------------------------------------
    # Structured values
    # ------------------------------------------------------------------
    def _rewrite_call(self, node: CallExpression) -> Optional[List[Expression]]:
        if isinstance(node.callee, Identifier) and node.callee.name == self.merge_fn_name:
            arguments: List[Expression] = []
            changed = False
            for argument in node.arguments:
                result = self.rewrite(argument)
                if result is None:
                    arguments.append(argument)
                else:
                    arguments.extend(result)
                    changed = True
            return arguments if changed else None

        if any(self._mentions_mapped_class(argument) for argument in node.arguments):
            callee = node.callee.name if isinstance(node.callee, Identifier) else "<expression>"
            raise UnsafeCallTargetError(
                f"className value passes classes to '{callee}', "
                f"which is not the merge utility '{self.merge_fn_name}'",
                path=self.path,
                line=node.line,
            )
        return None

    def _rewrite_conditional(self, node: ConditionalExpression) -> Optional[List[Expression]]:
        consequent, consequent_changed = self._rewrite_branch(node.consequent)
        alternate, alternate_changed = self._rewrite_branch(node.alternate)
        if not (consequent_changed or alternate_changed):
            return None
        return [ConditionalExpression(test=node.test, consequent=consequent, alternate=alternate, loc=node.loc)]

    def _rewrite_branch(self, branch: Expression) -> Tuple[Expression, bool]:
        result = self.rewrite(branch)
        if result is None:
            return branch, False
        kept = [argument for argument in result if not is_blank_string(argument)]
        if not kept:
            return StringLiteral(""), True
        return _pack(kept), True

    def _rewrite_logical(self, node: LogicalExpression) -> Optional[List[Expression]]:
        if not isinstance(node.right, StringLiteral):
            return None
        result = self.rewrite(node.right)
        if result is None:
            return None
        return [LogicalExpression(operator=node.operator, left=node.left, right=_pack(result), loc=node.loc)]

    def _rewrite_array(self, node: ArrayExpression) -> Optional[List[Expression]]:
        elements: List[Expression] = []
        changed = False
        for element in node.elements:
            result = self.rewrite(element)
            if result is None:
                elements.append(element)
            else:
                elements.extend(result)
                changed = True
        if not changed:
            return None
        return [ArrayExpression(elements=[e for e in elements if not is_blank_string(e)], loc=node.loc)]

    def _rewrite_object(self, node: ObjectExpression) -> Optional[List[Expression]]:
        properties = []
        changed = False
        for member in node.properties:
            expanded = self._rewrite_property(member)
            if expanded is None:
                properties.append(member)
            else:
                properties.extend(expanded)
                changed = True
        if not changed:
            return None
        return [ObjectExpression(properties=properties, loc=node.loc)]

    def _rewrite_property(self, member) -> Optional[List[Property]]:
        if not isinstance(member, Property) or member.computed:
            return None
        key = member.key
        if isinstance(key, Identifier):
            reference = self.lookup(key.name)
            if reference is None:
                return None
            return [Property(key=reference, value=member.value, computed=True, loc=member.loc)]
        if isinstance(key, StringLiteral):
            result = self.rewrite(key)
            if result is None:
                return None
            return [
                Property(
                    key=argument,
                    value=member.value,
                    computed=isinstance(argument, MemberExpression),
                    loc=member.loc,
                )
                for argument in result
            ]
        return None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _mentions_mapped_class(self, node: Expression) -> bool:
        for current in _walk(node):
            if isinstance(current, StringLiteral):
                texts = [current.value]
            elif isinstance(current, TemplateLiteral):
                texts = current.quasis
            elif isinstance(current, Property) and isinstance(current.key, Identifier) and not current.computed:
                texts = [current.key.name]
            else:
                continue
            if any(self.lookup(token) is not None for text in texts for token in class_tokens(text)):
                return True
        return False


def _walk(node: Expression) -> Iterator[Expression]:
    yield node
    if isinstance(node, TemplateLiteral):
        children: Sequence[Expression] = node.expressions
    elif isinstance(node, CallExpression):
        children = [node.callee, *node.arguments]
    elif isinstance(node, ConditionalExpression):
        children = [node.test, node.consequent, node.alternate]
    elif isinstance(node, (BinaryExpression, LogicalExpression)):
        children = [node.left, node.right]
    elif isinstance(node, ArrayExpression):
        children = node.elements
    elif isinstance(node, ObjectExpression):
        children = node.properties
    elif isinstance(node, Property):
        children = [node.key, node.value]
    else:
        children = []
    for child in children:
        yield from _walk(child)


_SPACE = "space"
_EMPTY = "empty"
_GLUED = "glued"


def _text_edge(text: str, leading: bool) -> FrozenSet[str]:
    if not text:
        return frozenset({_EMPTY})
    return frozenset({_SPACE if (text[0] if leading else text[-1]).isspace() else _GLUED})


def _edge_kinds(node: Expression, *, leading: bool) -> FrozenSet[str]:
    """What ``node`` may render at one edge: whitespace, nothing, or a class character."""
    if isinstance(node, StringLiteral):
        return _text_edge(node.value, leading)
    if isinstance(node, TemplateLiteral):
        if not node.expressions:
            return _text_edge(node.quasis[0], leading)
        text = node.quasis[0] if leading else node.quasis[-1]
        return _text_edge(text, leading) if text else frozenset({_GLUED})
    if isinstance(node, ConditionalExpression):
        return _edge_kinds(node.consequent, leading=leading) | _edge_kinds(node.alternate, leading=leading)
    return frozenset({_GLUED})


def _side_is_free(parts: Sequence[Part], index: int, *, after: bool) -> bool:
    """True when the static text at ``index`` cannot join a class across it.

    ``after`` tells whether that text follows the expression or precedes it.
    """
    if index < 0 or index >= len(parts):
        return True
    text = parts[index]
    if not isinstance(text, str):
        return False
    if text:
        edge = text[0] if after else text[-1]
        return edge.isspace()
    return index in (0, len(parts) - 1)


def _frees_edge(parts: Sequence[Part], index: int, *, leading: bool) -> bool:
    """True when the expression at ``index`` never glues to its neighbour on that edge.

    An expression that may render nothing lets the text on its two sides
    touch, so that edge is free only if the text on the far side is free too.
    """
    kinds = _edge_kinds(parts[index], leading=leading)
    if kinds <= {_SPACE}:
        return True
    if kinds <= {_SPACE, _EMPTY}:
        return _side_is_free(parts, index + 1 if leading else index - 1, after=leading)
    return False


def _trim_edges(node: Expression) -> Expression:
    if isinstance(node, StringLiteral):
        stripped = node.value.strip()
        return node if stripped == node.value else StringLiteral(stripped, loc=node.loc)
    if isinstance(node, ConditionalExpression):
        consequent = _trim_edges(node.consequent)
        alternate = _trim_edges(node.alternate)
        if consequent is node.consequent and alternate is node.alternate:
            return node
        return ConditionalExpression(test=node.test, consequent=consequent, alternate=alternate, loc=node.loc)
    if isinstance(node, LogicalExpression):
        right = _trim_edges(node.right)
        if right is node.right:
            return node
        return LogicalExpression(operator=node.operator, left=node.left, right=right, loc=node.loc)
    return node


def _pack(arguments: List[Expression]) -> Expression:
    return arguments[0] if len(arguments) == 1 else ArrayExpression(elements=list(arguments))


def _fold_concat(operands: Sequence[Expression]) -> Expression:
    result = operands[0]
    for operand in operands[1:]:
        result = BinaryExpression(operator="+", left=result, right=operand)
    return result


def _rebuild_template(items: List[Part]) -> TemplateLiteral:
    quasis = [""]
    expressions: List[Expression] = []
    for item in items:
        if isinstance(item, str):
            quasis[-1] += item
        else:
            expressions.append(item)
            quasis.append("")
    return TemplateLiteral(quasis=quasis, expressions=expressions)


def _rebuild_concat(items: List[Part], string_context: bool) -> Expression:
    operands = [StringLiteral(item) if isinstance(item, str) else item for item in items]
    if (
        string_context
        and len(operands) > 1
        and not isinstance(operands[0], StringLiteral)
        and not isinstance(operands[1], StringLiteral)
    ):
        operands.insert(0, StringLiteral(""))
    return _fold_concat(operands)


__all__ = ["ClassNameRewriter", "RewriteResult"]
