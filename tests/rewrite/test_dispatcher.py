"""Tests for the className rewrite engine."""

import pytest

from cssmodulize.ast import (
    ArrayExpression,
    BinaryExpression,
    CallExpression,
    ConditionalExpression,
    Identifier,
    LogicalExpression,
    MemberExpression,
    NumericLiteral,
    ObjectExpression,
    Property,
    RawExpression,
    SourceLocation,
    StringLiteral,
    TemplateLiteral,
    module_member,
)
from cssmodulize.errors import (
    AmbiguousTemplateFusionError,
    ClassNameRewriteError,
    UnsafeCallTargetError,
    UnsupportedOperatorError,
)
from cssmodulize.rewrite import ClassNameRewriter, synthesize


def level():
    return Identifier("level")


class TestStringLiterals:
    def test_single_mapped_class(self, rewriter, render):
        assert render(rewriter, StringLiteral("card")) == "styles.card"

    def test_mapped_and_global_classes(self, rewriter, render):
        assert render(rewriter, StringLiteral("card  bg-white")) == "clsx(styles.card, 'bg-white')"

    def test_hyphenated_class_uses_local_name(self, rewriter, render):
        assert render(rewriter, StringLiteral("color--red")) == "styles.colorRed"

    def test_no_mapped_class_is_unchanged(self, rewriter):
        assert rewriter.rewrite(StringLiteral("bg-white text")) is None

    def test_empty_string_is_unchanged(self, rewriter):
        assert rewriter.rewrite(StringLiteral("")) is None

    def test_arguments_follow_token_order(self, rewriter):
        arguments = rewriter.rewrite(StringLiteral(" x card  y "))
        assert arguments == [StringLiteral("x"), module_member("styles", "card"), StringLiteral("y")]


class TestTemplateLiterals:
    def test_static_template(self, rewriter, render):
        node = TemplateLiteral(quasis=["card"], expressions=[])
        assert render(rewriter, node) == "styles.card"

    def test_fused_tokens_stay_with_expression(self, rewriter, render):
        node = TemplateLiteral(quasis=["card card-", ""], expressions=[level()])
        assert render(rewriter, node) == "clsx(styles.card, `card-${level}`)"

    def test_unmapped_fused_template_is_unchanged(self, rewriter):
        node = TemplateLiteral(
            quasis=["", "-tag tag left-", "-right"],
            expressions=[level(), level()],
        )
        assert rewriter.rewrite(node) is None

    def test_free_expression_is_spliced(self, rewriter, render):
        node = TemplateLiteral(quasis=["card ", ""], expressions=[Identifier("extra")])
        assert render(rewriter, node) == "clsx(styles.card, extra)"

    def test_conditional_with_spaced_branches(self, rewriter, render):
        test = BinaryExpression("===", level(), StringLiteral("1"))
        node = TemplateLiteral(
            quasis=["", " card"],
            expressions=[ConditionalExpression(test, StringLiteral("active "), StringLiteral(" "))],
        )
        assert render(rewriter, node) == "clsx(level === '1' ? styles.active : '', styles.card)"

    def test_fused_global_prefix_is_kept(self, rewriter, render):
        branch = ConditionalExpression(level(), StringLiteral("svip"), StringLiteral("profile"))
        node = TemplateLiteral(quasis=["at-icon at-icon-", " color--red"], expressions=[branch])
        assert render(rewriter, node) == (
            "clsx('at-icon', `at-icon-${level ? 'svip' : 'profile'}`, styles.colorRed)"
        )

    def test_two_expressions_glued_together(self, rewriter, render):
        node = TemplateLiteral(quasis=["card ", "-", ""], expressions=[Identifier("a"), Identifier("b")])
        assert render(rewriter, node) == "clsx(styles.card, `${a}-${b}`)"

    def test_fused_expression_rewritten_to_one_argument(self, rewriter, render):
        inner = ConditionalExpression(level(), StringLiteral("card"), StringLiteral("other"))
        node = TemplateLiteral(quasis=["x-", ""], expressions=[inner])
        assert render(rewriter, node) == "clsx(`x-${level ? styles.card : 'other'}`)"

    def test_fused_expression_with_several_arguments_fails(self, rewriter):
        node = TemplateLiteral(quasis=["x-", ""], expressions=[StringLiteral("card bg")])
        with pytest.raises(AmbiguousTemplateFusionError):
            rewriter.rewrite(node)


class TestConcatenation:
    def test_conditional_between_strings(self, rewriter, render):
        node = BinaryExpression(
            "+",
            BinaryExpression(
                "+",
                StringLiteral("card "),
                ConditionalExpression(level(), StringLiteral(" bg-white"), StringLiteral(" ")),
            ),
            StringLiteral(" color--red"),
        )
        assert render(rewriter, node) == "clsx(styles.card, level ? 'bg-white' : '', styles.colorRed)"

    def test_fused_concatenation_is_rebuilt(self, rewriter, render):
        node = BinaryExpression(
            "+",
            BinaryExpression("+", StringLiteral("btn-"), Identifier("size")),
            StringLiteral(" card"),
        )
        assert render(rewriter, node) == "clsx('btn-' + size, styles.card)"

    def test_leading_non_string_operands_are_folded(self, rewriter, render):
        node = BinaryExpression(
            "+",
            BinaryExpression("+", Identifier("a"), Identifier("b")),
            StringLiteral(" card"),
        )
        assert render(rewriter, node) == "clsx(a + b, styles.card)"

    def test_unmapped_concatenation_is_unchanged(self, rewriter):
        node = BinaryExpression("+", Identifier("className"), StringLiteral(" x"))
        assert rewriter.rewrite(node) is None

    def test_other_operator_fails(self, rewriter):
        node = BinaryExpression("-", StringLiteral("card"), NumericLiteral("1"))
        node.loc = SourceLocation(line=7)
        with pytest.raises(UnsupportedOperatorError) as exc_info:
            rewriter.rewrite(node)
        assert exc_info.value.line == 7
        assert exc_info.value.code == "CMZ102"

    def test_other_operator_deep_in_chain_fails(self, rewriter):
        node = BinaryExpression(
            "+",
            BinaryExpression("*", Identifier("a"), Identifier("b")),
            StringLiteral(" card"),
        )
        with pytest.raises(UnsupportedOperatorError):
            rewriter.rewrite(node)


class TestMergeCalls:
    def test_mapped_argument_among_others(self, class_map, render):
        rewriter = ClassNameRewriter({"card": class_map["card"]}, "styles", "classNames")
        node = CallExpression(
            Identifier("classNames"),
            [
                StringLiteral("card"),
                StringLiteral("bg-white"),
                ObjectExpression([Property(Identifier("active"), level())]),
            ],
        )
        assert render(rewriter, node) == "classNames(styles.card, 'bg-white', { active: level })"

    def test_string_argument_is_split(self, rewriter, render):
        node = CallExpression(Identifier("clsx"), [StringLiteral("card  bg-white")])
        assert render(rewriter, node) == "clsx(styles.card, 'bg-white')"

    def test_unmapped_merge_call_is_unchanged(self, rewriter):
        node = CallExpression(Identifier("clsx"), [StringLiteral("btnWrap")])
        assert rewriter.rewrite(node) is None

    def test_other_call_with_mapped_class_fails(self, rewriter):
        node = CallExpression(Identifier("cx"), [StringLiteral("card")])
        with pytest.raises(UnsafeCallTargetError) as exc_info:
            rewriter.rewrite(node)
        assert "cx" in exc_info.value.message
        assert isinstance(exc_info.value, ClassNameRewriteError)

    def test_other_call_without_mapped_class_is_unchanged(self, rewriter):
        node = CallExpression(Identifier("getClass"), [StringLiteral("x"), level()])
        assert rewriter.rewrite(node) is None

    def test_other_call_with_mapped_object_key_fails(self, rewriter):
        node = CallExpression(
            MemberExpression(Identifier("utils"), "cx"),
            [ObjectExpression([Property(Identifier("active"), level())])],
        )
        with pytest.raises(UnsafeCallTargetError):
            rewriter.rewrite(node)


class TestConditionals:
    def test_branches_are_rewritten(self, rewriter, render):
        node = ConditionalExpression(level(), StringLiteral("card"), StringLiteral("other"))
        assert render(rewriter, node) == "clsx(level ? styles.card : 'other')"

    def test_branch_with_several_classes_becomes_array(self, rewriter, render):
        node = ConditionalExpression(level(), StringLiteral("card x"), StringLiteral(""))
        assert render(rewriter, node) == "clsx(level ? [styles.card, 'x'] : '')"

    def test_unmapped_conditional_is_unchanged(self, rewriter):
        node = ConditionalExpression(level(), StringLiteral("a"), StringLiteral("b"))
        assert rewriter.rewrite(node) is None

    def test_test_expression_is_not_rewritten(self, rewriter):
        node = ConditionalExpression(StringLiteral("card"), Identifier("a"), Identifier("b"))
        assert rewriter.rewrite(node) is None


class TestLogicalExpressions:
    def test_string_right_side_is_rewritten(self, rewriter, render):
        node = LogicalExpression("&&", Identifier("ok"), StringLiteral("card"))
        assert render(rewriter, node) == "clsx(ok && styles.card)"

    def test_several_classes_are_packed(self, rewriter, render):
        node = LogicalExpression("&&", Identifier("ok"), StringLiteral("card x"))
        assert render(rewriter, node) == "clsx(ok && [styles.card, 'x'])"

    def test_non_string_right_side_is_unchanged(self, rewriter):
        node = LogicalExpression("||", Identifier("className"), Identifier("fallback"))
        assert rewriter.rewrite(node) is None


class TestArrays:
    def test_elements_are_rewritten_and_blanks_dropped(self, rewriter, render):
        node = ArrayExpression([StringLiteral("card"), StringLiteral(""), Identifier("x")])
        assert render(rewriter, node) == "clsx([styles.card, x])"

    def test_multiple_results_are_spliced(self, rewriter, render):
        node = ArrayExpression([StringLiteral("card other")])
        assert render(rewriter, node) == "clsx([styles.card, 'other'])"

    def test_unmapped_array_is_unchanged(self, rewriter):
        assert rewriter.rewrite(ArrayExpression([StringLiteral("a"), StringLiteral("")])) is None


class TestObjects:
    def test_identifier_key_becomes_computed(self, rewriter, render):
        node = ObjectExpression([Property(Identifier("card"), Identifier("isOn"))])
        assert render(rewriter, node) == "clsx({ [styles.card]: isOn })"

    def test_shorthand_key_becomes_computed(self, rewriter, render):
        node = ObjectExpression([Property(Identifier("active"), Identifier("active"), shorthand=True)])
        assert render(rewriter, node) == "clsx({ [styles.active]: active })"

    def test_string_key_expands_per_token(self, rewriter, render):
        node = ObjectExpression([Property(StringLiteral("card other"), Identifier("x"))])
        assert render(rewriter, node) == "clsx({ [styles.card]: x, 'other': x })"

    def test_computed_and_raw_members_are_kept(self, rewriter, render):
        node = ObjectExpression(
            [
                Property(MemberExpression(Identifier("styl"), "o"), Identifier("x"), computed=True),
                RawExpression("...rest"),
                Property(Identifier("card"), Identifier("y")),
            ]
        )
        assert render(rewriter, node) == "clsx({ [styl.o]: x, ...rest, [styles.card]: y })"

    def test_unmapped_object_is_unchanged(self, rewriter):
        node = ObjectExpression([Property(Identifier("disabled"), Identifier("x"))])
        assert rewriter.rewrite(node) is None


class TestOpaqueValues:
    @pytest.mark.parametrize(
        "node",
        [
            Identifier("className"),
            MemberExpression(Identifier("styl"), "o"),
            NumericLiteral("1"),
            RawExpression("props.getClass?.()"),
        ],
    )
    def test_opaque_nodes_are_unchanged(self, rewriter, node):
        assert rewriter.rewrite(node) is None


class TestIdempotence:
    def test_rewritten_output_is_stable(self, rewriter):
        node = StringLiteral("card bg-white")
        first = rewriter.rewrite(node)
        merged = CallExpression(Identifier("clsx"), first)
        assert rewriter.rewrite(merged) is None

    def test_empty_map_changes_nothing(self, render):
        rewriter = ClassNameRewriter({}, "styles", "clsx")
        node = CallExpression(
            Identifier("clsx"),
            [StringLiteral("card"), ObjectExpression([Property(Identifier("card"), Identifier("x"))])],
        )
        assert rewriter.rewrite(node) is None


class TestRewriteValue:
    def test_successful_result(self, rewriter):
        result = rewriter.rewrite_value(StringLiteral("card"))
        assert result.ok
        assert result.changed
        assert result.replacement == module_member("styles", "card")

    def test_unchanged_result(self, rewriter):
        result = rewriter.rewrite_value(StringLiteral("x"))
        assert result.ok
        assert not result.changed
        assert result.arguments is None

    def test_error_result_carries_path(self, class_map):
        rewriter = ClassNameRewriter(class_map, "styles", "clsx", path="src/a.jsx")
        result = rewriter.rewrite_value(CallExpression(Identifier("cx"), [StringLiteral("card")]))
        assert not result.ok
        assert isinstance(result.error, UnsafeCallTargetError)
        assert result.error.path == "src/a.jsx"
        assert "src/a.jsx" in result.error.format()

    def test_lookup(self, rewriter):
        assert rewriter.lookup("color--red") == module_member("styles", "colorRed")
        assert rewriter.lookup("missing") is None


def template(quasis, expressions):
    return TemplateLiteral(quasis=list(quasis), expressions=list(expressions))


def concat(*operands):
    operands = [StringLiteral(item) if isinstance(item, str) else item for item in operands]
    result = operands[0]
    for operand in operands[1:]:
        result = BinaryExpression("+", result, operand)
    return result


def when(name, consequent, alternate):
    return ConditionalExpression(Identifier(name), StringLiteral(consequent), StringLiteral(alternate))


@pytest.fixture
def short_rewriter():
    return ClassNameRewriter(
        {"card": "_card_1a2b3", "btn": "_btn_0f0f0", "active": "_active_7e8f9"},
        "styles",
        "clsx",
    )


class TestEmptyBranches:
    def test_empty_branch_keeps_template_neighbours_fused(self, short_rewriter):
        node = template(["btn", "--lg"], [when("c", "", " disabled")])
        assert short_rewriter.rewrite(node) is None

    def test_empty_branch_keeps_concatenation_neighbours_fused(self, short_rewriter):
        node = concat("card", when("c", " on", ""), "-x")
        assert short_rewriter.rewrite(node) is None

    def test_empty_branch_before_free_text_splits(self, short_rewriter, render):
        node = template(["btn", " card"], [when("c", "", " active")])
        assert render(short_rewriter, node) == "clsx(styles.btn, c ? '' : styles.active, styles.card)"

    def test_empty_branch_after_free_text_splits(self, short_rewriter, render):
        node = template(["x ", "card"], [when("c", "", "btn ")])
        assert render(short_rewriter, node) == "clsx('x', c ? '' : styles.btn, styles.card)"


def _to_string(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _merge(values):
    """Class list produced by clsx/classnames for ``values``."""
    classes = []
    for value in values:
        if isinstance(value, str):
            classes.extend(value.split())
        elif isinstance(value, list):
            classes.extend(_merge(value))
        elif isinstance(value, dict):
            for key, enabled in value.items():
                if enabled:
                    classes.extend(key.split())
    return classes


def _property_key(key, env):
    if isinstance(key, Identifier):
        return key.name
    return _to_string(_evaluate(key, env))


def _evaluate(node, env):
    """Runtime value of ``node``, reading ``styles.x`` as the class ``x``."""
    if isinstance(node, StringLiteral):
        return node.value
    if isinstance(node, Identifier):
        return env[node.name]
    if isinstance(node, MemberExpression):
        return node.property
    if isinstance(node, TemplateLiteral):
        pieces = [node.quasis[0]]
        for expression, quasi in zip(node.expressions, node.quasis[1:]):
            pieces.append(_to_string(_evaluate(expression, env)))
            pieces.append(quasi)
        return "".join(pieces)
    if isinstance(node, BinaryExpression):
        assert node.operator == "+"
        return _to_string(_evaluate(node.left, env)) + _to_string(_evaluate(node.right, env))
    if isinstance(node, ConditionalExpression):
        branch = node.consequent if _evaluate(node.test, env) else node.alternate
        return _evaluate(branch, env)
    if isinstance(node, LogicalExpression):
        left = _evaluate(node.left, env)
        if node.operator == "&&":
            return _evaluate(node.right, env) if left else left
        return left if left else _evaluate(node.right, env)
    if isinstance(node, ArrayExpression):
        return [_evaluate(element, env) for element in node.elements]
    if isinstance(node, ObjectExpression):
        return {_property_key(member.key, env): _evaluate(member.value, env) for member in node.properties}
    if isinstance(node, CallExpression):
        return " ".join(_merge([_evaluate(argument, env) for argument in node.arguments]))
    raise TypeError(type(node).__name__)


def _rendered_classes(node, env):
    value = _evaluate(node, env)
    return sorted(value.split()) if isinstance(value, str) else sorted(_merge([value]))


def _environments():
    for c in (True, False):
        for d in (True, False):
            for size in ("lg", ""):
                yield {"c": c, "d": d, "size": size}


CLASS_VALUES = [
    template(["btn", "--lg"], [when("c", "", " disabled")]),
    concat("card", when("c", " on", ""), "-x"),
    template(["btn", " card"], [when("c", "", " active")]),
    concat("card ", when("c", " btn", " "), " active"),
    template(["", " card"], [when("c", "active ", " ")]),
    template(["card card-", ""], [Identifier("size")]),
    template(["", " active"], [when("c", "card", "")]),
    concat("btn ", Identifier("size"), " card"),
    template(["x ", "card"], [when("c", "", "btn ")]),
    template(["card", "", " btn"], [when("c", "", " "), when("d", "", "-x")]),
    template(["", " card"], [when("c", "", "btn")]),
    concat("card", when("c", "", " "), "btn"),
    concat("btn-", Identifier("size"), " card ", when("d", "active", "")),
    CallExpression(Identifier("clsx"), [StringLiteral("card  btn"), when("c", "active", "")]),
    LogicalExpression("&&", Identifier("c"), StringLiteral("card x")),
    CallExpression(
        Identifier("clsx"),
        [
            ArrayExpression([StringLiteral("card"), LogicalExpression("&&", Identifier("d"), StringLiteral("btn"))]),
            ObjectExpression([Property(Identifier("active"), Identifier("c")), Property(StringLiteral("btn x"), Identifier("d"))]),
        ],
    ),
]


class TestClassSetPreservation:
    @pytest.mark.parametrize("node", CLASS_VALUES)
    def test_rewrite_renders_the_same_classes(self, short_rewriter, node):
        arguments = short_rewriter.rewrite(node)
        rewritten = node if arguments is None else synthesize(arguments, "clsx")
        for env in _environments():
            assert _rendered_classes(rewritten, env) == _rendered_classes(node, env), env
