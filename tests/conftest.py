"""Shared pytest fixtures for the cssmodulize test suite."""

import logging
from pathlib import Path

import pytest

from cssmodulize.codegen import print_expression
from cssmodulize.parser import ExpressionBuilder, find_class_attributes, parse_source
from cssmodulize.rewrite import ClassNameRewriter, synthesize


@pytest.fixture(autouse=True)
def package_logger_state():
    """Restore the package logger after tests that configure it."""
    logger = logging.getLogger("cssmodulize")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


@pytest.fixture
def class_map():
    """Class map of a stylesheet defining .card, .color--red and .active."""
    return {
        "card": "_card_1a2b3",
        "colorRed": "_color--red_4c5d6",
        "active": "_active_7e8f9",
    }


@pytest.fixture
def rewriter(class_map):
    return ClassNameRewriter(class_map, "styles", "clsx")


@pytest.fixture
def render():
    """Rewrite a node and print the synthesized value, or None when unchanged."""

    def _render(rewriter, node):
        arguments = rewriter.rewrite(node)
        if arguments is None:
            return None
        return print_expression(synthesize(arguments, rewriter.merge_fn_name))

    return _render


@pytest.fixture
def class_value():
    """Parse ``<div className=VALUE />`` and return the built value expression."""

    def _class_value(value_source: str):
        source = f"const el = <div className={value_source} />;\n".encode("utf-8")
        parsed = parse_source(source, Path("component.jsx"))
        attributes = find_class_attributes(parsed)
        assert len(attributes) == 1
        return ExpressionBuilder(parsed).build_attribute_value(attributes[0].value)

    return _class_value


@pytest.fixture
def project(tmp_path):
    """Create files under a temporary project root from a ``{path: text}`` mapping."""

    def _project(files):
        for relative, content in files.items():
            target = tmp_path / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return tmp_path

    return _project
