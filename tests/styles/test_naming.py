"""Tests for stylesheet naming rules."""

import pytest

from cssmodulize.styles import is_global_style, module_style_name


class TestIsGlobalStyle:
    @pytest.mark.parametrize("path", ["./card.scss", "a.css", "../x/theme.sass", "b.less", "c.styl"])
    def test_global_sheets(self, path):
        assert is_global_style(path)

    @pytest.mark.parametrize("path", ["./card.module.scss", "a.module.css", "./card.js", "./scss", "a.css.map"])
    def test_other_paths(self, path):
        assert not is_global_style(path)


class TestModuleStyleName:
    def test_inserts_module_suffix(self):
        assert module_style_name("./card.scss") == "./card.module.scss"
        assert module_style_name("../a.b.css") == "../a.b.module.css"

    def test_module_name_is_unchanged(self):
        assert module_style_name("./card.module.scss") == "./card.module.scss"
        assert module_style_name("./card.js") == "./card.js"
