"""Tests for wrapping framework classes in :global()."""

from cssmodulize.styles import preserve_global_selectors


class TestPreserveGlobalSelectors:
    def test_wraps_prefixed_classes_in_selectors(self):
        source = ".at-icon { color: red; }\n.card .at-icon-x:hover, .at-x {}\n"
        result = preserve_global_selectors(source)
        assert result.changed
        assert result.css == (
            ":global(.at-icon) { color: red; }\n.card :global(.at-icon-x):hover, :global(.at-x) {}\n"
        )

    def test_already_wrapped_selector_is_unchanged(self):
        source = ".card :global(.at-icon) {}\n"
        result = preserve_global_selectors(source)
        assert not result.changed
        assert result.css == source

    def test_prefix_must_start_the_class(self):
        source = ".flat-button, .card-at-x, #at-id {}\n"
        assert not preserve_global_selectors(source).changed

    def test_declarations_are_untouched(self):
        source = ".card { background: url(http://x.at-cdn/a.png); content: '.at-x'; }\n"
        assert preserve_global_selectors(source).css == source

    def test_nested_rules(self):
        source = ".card {\n  .at-icon { color: red; }\n  &.at-active { color: blue; }\n}\n"
        assert preserve_global_selectors(source).css == (
            ".card {\n  :global(.at-icon) { color: red; }\n  &:global(.at-active) { color: blue; }\n}\n"
        )

    def test_nested_properties_and_at_rules(self):
        source = "@media (min-width: 1px) { .at-x { font: { family: x; } } }\n"
        assert preserve_global_selectors(source).css == (
            "@media (min-width: 1px) { :global(.at-x) { font: { family: x; } } }\n"
        )

    def test_comments_are_copied(self):
        source = "/* .at-icon { } */\n// .at-x {\n.card {}\n"
        assert not preserve_global_selectors(source).changed

    def test_custom_prefixes(self):
        result = preserve_global_selectors(".ant-btn, .at-icon {}", ["ant-"])
        assert result.css == ":global(.ant-btn), .at-icon {}"

    def test_no_prefixes(self):
        assert not preserve_global_selectors(".at-icon {}", []).changed

