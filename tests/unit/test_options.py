"""Unit tests for GovspeakOptions validation and the converter's parser check."""

import pytest

from govspeak_paste import converter as converter_module
from govspeak_paste.constants import DEFAULT_REMOVED_ELEMENTS
from govspeak_paste.converter import HtmlToGovspeakConverter
from govspeak_paste.exceptions import DependencyError, InvalidOptionsError, ValidationError
from govspeak_paste.options import GovspeakOptions


@pytest.mark.unit
class TestGovspeakOptions:
    def test_defaults(self):
        options = GovspeakOptions()

        assert options.bullet_list_marker == "-"
        assert options.list_indent == "   "
        assert options.br == "  "
        assert options.hr == "* * *"
        assert options.html_parser == "html.parser"
        assert options.removed_elements == DEFAULT_REMOVED_ELEMENTS

    def test_create_updated_returns_copy(self):
        options = GovspeakOptions()
        updated = options.create_updated(bullet_list_marker="+")

        assert updated.bullet_list_marker == "+"
        assert options.bullet_list_marker == "-"

    def test_options_are_frozen(self):
        with pytest.raises(AttributeError):
            GovspeakOptions().br = "\\"

    def test_removed_elements_are_normalized(self):
        options = GovspeakOptions(removed_elements=["SCRIPT", "Style"])
        assert options.removed_elements == ("script", "style")
        assert hash(options) == hash(GovspeakOptions(removed_elements=("script", "style")))

    @pytest.mark.parametrize(
        "field, value",
        [
            ("bullet_list_marker", "#"),
            ("list_indent", ""),
            ("list_indent", "ab"),
            ("br", ""),
            ("br", "\n"),
            ("html_parser", "bogus"),
            ("removed_elements", "script"),
            ("removed_elements", ["script", 3]),
            ("removed_elements", 3),
        ],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(InvalidOptionsError) as exc_info:
            GovspeakOptions(**{field: value})

        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.parameter_name == field
        assert exc_info.value.parameter_value == value

    def test_field_names(self):
        assert "bullet_list_marker" in GovspeakOptions.field_names()
        assert "removed_elements" in GovspeakOptions.field_names()


@pytest.mark.unit
class TestParserAvailability:
    def test_missing_tree_builder_raises_dependency_error(self, monkeypatch):
        monkeypatch.setattr(converter_module.builder_registry, "lookup", lambda *features: None)

        with pytest.raises(DependencyError) as exc_info:
            HtmlToGovspeakConverter(GovspeakOptions(html_parser="lxml"))

        assert exc_info.value.missing_packages == ["lxml"]
        assert exc_info.value.install_command == "pip install lxml"
        assert "lxml" in str(exc_info.value)

    def test_builtin_parser_is_available(self):
        assert HtmlToGovspeakConverter(GovspeakOptions(html_parser="html.parser")).convert("<p>x</p>") == "x"
