"""Tests for propstore.formats."""

from pathlib import Path

import pytest

from propstore.formats import JsonFormat, PropertiesFormat, resolve_format


class TestPropertiesParse:
    """Tests for PropertiesFormat.parse."""

    def test_skips_comments_and_blank_lines(self):
        text = "# comment\n! also comment\n\n   \nkey=value\n"
        assert PropertiesFormat().parse(text) == {"key": "value"}

    @pytest.mark.parametrize(
        "line",
        ["key=value", "key = value", "key:value", "key : value", "key value", "   key=value"],
    )
    def test_separators(self, line):
        assert PropertiesFormat().parse(line) == {"key": "value"}

    def test_blank_value_and_key_only(self):
        assert PropertiesFormat().parse("empty=\nbare\n") == {"empty": "", "bare": ""}

    def test_value_keeps_trailing_whitespace_and_inner_separators(self):
        assert PropertiesFormat().parse("url=http://host:80/a=b  ") == {"url": "http://host:80/a=b  "}

    def test_line_continuation(self):
        text = "fruits=apple, \\\n        banana, \\\n        pear\nnext=1\n"
        assert PropertiesFormat().parse(text) == {"fruits": "apple, banana, pear", "next": "1"}

    def test_even_backslashes_do_not_continue(self):
        assert PropertiesFormat().parse("path=C:\\\\\nnext=1") == {"path": "C:\\", "next": "1"}

    def test_escapes(self):
        text = "a\\ key=tab\\there\nunicode=\\u00e9t\\u00E9\nemoji=\\uD83D\\uDE00\nplain=\\q\n"
        assert PropertiesFormat().parse(text) == {
            "a key": "tab\there",
            "unicode": "été",
            "emoji": "\U0001F600",
            "plain": "q",
        }

    def test_only_cr_and_lf_break_lines(self):
        text = "greeting=a\fb\nnel=a\x85b\r\nsep=a\u2028b\u2029c\rother=x y\n"
        assert PropertiesFormat().parse(text) == {
            "greeting": "a\fb",
            "nel": "a\x85b",
            "sep": "a\u2028b\u2029c",
            "other": "x y",
        }

    def test_unicode_line_separators_survive_render_and_parse(self):
        entries = {"k": "a\fb\x0bc\x1cd\x85e\u2028f"}
        fmt = PropertiesFormat(timestamp=False)
        assert fmt.parse(fmt.render(entries)) == entries

    def test_duplicate_keys_last_wins(self):
        assert PropertiesFormat().parse("k=1\nk=2\n") == {"k": "2"}

    def test_malformed_unicode_escape_raises(self):
        with pytest.raises(ValueError, match="Malformed"):
            PropertiesFormat().parse("k=\\uZZZZ")


class TestPropertiesRender:
    """Tests for PropertiesFormat.render."""

    def test_comment_timestamp_and_order(self):
        text = PropertiesFormat(timestamp=True).render({"b": "2", "a": "1"}, "first\nsecond")
        lines = text.splitlines()

        assert lines[0] == "#first"
        assert lines[1] == "#second"
        assert lines[2].startswith("#")
        assert lines[3:] == ["b=2", "a=1"]

    def test_no_comment_no_timestamp(self):
        assert PropertiesFormat(timestamp=False).render({"k": "v"}) == "k=v\n"

    def test_timestamp_follows_environment(self, monkeypatch):
        monkeypatch.setenv("PROPSTORE_TIMESTAMP", "off")
        assert PropertiesFormat().render({"k": "v"}, "c") == "#c\nk=v\n"

    def test_escapes_special_characters(self):
        text = PropertiesFormat(timestamp=False).render(
            {"a key:x": " lead=#!", "nl": "line1\nline2", "uni": "é\U0001F600"}
        )
        assert text.splitlines() == [
            "a\\ key\\:x=\\ lead\\=\\#\\!",
            "nl=line1\\nline2",
            "uni=\\u00E9\\uD83D\\uDE00",
        ]

    def test_render_then_parse_preserves_awkward_entries(self):
        entries = {" spaced key ": " value with \\ and = ", "tabs\t": "\ttrailing\t", "empty": ""}
        fmt = PropertiesFormat(timestamp=True)
        assert fmt.parse(fmt.render(entries, "# already a comment")) == entries


class TestJsonFormat:
    """Tests for JsonFormat."""

    def test_parse_normalizes_scalars(self):
        text = '{"s": "x", "i": 3, "f": 1.5, "b": false, "n": null}'
        assert JsonFormat().parse(text) == {"s": "x", "i": "3", "f": "1.5", "b": "false", "n": ""}

    @pytest.mark.parametrize("text", ['{"k": {"nested": 1}}', '{"k": [1]}', "[1, 2]", "{invalid"])
    def test_parse_rejects_non_flat_documents(self, text):
        with pytest.raises(ValueError):
            JsonFormat().parse(text)

    def test_render_drops_comment(self):
        text = JsonFormat().render({"k": "v"}, "comment")
        assert "comment" not in text
        assert JsonFormat().parse(text) == {"k": "v"}


def test_resolve_format_by_suffix():
    assert isinstance(resolve_format(Path("settings.json")), JsonFormat)
    assert isinstance(resolve_format(Path("settings.JSON")), JsonFormat)
    assert isinstance(resolve_format(Path("settings.properties")), PropertiesFormat)
    assert isinstance(resolve_format(Path("settings")), PropertiesFormat)
