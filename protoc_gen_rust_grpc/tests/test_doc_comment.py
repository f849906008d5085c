"""Tests for the proto comment to rustdoc translation."""

from __future__ import annotations

import pytest

from protoc_gen_rust_grpc.parser.doc_comment import (
    sanitize_for_rustdoc,
    to_doc_comment,
)


# ─── sanitize_for_rustdoc ───────────────────────────────────────────────────

class TestSanitizeForRustdoc:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("a_b", "a\\_b"),
            ("`code`", "\\`code\\`"),
            ("*bold*", "\\*bold\\*"),
            ("[link](x)", "\\[link\\](x)"),
            ("# heading", "\\# heading"),
            ("Vec<u8>", "Vec\\<u8\\>"),
        ],
    )
    def test_special_characters_escaped(self, raw, expected):
        assert sanitize_for_rustdoc(raw) == expected

    def test_backslash_escaped(self):
        assert sanitize_for_rustdoc("C:\\dir") == "C:\\\\dir"

    def test_backslash_escaped_before_other_characters(self):
        # \_ becomes \\ followed by \_, not \\\\_
        assert sanitize_for_rustdoc("\\_") == "\\\\\\_"

    def test_plain_text_untouched(self):
        assert sanitize_for_rustdoc("Gets a feature.") == "Gets a feature."

    def test_idempotent_on_plain_text(self):
        text = "Obtains the feature at a given position (lat, lng)."
        assert sanitize_for_rustdoc(sanitize_for_rustdoc(text)) == text


# ─── to_doc_comment ─────────────────────────────────────────────────────────

class TestToDocComment:
    def test_single_line(self):
        assert to_doc_comment("Gets a feature.") == "/// Gets a feature.\n"

    def test_blank_lines_preserved(self):
        assert to_doc_comment("a\n\nb") == "/// a\n///\n/// b\n"

    def test_empty_input_emits_nothing(self):
        assert to_doc_comment("") == ""

    def test_only_escape_character(self):
        assert to_doc_comment("\\") == "/// \\\\\n"

    def test_trailing_newline_does_not_add_line(self):
        # protoc hands comments over with a terminating newline
        assert to_doc_comment(" Gets a feature.\n") == "///  Gets a feature.\n"

    def test_only_one_trailing_newline_dropped(self):
        assert to_doc_comment("a\n\n") == "/// a\n///\n"

    def test_lone_newline_is_one_blank_line(self):
        assert to_doc_comment("\n") == "///\n"

    def test_crlf_line_breaks(self):
        assert to_doc_comment("a\r\nb") == "/// a\n/// b\n"

    @pytest.mark.parametrize("separator", ["\x0b", "\x0c", "\x1c", "\x1e", "\x85", "\u2028", "\u2029"])
    def test_splits_on_newline_only(self, separator):
        assert to_doc_comment(f"a{separator}b") == f"/// a{separator}b\n"

    def test_each_line_escaped(self):
        assert to_doc_comment("snake_case\n<T>") == "/// snake\\_case\n/// \\<T\\>\n"

    def test_indent_prefixes_every_line(self):
        assert to_doc_comment("a\n\nb", indent="    ") == "    /// a\n    ///\n    /// b\n"
