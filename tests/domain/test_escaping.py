"""Tests for Rust and TOML string escaping."""

from __future__ import annotations

import tomllib

import pytest

from routergen.domain.escaping import escape_rust, toml_string


class TestEscapeRust:
    @pytest.mark.parametrize(
        ("raw", "escaped"),
        [
            ("plain", "plain"),
            ('say "hi"', 'say \\"hi\\"'),
            ("it's", "it\\'s"),
            ("back\\slash", "back\\\\slash"),
            ("tab\there", "tab\\there"),
            ("line\nbreak\r", "line\\nbreak\\r"),
            ("\x00", "\\u{0}"),
            ("\x7f", "\\u{7f}"),
            ("é", "\\u{e9}"),
            ("🦀", "\\u{1f980}"),
        ],
    )
    def test_escape_default_rules(self, raw: str, escaped: str) -> None:
        assert escape_rust(raw) == escaped

    def test_output_is_printable_ascii(self) -> None:
        out = escape_rust("ns\u2028\"\n\x1b")
        assert all(0x20 <= ord(c) <= 0x7E for c in out)


class TestTomlString:
    @pytest.mark.parametrize(
        "raw",
        ["plain", 'quote "inside"', "back\\slash", "new\nline", "\x00\x1f\x7f", "ünïcode", "C:\\crates\\a"],
    )
    def test_parses_back(self, raw: str) -> None:
        doc = f"value = {toml_string(raw)}\n"
        assert tomllib.loads(doc)["value"] == raw

    def test_quoted(self) -> None:
        assert toml_string("a") == '"a"'
