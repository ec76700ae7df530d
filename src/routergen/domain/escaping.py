"""String escaping for text embedded in generated Rust and TOML.

Both functions are total: any Python string maps to a literal that the
target language parses back to the same characters.
"""

from __future__ import annotations

_RUST_SIMPLE_ESCAPES: dict[str, str] = {
    "\t": "\\t",
    "\r": "\\r",
    "\n": "\\n",
    "'": "\\'",
    '"': '\\"',
    "\\": "\\\\",
}

_TOML_SIMPLE_ESCAPES: dict[str, str] = {
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
    '"': '\\"',
    "\\": "\\\\",
}


def escape_rust(text: str) -> str:
    """Escape *text* for a Rust string literal body.

    Mirrors ``char::escape_default``: the six simple escapes, printable
    ASCII verbatim, everything else as ``\\u{hex}``.

    Examples:
        >>> escape_rust('say "hi"')
        'say \\\\"hi\\\\"'
        >>> escape_rust("é")
        '\\\\u{e9}'
    """
    out: list[str] = []
    for ch in text:
        simple = _RUST_SIMPLE_ESCAPES.get(ch)
        if simple is not None:
            out.append(simple)
        elif 0x20 <= ord(ch) <= 0x7E:
            out.append(ch)
        else:
            out.append(f"\\u{{{ord(ch):x}}}")
    return "".join(out)


def toml_string(text: str) -> str:
    """Return *text* as a quoted TOML basic string."""
    out: list[str] = ['"']
    for ch in text:
        simple = _TOML_SIMPLE_ESCAPES.get(ch)
        if simple is not None:
            out.append(simple)
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)
