"""Go string literal serializer.

Embeds arbitrary text as a Go raw string literal. Raw strings cannot hold a
backtick, and the Go compiler drops carriage returns from them and rejects
NUL and byte order marks, so each such character is split out into an
interpreted string segment joined with ``+``::

    go_raw_literal("a`b")  ->  `a`+"`"+`b`

:func:`eval_go_literal` evaluates such an expression back into text and is
used to verify rendered fragments.
"""

from __future__ import annotations

import re

from devtmpl.exceptions import CompileError

__all__ = [
    "eval_go_literal",
    "go_raw_literal",
    "go_string_literal",
]

RAW_DELIMITER = "`"

# Characters a Go raw string literal cannot carry verbatim
_UNSAFE_RAW_RE = re.compile("[`\r\x00\ufeff]")

_SIMPLE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_DECODE_ESCAPES = {
    "a": b"\a",
    "b": b"\b",
    "f": b"\f",
    "n": b"\n",
    "r": b"\r",
    "t": b"\t",
    "v": b"\v",
    "\\": b"\\",
    '"': b'"',
}

_SEGMENT_RE = re.compile(r'\s*(?:`(?P<raw>[^`]*)`|"(?P<str>(?:[^"\\\n]|\\.)*)")\s*', re.DOTALL)
_ESCAPE_RE = re.compile(
    r"\\(?:x(?P<hex>[0-9A-Fa-f]{2})|u(?P<u4>[0-9A-Fa-f]{4})"
    r"|U(?P<u8>[0-9A-Fa-f]{8})|(?P<oct>[0-7]{3})|(?P<simple>.))",
    re.DOTALL,
)


def go_string_literal(text: str) -> str:
    """Quote ``text`` as a Go interpreted string literal."""
    out = ['"']
    for ch in text:
        if ch in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[ch])
        elif ch < " " or ch in "\x7f\ufeff":
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def go_raw_literal(text: str) -> str:
    """Embed ``text`` as a raw string literal, splitting around unsafe characters."""
    parts: list[str] = []
    pos = 0
    for match in _UNSAFE_RAW_RE.finditer(text):
        parts.append(RAW_DELIMITER + text[pos : match.start()] + RAW_DELIMITER)
        parts.append(go_string_literal(match.group()))
        pos = match.end()
    parts.append(RAW_DELIMITER + text[pos:] + RAW_DELIMITER)
    return "+".join(parts)


def _decode_interpreted(body: str) -> bytes:
    out = bytearray()
    pos = 0
    for match in _ESCAPE_RE.finditer(body):
        out += body[pos : match.start()].encode("utf-8")
        if match.group("hex"):
            out.append(int(match.group("hex"), 16))
        elif match.group("oct"):
            value = int(match.group("oct"), 8)
            if value > 0xFF:
                raise CompileError(f"Octal escape out of range: \\{match.group('oct')}")
            out.append(value)
        elif match.group("u4") or match.group("u8"):
            out += chr(int(match.group("u4") or match.group("u8"), 16)).encode("utf-8")
        else:
            simple = match.group("simple")
            if simple not in _DECODE_ESCAPES:
                raise CompileError(f"Unknown escape sequence: \\{simple}")
            out += _DECODE_ESCAPES[simple]
        pos = match.end()
    out += body[pos:].encode("utf-8")
    return bytes(out)


def eval_go_literal(source: str) -> str:
    """Evaluate a ``+``-joined sequence of Go string literals.

    Follows the Go rules that matter for round-tripping: raw segments are
    taken verbatim minus carriage returns, interpreted segments have their
    escapes decoded (``\\x`` and octal escapes are bytes).

    Raises:
        CompileError: If ``source`` is not a concatenation of string literals.
    """
    value = bytearray()
    pos = 0
    expect_segment = True
    while pos < len(source) or expect_segment:
        if expect_segment:
            match = _SEGMENT_RE.match(source, pos)
            if match is None:
                snippet = source[pos : pos + 20]
                raise CompileError(f"Expected a string literal at offset {pos}: {snippet!r}")
            if match.group("raw") is not None:
                value += match.group("raw").replace("\r", "").encode("utf-8")
            else:
                value += _decode_interpreted(match.group("str"))
            pos = match.end()
            expect_segment = False
        elif source[pos] == "+":
            pos += 1
            expect_segment = True
        else:
            raise CompileError(f"Unexpected {source[pos]!r} at offset {pos} in string expression")

    try:
        return value.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CompileError(f"String expression is not valid UTF-8: {e}") from e
