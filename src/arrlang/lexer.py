"""Tokenization for arrlang source text."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int
    end: int


class LexError(SyntaxError):
    def __init__(self, message: str, pos: int, end: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.pos = pos
        self.end = pos + 1 if end is None else end


_SINGLE_TOKENS = {
    "(": "LPAREN",
    ")": "RPAREN",
    "[": "LBRACK",
    "]": "RBRACK",
    "{": "LBRACE",
    "}": "RBRACE",
    ",": "COMMA",
    ":": "COLON",
}

_VERB_ALIASES = {
    "*": "×",
}

_WORD_MONADIC = {
    "print": "print",
    "iota": "⍳",
    "shape": "⍴",
}

_DYADIC_GLYPHS = set("+-×÷/>=.")
_MONADIC_GLYPHS = set("⍳⍴")
_ASSIGN_TOKENS = {"←": "←", "<-": "←"}
_SEPARATORS = {"\n", "\r", "⋄"}

_NUMBER_RE = re.compile(
    r"""
    (?P<sign>¯?)
    (?P<int>[0-9]+)
    (?P<frac>\.[0-9]+)?
    (?P<exp>[eE][¯-]?[0-9]+)?
    """,
    re.VERBOSE,
)


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or ch.isalpha()


def _is_ident_continue(ch: str) -> bool:
    return ch == "_" or ch.isalnum()


def parse_number_text(text: str) -> int | float:
    """Convert a NUMBER token to int (no fraction/exponent) or float."""
    m = _NUMBER_RE.fullmatch(text)
    if m is None:
        raise ValueError(f"Invalid numeric literal {text!r}")
    negative = m.group("sign") == "¯"
    if m.group("frac") is None and m.group("exp") is None:
        value = int(m.group("int"))
        return -value if negative else value
    body = m.group("int") + (m.group("frac") or "") + (m.group("exp") or "").replace("¯", "-")
    value = float(body)
    return -value if negative else value


def _scan_number(source: str, start: int) -> int:
    m = _NUMBER_RE.match(source, start)
    if m is None or m.end() == start or not m.group("int"):
        raise LexError(f"Invalid numeric literal at index {start}", start)
    return m.end()


def _scan_string(source: str, start: int) -> tuple[str, int]:
    quote = source[start]
    i = start + 1
    out: list[str] = []
    while i < len(source):
        ch = source[i]
        if ch == quote:
            if i + 1 < len(source) and source[i + 1] == quote:
                out.append(quote)
                i += 2
                continue
            return "".join(out), i + 1
        if ch in {"\n", "\r"}:
            break
        out.append(ch)
        i += 1
    raise LexError(f"Unterminated string literal at index {start}", start, i)


def tokenize(source: str) -> list[Token]:
    tokens: list[Token] = []
    i = 0

    while i < len(source):
        ch = source[i]

        if ch in {" ", "\t", "\f", "\v"}:
            i += 1
            continue

        if ch == "#":
            while i < len(source) and source[i] not in {"\n", "\r"}:
                i += 1
            continue

        if ch in _SEPARATORS:
            start = i
            while i < len(source) and source[i] in _SEPARATORS:
                i += 1
            tokens.append(Token("SEP", "⋄", start, i))
            continue

        if source.startswith("<-", i):
            tokens.append(Token("ASSIGN", _ASSIGN_TOKENS["<-"], i, i + 2))
            i += 2
            continue

        if ch in _ASSIGN_TOKENS:
            tokens.append(Token("ASSIGN", _ASSIGN_TOKENS[ch], i, i + 1))
            i += 1
            continue

        if ch in _SINGLE_TOKENS:
            tokens.append(Token(_SINGLE_TOKENS[ch], ch, i, i + 1))
            i += 1
            continue

        if ch in {"'", '"'}:
            value, end = _scan_string(source, i)
            tokens.append(Token("STRING", value, i, end))
            i = end
            continue

        if ch.isdigit() or (ch == "¯" and i + 1 < len(source) and source[i + 1].isdigit()):
            end = _scan_number(source, i)
            tokens.append(Token("NUMBER", source[i:end], i, end))
            i = end
            continue

        if ch in _DYADIC_GLYPHS:
            tokens.append(Token("DYADIC_VERB", ch, i, i + 1))
            i += 1
            continue

        if ch in _VERB_ALIASES:
            tokens.append(Token("DYADIC_VERB", _VERB_ALIASES[ch], i, i + 1))
            i += 1
            continue

        if ch in _MONADIC_GLYPHS:
            tokens.append(Token("MONADIC_VERB", ch, i, i + 1))
            i += 1
            continue

        if _is_ident_start(ch):
            start = i
            i += 1
            while i < len(source) and _is_ident_continue(source[i]):
                i += 1
            ident = source[start:i]
            if ident in _WORD_MONADIC:
                tokens.append(Token("MONADIC_VERB", _WORD_MONADIC[ident], start, i))
            else:
                tokens.append(Token("NAME", ident, start, i))
            continue

        raise LexError(f"Unexpected character {ch!r} at index {i}", i)

    tokens.append(Token("EOF", "", len(source), len(source)))
    return tokens
