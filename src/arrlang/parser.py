"""Recursive-descent parser from arrlang source text to AST nodes."""

from __future__ import annotations

from dataclasses import dataclass

from .ast import (
    ArrayLiteral,
    Assignment,
    DyadicApplication,
    DyadicVerb,
    Expr,
    MapLiteral,
    MonadicApplication,
    MonadicVerb,
    NumericLiteral,
    OperatorApplication,
    OperatorVerb,
    Program,
    StringLiteral,
    VariableRef,
)
from .lexer import LexError, Token, parse_number_text, tokenize
from .values import INT64_MAX, INT64_MIN

_TERM_START = {"NUMBER", "STRING", "NAME", "LPAREN", "LBRACK", "LBRACE"}


class ParseError(SyntaxError):
    def __init__(
        self,
        message: str,
        start: int,
        end: int,
        expected: tuple[str, ...] = (),
        found: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.start = start
        self.end = end
        self.expected = expected
        self.found = found

    def __str__(self) -> str:
        expected_text = ""
        if self.expected:
            expected_text = f"; expected {', '.join(self.expected)}"
        found_text = ""
        if self.found is not None:
            found_text = f"; found {self.found}"
        return f"{self.message} at span [{self.start}, {self.end}){expected_text}{found_text}"


@dataclass
class _Parser:
    tokens: list[Token]
    index: int = 0

    def parse_program(self) -> Program:
        lines: list[Expr] = []
        self._consume_separators()
        while self._peek().kind != "EOF":
            lines.append(self._parse_statement())
            if self._peek().kind != "EOF":
                self._expect("SEP")
            self._consume_separators()
        return Program(lines=tuple(lines))

    def parse_line_only(self) -> Expr:
        self._consume_separators()
        expr = self._parse_statement()
        self._consume_separators()
        self._expect("EOF")
        return expr

    def _peek(self) -> Token:
        return self.tokens[self.index]

    def _peek_next(self) -> Token:
        if self.index + 1 < len(self.tokens):
            return self.tokens[self.index + 1]
        return self.tokens[-1]

    def _advance(self) -> Token:
        tok = self.tokens[self.index]
        self.index += 1
        return tok

    def _expect(self, kind: str) -> Token:
        tok = self._peek()
        if tok.kind != kind:
            self._error(tok, expected=(kind,))
        return self._advance()

    def _error(self, tok: Token | None = None, *, message: str | None = None, expected: tuple[str, ...] = ()) -> None:
        token = tok if tok is not None else self._peek()
        detail = message if message is not None else "Unexpected token"
        if token.kind == "EOF":
            found = "EOF"
        elif token.text:
            found = f"{token.kind}({token.text})"
        else:
            found = token.kind
        raise ParseError(detail, token.pos, token.end, expected=tuple(dict.fromkeys(expected)), found=found)

    def _match(self, kind: str) -> bool:
        if self._peek().kind == kind:
            self._advance()
            return True
        return False

    def _consume_separators(self) -> None:
        while self._peek().kind == "SEP":
            self._advance()

    def _parse_statement(self) -> Expr:
        if self._peek().kind == "NAME" and self._peek_next().kind == "ASSIGN":
            name = self._advance().text
            self._advance()
            return Assignment(name=name, expr=self._parse_expression())
        return self._parse_expression()

    def _parse_expression(self) -> Expr:
        tok = self._peek()

        # Operator application: +/ x
        if tok.kind == "DYADIC_VERB" and self._peek_next().kind == "DYADIC_VERB" and self._peek_next().text == OperatorVerb.REDUCE.value:
            self._advance()
            self._advance()
            rhs = self._parse_expression()
            return OperatorApplication(verb=DyadicVerb(tok.text), operator=OperatorVerb.REDUCE, rhs=rhs)

        if tok.kind == "MONADIC_VERB":
            self._advance()
            rhs = self._parse_expression()
            return MonadicApplication(verb=MonadicVerb(tok.text), rhs=rhs)

        lhs = self._parse_terms()
        if self._peek().kind == "DYADIC_VERB":
            verb = self._advance()
            # Right-associative with uniform precedence.
            rhs = self._parse_expression()
            return DyadicApplication(verb=DyadicVerb(verb.text), lhs=lhs, rhs=rhs)
        return lhs

    def _parse_terms(self) -> Expr:
        first = self._parse_term()
        items = [first]
        while self._peek().kind in _TERM_START:
            items.append(self._parse_term())
        if len(items) == 1:
            return first
        return ArrayLiteral(items=tuple(items))

    def _parse_term(self) -> Expr:
        tok = self._peek()

        if tok.kind == "NUMBER":
            self._advance()
            value = parse_number_text(tok.text)
            if isinstance(value, int) and not INT64_MIN <= value <= INT64_MAX:
                self._error(tok, message="Integer literal does not fit in 64 bits")
            return NumericLiteral(value=value)

        if tok.kind == "STRING":
            self._advance()
            return StringLiteral(value=tok.text)

        if tok.kind == "NAME":
            self._advance()
            return VariableRef(name=tok.text)

        if self._match("LPAREN"):
            expr = self._parse_statement()
            self._expect("RPAREN")
            return expr

        if self._match("LBRACK"):
            return self._parse_array_literal()

        if self._match("LBRACE"):
            return self._parse_map_literal()

        self._error(tok, expected=tuple(sorted(_TERM_START)))
        raise AssertionError("unreachable")

    def _parse_array_literal(self) -> Expr:
        items: list[Expr] = []
        self._consume_separators()
        if self._match("RBRACK"):
            return ArrayLiteral(items=())

        while True:
            items.append(self._parse_expression())
            self._consume_separators()
            if self._match("RBRACK"):
                return ArrayLiteral(items=tuple(items))
            self._expect("COMMA")
            self._consume_separators()

    def _parse_map_literal(self) -> Expr:
        entries: dict[str, Expr] = {}
        self._consume_separators()
        if self._match("RBRACE"):
            return MapLiteral(entries=())

        while True:
            key_tok = self._expect("STRING")
            if key_tok.text in entries:
                self._error(key_tok, message=f"Duplicate map key {key_tok.text!r}")
            self._expect("COLON")
            entries[key_tok.text] = self._parse_expression()
            self._consume_separators()
            if self._match("RBRACE"):
                return MapLiteral.from_dict(entries)
            self._expect("COMMA")
            self._consume_separators()


def _tokenize(source: str) -> list[Token]:
    try:
        return tokenize(source)
    except LexError as err:
        raise ParseError(err.message, err.pos, err.end) from err


def parse(source: str) -> Expr:
    """Parse a single line (statement) of source text."""
    parser = _Parser(tokens=_tokenize(source))
    return parser.parse_line_only()


def parse_program(source: str) -> Program:
    parser = _Parser(tokens=_tokenize(source))
    return parser.parse_program()
