"""
Header Field Lexer Module
Turns a header field body into tokens and walks them for the field parsers

Token kinds:
- QuotedString: text that was enclosed in double quotes (quotes removed)
- Atom: an unquoted run of non-special, non-space, non-control characters
- Special: one character of the header field special alphabet
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, TypeVar, Union

from .errors import (
    InvalidAtom,
    InvalidQuotedString,
    InvalidSpecialToken,
    InvalidToken,
    NoMoreTokens,
    ScanError,
    TokenError,
)
from .scanner import INVALID_QTEXT_CHARS, HeaderFieldSpecial, Scanner

T = TypeVar("T")


@dataclass(frozen=True)
class QuotedString:
    value: str


@dataclass(frozen=True)
class Atom:
    value: str


@dataclass(frozen=True)
class Special:
    value: HeaderFieldSpecial


Token = Union[QuotedString, Atom, Special]


class HeaderFieldLexer:
    """
    Splits a header field body into an ordered list of tokens.

    Each token is found by ordered alternation: quoted string, else atom,
    else a lone special. When none of them matches, lexing stops; that is
    the termination condition, not an error.
    """

    def scan(self, string: str) -> List[Token]:
        scanner = Scanner(string, HeaderFieldSpecial)
        tokens: List[Token] = []
        while True:
            token = self._next_token(scanner)
            if token is None:
                return tokens
            tokens.append(token)

    @staticmethod
    def _next_token(scanner: Scanner) -> Optional[Token]:
        scanner.trim_whitespace()

        try:
            return QuotedString(scanner.scan_quoted(
                HeaderFieldSpecial.QUOTATION_MARK,
                HeaderFieldSpecial.BACKSLASH,
                INVALID_QTEXT_CHARS,
            ))
        except ScanError:
            pass

        try:
            return Atom(scanner.scan_atom())
        except ScanError:
            pass

        try:
            return Special(scanner.scan_special())
        except ScanError:
            pass

        return None


def tokenize(string: str) -> List[Token]:
    """Lex a header field body into tokens."""
    return HeaderFieldLexer().scan(string)


class HeaderFieldTokenProcessor:
    """
    Cursor over a token sequence with "expect the next token is X" primitives.

    Each ``expect_*`` method advances by one token on success. On mismatch it
    raises a token-kind specific error and leaves the cursor untouched, so a
    recursive-descent caller can try a different production.
    """

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)
        self._cursor = 0

    @classmethod
    def from_string(cls, string: str) -> "HeaderFieldTokenProcessor":
        return cls(tokenize(string))

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def is_at_end(self) -> bool:
        return self._cursor == len(self.tokens)

    def _with_next_token(self, probe: Callable[[Token], T]) -> T:
        if self._cursor >= len(self.tokens):
            raise NoMoreTokens("No more tokens in header field")
        value = probe(self.tokens[self._cursor])
        self._cursor += 1
        return value

    def expect_quoted_string(self) -> str:
        def probe(token: Token) -> str:
            if not isinstance(token, QuotedString):
                raise InvalidQuotedString(f"Expected a quoted string, got {token!r}")
            return token.value

        return self._with_next_token(probe)

    def expect_token(self) -> str:
        def probe(token: Token) -> str:
            if not isinstance(token, Atom):
                raise InvalidToken(f"Expected a token, got {token!r}")
            return token.value

        return self._with_next_token(probe)

    def expect_special(self, special: HeaderFieldSpecial) -> None:
        def probe(token: Token) -> None:
            if not isinstance(token, Special) or token.value is not special:
                raise InvalidSpecialToken(f"Expected {special.value!r}, got {token!r}")

        self._with_next_token(probe)

    def expect_word(self) -> str:
        """Accept a quoted string, else an atom (RFC 822 ``word``)."""
        try:
            return self.expect_quoted_string()
        except TokenError:
            pass

        try:
            return self.expect_token()
        except TokenError:
            pass

        if self.is_at_end:
            raise NoMoreTokens("Expected a word, no more tokens")
        raise InvalidAtom(f"Expected an atom or quoted string, got {self.tokens[self._cursor]!r}")
