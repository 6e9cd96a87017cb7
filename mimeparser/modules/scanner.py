"""
Scanner Module
Position-tracking cursor over a string with backtracking support

PATTERN RECOGNITION: Every scanning operation is transactional. When a
production fails the cursor is left exactly where it was, so a caller can
try the next alternative of an ordered grammar ("quoted string, else atom,
else special") without saving and restoring state by hand.

The scanner knows nothing about MIME. It is parameterised by a special
character alphabet, an Enum whose values are single characters, because
RFC 822 structural parsing and header field value parsing disagree on which
characters are special.
"""

from enum import Enum
from typing import Callable, FrozenSet, Iterable, Optional, Type, TypeVar

from .errors import EndOfInput, InvalidCharacter, InvalidSpecial, InvalidText, ScanError

T = TypeVar("T")

CONTROL_CHARACTERS: FrozenSet[str] = frozenset(chr(code) for code in range(32))

# Characters that may not appear unescaped inside the respective RFC 822
# constructs: quoted-string, domain-literal and comment.
INVALID_QTEXT_CHARS: FrozenSet[str] = frozenset('"\\')
INVALID_DTEXT_CHARS: FrozenSet[str] = frozenset("[]\\")
INVALID_CTEXT_CHARS: FrozenSet[str] = frozenset("()\\")


class HeaderFieldSpecial(str, Enum):
    """Special characters of a MIME header field body (RFC 2045 tspecials)."""

    LEFT_PARENTHESIS = "("
    RIGHT_PARENTHESIS = ")"
    LEFT_ANGLE_BRACKET = "<"
    RIGHT_ANGLE_BRACKET = ">"
    AT_SIGN = "@"
    COMMA = ","
    SEMICOLON = ";"
    COLON = ":"
    BACKSLASH = "\\"
    QUOTATION_MARK = '"'
    SLASH = "/"
    LEFT_SQUARE_BRACKET = "["
    RIGHT_SQUARE_BRACKET = "]"
    QUESTION_MARK = "?"
    EQUALITY_SIGN = "="


class RFC822Special(str, Enum):
    """Special characters of RFC 822 structured fields."""

    PERIOD = "."
    COMMA = ","
    COLON = ":"
    SEMICOLON = ";"
    LEFT_PARENTHESIS = "("
    RIGHT_PARENTHESIS = ")"
    LEFT_ANGLE_BRACKET = "<"
    RIGHT_ANGLE_BRACKET = ">"
    LEFT_SQUARE_BRACKET = "["
    RIGHT_SQUARE_BRACKET = "]"
    AT_SIGN = "@"
    BACKSLASH = "\\"
    QUOTATION_MARK = '"'


def special_characters(specials: Type[Enum]) -> FrozenSet[str]:
    """Return the raw characters of a special alphabet."""
    return frozenset(member.value for member in specials)


def atom_excluded_characters(specials: Type[Enum]) -> FrozenSet[str]:
    """Characters that terminate an unquoted atom for the given alphabet."""
    return frozenset(" ") | CONTROL_CHARACTERS | special_characters(specials)


class Scanner:
    """
    Cursor over ``string[start:end]`` with rollback-on-failure semantics.

    Args:
        string: Text to scan
        specials: Enum of single-character special values
        start: Index to start scanning at (default: beginning of string)
        end: Index to stop scanning at (default: end of string)
    """

    WHITESPACE = " "

    def __init__(
        self,
        string: str,
        specials: Type[Enum],
        start: int = 0,
        end: Optional[int] = None
    ):
        self.string = string
        self.specials = specials
        self.start = start
        self.end = len(string) if end is None else end
        self._position = start
        self._specials_by_char = {member.value: member for member in specials}
        self._invalid_atom_chars = atom_excluded_characters(specials)

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_at_end(self) -> bool:
        return self._position >= self.end

    def attempt(self, production: Callable[..., T], *args) -> T:
        """
        Run a fallible production, restoring the cursor if it raises.

        TEACHING MOMENT: This is the only place that saves and restores the
        cursor. Composite productions route through it, so a failure deep
        inside one never leaves the scanner half-advanced.
        """
        saved = self._position
        try:
            return production(*args)
        except ScanError:
            self._position = saved
            raise

    def trim_whitespace(self) -> None:
        """Skip consecutive space characters (not tabs or line breaks)."""
        while not self.is_at_end and self.string[self._position] == self.WHITESPACE:
            self._position += 1

    def scan_special(self) -> Enum:
        """Consume one special character and return its alphabet member."""
        if self.is_at_end:
            raise EndOfInput("Expected a special character, reached end of input")

        char = self.string[self._position]
        special = self._specials_by_char.get(char)
        if special is None:
            raise InvalidSpecial(f"{char!r} is not a special character")

        self._position += 1
        return special

    def scan_text(self, excluded: Iterable[str]) -> str:
        """
        Greedily consume characters not in ``excluded``.

        At least one character must be consumed; a partial run up to an
        excluded character or the end of input is a success.
        """
        excluded = excluded if isinstance(excluded, (set, frozenset)) else frozenset(excluded)
        begin = self._position
        position = begin
        while position < self.end and self.string[position] not in excluded:
            position += 1

        if position == begin:
            if self.is_at_end:
                raise EndOfInput("Expected text, reached end of input")
            raise InvalidCharacter(f"{self.string[begin]!r} cannot start this text")

        self._position = position
        return self.string[begin:position]

    def scan_enclosed(self, left: Enum, right: Enum, excluded: Iterable[str]) -> str:
        """Scan ``left text right`` and return the text between the specials."""
        return self.attempt(self._scan_enclosed, left, right, excluded)

    def _scan_enclosed(self, left: Enum, right: Enum, excluded: Iterable[str]) -> str:
        if self.scan_special() is not left:
            raise InvalidText(f"Expected {left.value!r}")

        text = self.scan_text(excluded)

        if self.scan_special() is not right:
            raise InvalidText(f"Expected {right.value!r}")

        return text

    def scan_quoted(self, quote: Enum, escape: Enum, excluded: Iterable[str]) -> str:
        """
        Scan a quoted string, resolving quoted-pairs (``escape`` + any char).

        Unlike ``scan_enclosed`` the content may be empty. The returned text
        has the quotes removed and each quoted-pair replaced by its character.
        """
        stops = frozenset(excluded) | {quote.value, escape.value}
        return self.attempt(self._scan_quoted, quote, escape, stops)

    def _scan_quoted(self, quote: Enum, escape: Enum, excluded: FrozenSet[str]) -> str:
        if self.scan_special() is not quote:
            raise InvalidText(f"Expected {quote.value!r}")

        chunks = []
        while True:
            if self.is_at_end:
                raise EndOfInput("Unterminated quoted string")

            char = self.string[self._position]
            if char == quote.value:
                self._position += 1
                return "".join(chunks)

            if char == escape.value:
                if self._position + 1 >= self.end:
                    raise EndOfInput("Dangling escape at end of quoted string")
                chunks.append(self.string[self._position + 1])
                self._position += 2
                continue

            chunks.append(self.scan_text(excluded))

    def scan_atom(self) -> str:
        """Scan a run of characters that are neither space, control nor special."""
        return self.scan_text(self._invalid_atom_chars)
