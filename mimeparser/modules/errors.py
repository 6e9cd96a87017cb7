"""
MIME Parser Errors
Exception hierarchy shared by every stage of the parsing pipeline

PATTERN RECOGNITION: Errors are grouped by the stage that raises them. Scan
and token errors are "this production did not match" signals: the grammar
catches them and tries the next alternative. Only when no alternative is
left do they reach the caller, usually re-raised as a structural error that
names the offending header field.
"""


class MimeParserError(Exception):
    """Base exception for everything raised by mimeparser."""

    pass


# ---------------------------------------------------------------------------
# Scan level
# ---------------------------------------------------------------------------

class ScanError(MimeParserError):
    """A scanner production did not match at the current position."""

    pass


class EndOfInput(ScanError):
    """The scanner reached the end of its input."""

    pass


class InvalidCharacter(ScanError):
    """The current character is excluded from the requested text run."""

    pass


class InvalidSpecial(ScanError):
    """The current character is not part of the special alphabet."""

    pass


class InvalidText(ScanError):
    """Enclosed text was not delimited by the expected specials."""

    pass


# ---------------------------------------------------------------------------
# Token level
# ---------------------------------------------------------------------------

class TokenError(MimeParserError):
    """The next token is not the one the grammar expects."""

    pass


class NoMoreTokens(TokenError):
    pass


class InvalidSpecialToken(TokenError):
    pass


class InvalidQuotedString(TokenError):
    pass


class InvalidToken(TokenError):
    pass


class InvalidAtom(TokenError):
    """The next token is neither an atom nor a quoted string."""

    pass


# ---------------------------------------------------------------------------
# Structural
# ---------------------------------------------------------------------------

class InvalidFieldStructure(MimeParserError):
    """A header block or header field body is not well formed."""

    pass


class InvalidParameterValue(InvalidFieldStructure):
    pass


class TrailingSemicolon(InvalidFieldStructure):
    """A parameter list ends with a ``;`` that introduces nothing."""

    pass


class MalformedHeaderField(InvalidFieldStructure):
    """A well-known header field is present but cannot be parsed."""

    def __init__(self, field_name: str, body: str, reason: str = ""):
        self.field_name = field_name
        self.body = body
        message = f"Malformed {field_name} header"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------

class MimeLimitExceeded(MimeParserError):
    """The message structure exceeds a configured parser limit."""

    pass


class NestingTooDeep(MimeLimitExceeded):
    pass


class TooManyParts(MimeLimitExceeded):
    pass


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

class MimeDecodeError(MimeParserError):
    """A leaf body could not be turned back into bytes or text."""

    pass


class DecodingFailed(MimeDecodeError):
    pass


class UnsupportedEncoding(MimeDecodeError):
    pass


class InvalidCharset(MimeDecodeError):
    pass
