"""
Content Decoder Module
Reverses the Content-Transfer-Encoding of a leaf body

Decoding is never performed while parsing. Callers ask for it on demand
through ``MimeBody``/``Mime``; every call recomputes from the raw text.

SECURITY STORY: Decoding is strict. A malformed quoted-printable escape, a
bad base64 alphabet or padding, or a charset that does not fit the bytes is
reported as an error instead of being papered over with replacement
characters, so an application never displays silently corrupted content.
"""

import base64
import binascii
import logging
import re
from typing import Optional

from .errors import DecodingFailed, InvalidCharset, UnsupportedEncoding
from .transfer_encoding import ContentTransferEncoding, OtherEncoding, TransferEncoding
from ..utils.charsets import DEFAULT_CHARSET, decode_bytes
from ..utils.sanitization import sanitize_for_logging

logger = logging.getLogger(__name__)

LINE_BREAK_PATTERN = re.compile(r"\r?\n")
# "=" right before a line break (or the end of input) is a soft line break
SOFT_LINE_BREAK_PATTERN = re.compile(r"=[ \t]*(?:\r?\n|\Z)")
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

_IDENTITY_ENCODINGS = (
    TransferEncoding.SEVEN_BIT,
    TransferEncoding.EIGHT_BIT,
    TransferEncoding.BINARY,
)


def decode_identity(raw: str) -> bytes:
    """7bit, 8bit and binary bodies: reinterpret the text as single bytes."""
    try:
        return raw.encode("ascii")
    except UnicodeEncodeError as e:
        raise DecodingFailed(
            f"Character {raw[e.start]!r} at offset {e.start} is outside the ASCII range"
        ) from e


def _literal_bytes(text: str, offset: int) -> bytes:
    # One character per octet, the same model as a Latin-1 read of the file
    try:
        return text.encode("latin-1")
    except UnicodeEncodeError as e:
        raise DecodingFailed(
            f"Character {text[e.start]!r} at offset {offset + e.start} is not a single octet"
        ) from e


def decode_quoted_printable(raw: str) -> bytes:
    """
    Decode quoted-printable text (RFC 2045 section 6.7).

    Soft line breaks are removed, ``=XX`` escapes become the byte XX and
    everything else passes through literally as one octet per character
    (characters above U+00FF are rejected).

    Example:
        >>> decode_quoted_printable("Hi=20there=0D=0A")
        b'Hi there\\r\\n'
    """
    text = SOFT_LINE_BREAK_PATTERN.sub("", raw)
    decoded = bytearray()
    position = 0

    while True:
        index = text.find("=", position)
        if index == -1:
            decoded += _literal_bytes(text[position:], position)
            return bytes(decoded)

        decoded += _literal_bytes(text[position:index], position)
        digits = text[index + 1:index + 3]
        if len(digits) != 2 or not HEX_DIGITS.issuperset(digits):
            raise DecodingFailed(
                f"Malformed quoted-printable escape {text[index:index + 3]!r} at offset {index}"
            )
        decoded.append(int(digits, 16))
        position = index + 3


def decode_base64(raw: str) -> bytes:
    """Decode base64 text after removing all line breaks."""
    concatenated = LINE_BREAK_PATTERN.sub("", raw)
    try:
        return base64.b64decode(concatenated, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodingFailed(f"Invalid base64 content: {e}") from e


def decode(raw: str, encoding: ContentTransferEncoding) -> bytes:
    """
    Turn a leaf body's raw text back into bytes.

    Raises:
        DecodingFailed: If the text is not valid for its encoding
        UnsupportedEncoding: For mechanisms other than the RFC 2045 ones
    """
    if encoding in _IDENTITY_ENCODINGS:
        return decode_identity(raw)
    if encoding is TransferEncoding.QUOTED_PRINTABLE:
        return decode_quoted_printable(raw)
    if encoding is TransferEncoding.BASE64:
        return decode_base64(raw)
    if isinstance(encoding, OtherEncoding):
        raise UnsupportedEncoding(
            f"Unsupported Content-Transfer-Encoding: {sanitize_for_logging(encoding.value)}"
        )
    raise TypeError(f"Not a ContentTransferEncoding: {encoding!r}")


def decode_text(
    raw: str,
    encoding: ContentTransferEncoding,
    charset: Optional[str] = None
) -> str:
    """
    Decode a leaf body to text using an IANA charset (UTF-8 when omitted).

    A declared but empty charset is an error, not a request for the default.

    Raises:
        InvalidCharset: If the charset is unknown or the bytes do not fit it
        DecodingFailed, UnsupportedEncoding: As for ``decode``
    """
    data = decode(raw, encoding)
    charset_name = DEFAULT_CHARSET if charset is None else charset
    try:
        return decode_bytes(data, charset_name)
    except LookupError as e:
        raise InvalidCharset(f"Unknown charset {sanitize_for_logging(charset_name)!r}") from e
    except UnicodeDecodeError as e:
        logger.debug(
            "Body bytes are not valid %s at offset %d",
            sanitize_for_logging(charset_name), e.start
        )
        raise InvalidCharset(
            f"Content is not valid {sanitize_for_logging(charset_name)} text"
        ) from e
