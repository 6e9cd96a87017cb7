"""
Content-Transfer-Encoding values

A transfer encoding is either one of the five mechanisms RFC 2045 defines or
an ``OtherEncoding`` that keeps the unrecognised value verbatim. Mechanism
names are matched case-insensitively (RFC 2045 section 6.1) but are never
validated against a closed set.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class TransferEncoding(str, Enum):
    SEVEN_BIT = "7bit"
    EIGHT_BIT = "8bit"
    BINARY = "binary"
    QUOTED_PRINTABLE = "quoted-printable"
    BASE64 = "base64"


@dataclass(frozen=True)
class OtherEncoding:
    """An unrecognised mechanism, original casing preserved."""

    value: str


ContentTransferEncoding = Union[TransferEncoding, OtherEncoding]


_ENCODINGS_BY_NAME = {member.value: member for member in TransferEncoding}


def parse_transfer_encoding(value: str) -> ContentTransferEncoding:
    """
    Map a mechanism name onto a ``ContentTransferEncoding``.

    Example:
        >>> parse_transfer_encoding("Base64")
        <TransferEncoding.BASE64: 'base64'>
        >>> parse_transfer_encoding("x-Proprietary")
        OtherEncoding(value='x-Proprietary')
    """
    return _ENCODINGS_BY_NAME.get(value.lower(), OtherEncoding(value))
