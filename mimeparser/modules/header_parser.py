"""
Header Parser Module
Assembles a MimeHeader from the partitioned header fields

At most one of each well-known field is consumed: the first one whose name
matches case-insensitively. A present but malformed well-known field is a
hard error, never silently dropped. Every other field, including repeated
well-known ones, stays in ``MimeHeader.other`` in original order.
"""

from typing import Callable, List, Optional, Sequence, TypeVar

from .field_parsers import (
    CONTENT_DISPOSITION,
    CONTENT_TRANSFER_ENCODING,
    CONTENT_TYPE,
    parse_content_disposition,
    parse_content_transfer_encoding,
    parse_content_type,
)
from .mime_data import HeaderField, MimeHeader
from .rfc822 import split_header_fields

T = TypeVar("T")


class HeaderParser:
    """Maps the well-known field parsers over a list of header fields."""

    @staticmethod
    def _pop_field(
        fields: List[HeaderField],
        name: str,
        parser: Callable[[str], T]
    ) -> Optional[T]:
        key = name.lower()
        for index, header_field in enumerate(fields):
            if header_field.key == key:
                del fields[index]
                return parser(header_field.body)
        return None

    @classmethod
    def assemble(cls, fields: Sequence[HeaderField]) -> MimeHeader:
        remaining = list(fields)

        content_transfer_encoding = cls._pop_field(
            remaining, CONTENT_TRANSFER_ENCODING, parse_content_transfer_encoding
        )
        content_type = cls._pop_field(remaining, CONTENT_TYPE, parse_content_type)
        content_disposition = cls._pop_field(
            remaining, CONTENT_DISPOSITION, parse_content_disposition
        )

        return MimeHeader(
            content_transfer_encoding=content_transfer_encoding,
            content_type=content_type,
            content_disposition=content_disposition,
            other=tuple(remaining),
        )

    @classmethod
    def parse(cls, header_block: str) -> MimeHeader:
        """Parse a raw (possibly folded) header block."""
        return cls.assemble(split_header_fields(header_block))
