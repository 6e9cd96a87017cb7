"""
RFC 822 Module
Separates the header block from the body and splits it into fields

Order matters: folded continuation lines are unfolded first (RFC 822
section 3.1.1), then the unfolded block is partitioned into one
``HeaderField`` per line.
"""

import logging
import re
from typing import List, Tuple

from .errors import InvalidFieldStructure
from .mime_data import HeaderField
from ..utils.sanitization import sanitize_for_logging

logger = logging.getLogger(__name__)

FOLDING_PATTERN = re.compile(r"\r?\n[ \t]+")
LINE_BREAK_PATTERN = re.compile(r"\r?\n")
HEADER_BODY_SEPARATOR = re.compile(r"\r?\n\r?\n")
LEADING_LINE_BREAK = re.compile(r"\A\r?\n")


def unfold(header_block: str) -> str:
    """
    Merge folded lines: every line break followed by blanks becomes one space.

    Example:
        >>> unfold("Subject: hello\\r\\n world")
        'Subject: hello world'
    """
    return FOLDING_PATTERN.sub(" ", header_block)


def partition(unfolded: str) -> List[HeaderField]:
    """
    Split an unfolded header block into fields, one per line.

    The first colon separates name from body; the body loses its leading
    whitespace. Blank lines are ignored.

    Raises:
        InvalidFieldStructure: If a line has no colon, an empty name or an
            empty body
    """
    fields = []
    for line_number, line in enumerate(LINE_BREAK_PATTERN.split(unfolded), start=1):
        if not line.strip():
            continue

        name, separator, body = line.partition(":")
        name = name.rstrip(" \t")
        body = body.lstrip(" \t")
        if not separator or not name or not body:
            raise InvalidFieldStructure(
                f"Header line {line_number} is not a 'name: body' field: "
                f"{sanitize_for_logging(line, max_length=80)!r}"
            )
        fields.append(HeaderField(name, body))

    return fields


def split_header_fields(header_block: str) -> List[HeaderField]:
    """Unfold, then partition, a raw header block."""
    fields = partition(unfold(header_block))
    logger.debug("Partitioned header block into %d fields", len(fields))
    return fields


def split_message(text: str) -> Tuple[str, str]:
    """
    Split raw message text at the first blank line into (header block, body).

    Text that starts with a line break has no header block. Text without
    a blank line is all header.
    """
    leading = LEADING_LINE_BREAK.match(text)
    if leading:
        return "", text[leading.end():]

    separator = HEADER_BODY_SEPARATOR.search(text)
    if separator is None:
        return text, ""
    return text[:separator.start()], text[separator.end():]
