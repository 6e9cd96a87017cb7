"""
MIME Parser Module
Builds the MIME tree from raw message text

PATTERN RECOGNITION: This is a recursive-descent tree builder. Each node is
parsed the same way: split header block from body, assemble the header,
and, if the Content-Type is multipart with a boundary, split the body at
the boundary delimiter lines and parse every segment as a node of its own.

SECURITY STORY: The recursion is driven entirely by the message, so it is
bounded twice: by nesting depth (deeply nested containers) and by the total
number of nodes (wide MIME bombs). Both limits raise instead of returning a
silently truncated tree.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Pattern

from .errors import NestingTooDeep, TooManyParts
from .header_parser import HeaderParser
from .mime_data import (
    Alternative,
    Mime,
    MimeBody,
    MimeContent,
    MimeHeader,
    Mixed,
    Multipart,
    MultipartKind,
)
from .rfc822 import split_message
from .transfer_encoding import TransferEncoding
from ..utils.config import ParserLimits
from ..utils.sanitization import sanitize_for_logging
from ..utils.security_validators import is_valid_boundary

logger = logging.getLogger(__name__)


def delimiter_pattern(boundary: str) -> Pattern:
    """
    Match ``--boundary`` and ``--boundary--`` lines (RFC 2046 section 5.1.1).

    Matching is exact and anchored at line start; trailing blanks
    (transport padding) are allowed.
    """
    return re.compile(
        rf"^--{re.escape(boundary)}(?P<close>--)?[ \t]*\r?$",
        re.MULTILINE,
    )


def _strip_final_line_break(segment: str) -> str:
    # The line break before a delimiter belongs to the delimiter
    if segment.endswith("\r\n"):
        return segment[:-2]
    if segment.endswith("\n"):
        return segment[:-1]
    return segment


def split_multipart_body(body: str, boundary: str) -> List[str]:
    """
    Return the segments strictly between consecutive delimiter lines.

    The preamble before the first delimiter and the epilogue after the
    terminal delimiter are discarded, as are empty segments.

    Example:
        >>> split_multipart_body("--b\\nA\\n--b\\nB\\n--b--\\n", "b")
        ['A', 'B']
    """
    segments = []
    start = None
    terminated = False

    for match in delimiter_pattern(boundary).finditer(body):
        if start is not None:
            segment = _strip_final_line_break(body[start:match.start()])
            if segment.strip():
                segments.append(segment)

        if match.group("close"):
            terminated = True
            break

        # Content starts on the line after the delimiter
        start = match.end() + 1 if body.startswith("\n", match.end()) else match.end()

    if start is not None and not terminated:
        logger.warning(
            "Multipart body has no terminal delimiter for boundary '%s'; "
            "content after the last delimiter was discarded",
            sanitize_for_logging(boundary)
        )

    return segments


@dataclass
class _ParseState:
    """Per-call bookkeeping, so one MimeParser can serve many threads"""
    part_count: int = 0


class MimeParser:
    """
    Parses raw message text into an immutable ``Mime`` tree.

    MAINTENANCE WISDOM: The parser keeps no state between calls; everything
    a single parse needs lives in a ``_ParseState`` created per call.
    """

    def __init__(self, limits: Optional[ParserLimits] = None):
        """
        Initialize MIME parser

        Args:
            limits: Structural limits (defaults to ParserLimits())
        """
        self.limits = limits or ParserLimits()
        self.logger = logger

    def parse(self, message_text: str) -> Mime:
        """
        Parse a complete message (header block, blank line, body).

        Raises:
            InvalidFieldStructure: If a header block or well-known field is malformed
            MimeLimitExceeded: If the structure exceeds ``self.limits``
        """
        state = _ParseState()
        mime = self._parse_node(message_text, 0, state)
        self.logger.debug("Parsed MIME tree with %d nodes", state.part_count)
        return mime

    def _parse_node(self, text: str, depth: int, state: _ParseState) -> Mime:
        if depth > self.limits.max_depth:
            raise NestingTooDeep(
                f"Multipart nesting exceeds the maximum depth of {self.limits.max_depth}"
            )

        state.part_count += 1
        if state.part_count > self.limits.max_parts:
            raise TooManyParts(
                f"Message has more than {self.limits.max_parts} MIME parts"
            )

        header_block, body = split_message(text)
        header = HeaderParser.parse(header_block)
        return Mime(header, self._parse_content(header, body, depth, state))

    def _parse_content(
        self,
        header: MimeHeader,
        body: str,
        depth: int,
        state: _ParseState
    ) -> MimeContent:
        content_type = header.content_type
        mime_type = content_type.mime_type if content_type is not None else None

        if not isinstance(mime_type, Multipart):
            if content_type is not None and content_type.type.lower() == "multipart":
                self.logger.warning(
                    "Content-Type %s has no boundary parameter; treating body as opaque",
                    sanitize_for_logging(content_type.raw)
                )
            encoding = header.content_transfer_encoding or TransferEncoding.SEVEN_BIT
            return MimeBody(body, encoding)

        if not is_valid_boundary(mime_type.boundary):
            self.logger.warning(
                "Boundary '%s' does not conform to RFC 2046",
                sanitize_for_logging(mime_type.boundary)
            )

        segments = split_multipart_body(body, mime_type.boundary)
        self.logger.debug(
            "Split %s body into %d parts at depth %d",
            sanitize_for_logging(content_type.raw), len(segments), depth
        )
        children = tuple(
            self._parse_node(segment, depth + 1, state) for segment in segments
        )

        if mime_type.subtype is MultipartKind.ALTERNATIVE:
            return Alternative(children)
        return Mixed(children)


def parse(message_text: str, limits: Optional[ParserLimits] = None) -> Mime:
    """Parse raw message text into a ``Mime`` tree."""
    return MimeParser(limits).parse(message_text)
