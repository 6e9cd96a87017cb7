#!/usr/bin/env python3
"""
MIME Inspector
Command-line front end that parses a message file and prints its MIME tree
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from mimeparser.modules.errors import MimeDecodeError, MimeParserError
from mimeparser.modules.mime_data import Mime, MimeBody
from mimeparser.modules.mime_parser import MimeParser
from mimeparser.utils.colors import Colors
from mimeparser.utils.config import Config, ConfigurationError
from mimeparser.utils.logging_utils import configure_logging


class MimeInspector:
    """Loads configuration, parses one message and renders its tree"""

    INDENT = "  "

    def __init__(self, config_file: str = ".env", use_color: Optional[bool] = None):
        """
        Initialize inspector

        Args:
            config_file: Path to configuration file
            use_color: Force colored output on or off (default: only on a TTY)
        """
        self.config = Config(config_file)
        self.config.validate()
        configure_logging(self.config.system)

        self.logger = logging.getLogger("MimeInspector")
        self.parser = MimeParser(self.config.limits)
        self.use_color = sys.stdout.isatty() if use_color is None else use_color

    def inspect(self, path: Path, decode: bool = False, out: Optional[TextIO] = None) -> Mime:
        """
        Parse the message at ``path`` and write its tree to ``out`` (stdout by default).

        The file is read as Latin-1 so every byte maps to exactly one
        character; transfer decoding recovers the original bytes. Line
        endings are kept as they are on disk.
        """
        if out is None:
            out = sys.stdout
        with path.open(encoding="latin-1", newline="") as message_file:
            text = message_file.read()
        mime = self.parser.parse(text)
        self.logger.info(
            "Parsed %s",
            path.name,
            extra={"extra_fields": {"path": str(path), "parts": self._count(mime)}}
        )
        for line in self.render(mime, decode=decode):
            out.write(line + "\n")
        return mime

    def render(self, mime: Mime, decode: bool = False, depth: int = 0) -> List[str]:
        """Render a node and its descendants as indented lines"""
        indent = self.INDENT * depth
        lines = [indent + self._describe(mime)]

        if decode and isinstance(mime.content, MimeBody) and self._is_text(mime):
            try:
                text = mime.decoded_content_text()
            except MimeDecodeError as e:
                lines.append(f"{indent}{self.INDENT}{self._paint(f'<{e}>', Colors.RED)}")
            else:
                for text_line in text.splitlines():
                    lines.append(f"{indent}{self.INDENT}| {text_line}")

        for child in mime.children:
            lines.extend(self.render(child, decode=decode, depth=depth + 1))
        return lines

    def _describe(self, mime: Mime) -> str:
        header = mime.header
        content_type = header.content_type
        label = content_type.raw if content_type else "text/plain (default)"
        color = Colors.for_media_type(content_type.type if content_type else "text")
        parts = [self._paint(label, color)]

        if header.content_disposition is not None:
            disposition = header.content_disposition.type
            if header.content_disposition.filename:
                disposition += f' "{header.content_disposition.filename}"'
            parts.append(disposition)

        if isinstance(mime.content, MimeBody):
            encoding = getattr(mime.content.encoding, "value", mime.content.encoding)
            parts.append(f"[{encoding}, {len(mime.content.raw)} chars]")
        else:
            parts.append(f"[{len(mime.children)} parts]")

        return " ".join(parts)

    @staticmethod
    def _is_text(mime: Mime) -> bool:
        content_type = mime.header.content_type
        return content_type is None or content_type.type.lower() == "text"

    def _count(self, mime: Mime) -> int:
        return 1 + sum(self._count(child) for child in mime.children)

    def _paint(self, text: str, color: str) -> str:
        return Colors.colorize(text, color) if self.use_color else text


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    arg_parser = argparse.ArgumentParser(
        prog="mimeparser-inspect",
        description="Parse a MIME/RFC 822 message and print its part tree"
    )
    arg_parser.add_argument("message", type=Path, help="Path to the message file")
    arg_parser.add_argument("--env", default=".env", help="Configuration file (default: .env)")
    arg_parser.add_argument(
        "--decode", action="store_true", help="Print the decoded text of text parts"
    )
    args = arg_parser.parse_args(argv)

    try:
        inspector = MimeInspector(args.env)
    except ConfigurationError as e:
        print(Colors.error(f"Configuration error: {e}"), file=sys.stderr)
        return 2

    try:
        inspector.inspect(args.message, decode=args.decode)
    except OSError as e:
        inspector.logger.error(f"Cannot read {args.message}: {e}")
        return 1
    except MimeParserError as e:
        inspector.logger.error(f"Failed to parse {args.message}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
