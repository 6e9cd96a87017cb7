"""
Sanitization Utility Module
Makes values taken from untrusted messages safe to put in log lines.
"""

import re
import unicodedata

ANSI_ESCAPE_PATTERN = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')


def sanitize_for_logging(text: str, max_length: int = 255) -> str:
    """
    Sanitize text for safe logging to prevent Log Injection (CRLF) and terminal manipulation.

    SECURITY STORY: Boundaries, header names and charset names all come
    straight from the message. A crafted boundary containing "\\r\\n" could
    forge extra log lines, and ANSI escapes could rewrite the operator's
    terminal. Everything from a message goes through here before logging.

    Args:
        text: The input string to sanitize.
        max_length: Maximum allowed length for the log entry (truncates if longer).

    Returns:
        Sanitized string safe for logging.
    """
    if not text:
        return ""

    # Bound the work done on huge inputs before normalising
    if len(text) > max_length * 4:
        text = text[:max_length * 4]

    text = unicodedata.normalize('NFKC', text)

    text = text.replace('\n', '\\n').replace('\r', '\\r')

    text = ANSI_ESCAPE_PATTERN.sub('', text)

    # Remaining control characters, except tab
    text = "".join(ch for ch in text if ch == '\t' or ord(ch) >= 32)

    if len(text) > max_length:
        text = text[:max_length] + "..."

    return text
