"""
Security Validators Module
Centralizes the structural limits and checks applied while building MIME trees

SECURITY STORY: These limits protect against hostile messages:
- MAX_NESTING_DEPTH: multipart containers nested inside each other drive the
  tree builder's recursion (CWE-674: Uncontrolled Recursion)
- MAX_MIME_PARTS: a "wide" MIME bomb with thousands of sibling parts
  exhausts memory even without deep nesting
- MAX_BOUNDARY_LENGTH: RFC 2046 caps boundaries at 70 characters
"""

import re

MAX_NESTING_DEPTH = 50
MAX_MIME_PARTS = 1000
MAX_BOUNDARY_LENGTH = 70

# RFC 2046 section 5.1.1 bchars; a boundary may not end with a space
BOUNDARY_PATTERN = re.compile(r"[0-9A-Za-z'()+_,\-./:=? ]*[0-9A-Za-z'()+_,\-./:=?]")


def is_valid_boundary(boundary: str) -> bool:
    """
    Check a multipart boundary against RFC 2046.

    Invalid boundaries are still used for splitting; the check only
    decides whether the parser warns about them.

    Example:
        >>> is_valid_boundary("simple boundary")
        True
        >>> is_valid_boundary("trailing space ")
        False
    """
    if not boundary or len(boundary) > MAX_BOUNDARY_LENGTH:
        return False
    return BOUNDARY_PATTERN.fullmatch(boundary) is not None
