"""
Tests for Sanitization Utility
"""

import unittest

from mimeparser.utils.sanitization import sanitize_for_logging


class TestSanitization(unittest.TestCase):

    def test_basic_sanitization(self):
        """Test basic string sanitization"""
        self.assertEqual(sanitize_for_logging("Hello World"), "Hello World")
        self.assertEqual(sanitize_for_logging(""), "")
        self.assertEqual(sanitize_for_logging(None), "")

    def test_newline_sanitization(self):
        """Test that newlines are escaped"""
        self.assertEqual(sanitize_for_logging("Line 1\nLine 2"), "Line 1\\nLine 2")
        self.assertEqual(sanitize_for_logging("Line 1\rLine 2"), "Line 1\\rLine 2")
        self.assertEqual(sanitize_for_logging("Line 1\r\nLine 2"), "Line 1\\r\\nLine 2")

    def test_forged_boundary_cannot_add_log_lines(self):
        """A boundary carrying CRLF stays on one log line"""
        boundary = "b1\r\n2024-01-01 - mimeparser - ERROR - forged"
        self.assertNotIn("\n", sanitize_for_logging(boundary))

    def test_control_character_sanitization(self):
        """Test that control characters are removed"""
        self.assertEqual(sanitize_for_logging("Ding\x07"), "Ding")
        self.assertEqual(sanitize_for_logging("\x1b[31mRed\x1b[0m"), "Red")
        self.assertEqual(sanitize_for_logging("a\tb"), "a\tb")

    def test_unicode_normalization(self):
        """Test unicode normalization"""
        # 'ﬁ' (ligature) -> 'fi'
        self.assertEqual(sanitize_for_logging("ﬁle"), "file")

    def test_truncation(self):
        """Test string truncation"""
        text = "This is a long string that should be truncated"
        sanitized = sanitize_for_logging(text, max_length=10)
        self.assertEqual(sanitized, "This is a ...")

    def test_huge_input_is_bounded(self):
        sanitized = sanitize_for_logging("x" * 100_000)
        self.assertEqual(len(sanitized), 255 + 3)
