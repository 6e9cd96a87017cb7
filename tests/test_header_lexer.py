"""
Unit tests for mimeparser/modules/header_lexer.py
"""

import unittest

import pytest

from mimeparser.modules.errors import (
    InvalidAtom,
    InvalidQuotedString,
    InvalidSpecialToken,
    InvalidToken,
    NoMoreTokens,
)
from mimeparser.modules.header_lexer import (
    Atom,
    HeaderFieldTokenProcessor,
    QuotedString,
    Special,
    tokenize,
)
from mimeparser.modules.scanner import HeaderFieldSpecial


class TestHeaderFieldLexer(unittest.TestCase):

    def test_content_type_tokens(self):
        self.assertEqual(
            tokenize('text/plain; charset="utf-8"'),
            [
                Atom("text"),
                Special(HeaderFieldSpecial.SLASH),
                Atom("plain"),
                Special(HeaderFieldSpecial.SEMICOLON),
                Atom("charset"),
                Special(HeaderFieldSpecial.EQUALITY_SIGN),
                QuotedString("utf-8"),
            ],
        )

    def test_quoted_string_keeps_specials_and_spaces(self):
        self.assertEqual(tokenize('"a; b=c / d"'), [QuotedString("a; b=c / d")])

    def test_escaped_quote_is_one_quoted_string(self):
        tokens = tokenize(r'name="a \"quoted\" value"')
        self.assertEqual(
            tokens,
            [
                Atom("name"),
                Special(HeaderFieldSpecial.EQUALITY_SIGN),
                QuotedString('a "quoted" value'),
            ],
        )

    def test_unterminated_quote_falls_back_to_special(self):
        tokens = tokenize('"abc')
        self.assertEqual(tokens, [Special(HeaderFieldSpecial.QUOTATION_MARK), Atom("abc")])

    def test_leading_spaces_are_skipped(self):
        self.assertEqual(tokenize("   base64  "), [Atom("base64")])

    def test_empty_body_has_no_tokens(self):
        self.assertEqual(tokenize(""), [])

    def test_control_character_stops_lexing(self):
        # Neither quoted string, atom nor special matches a tab
        self.assertEqual(tokenize("a\tb"), [Atom("a")])

    def test_non_ascii_is_part_of_an_atom(self):
        self.assertEqual(tokenize("café"), [Atom("café")])


class TestHeaderFieldTokenProcessor:
    """The processor only advances on success."""

    def test_expect_sequence(self):
        processor = HeaderFieldTokenProcessor.from_string("text/html")
        assert processor.expect_token() == "text"
        processor.expect_special(HeaderFieldSpecial.SLASH)
        assert processor.expect_token() == "html"
        assert processor.is_at_end

    def test_mismatch_does_not_advance(self):
        processor = HeaderFieldTokenProcessor.from_string('"quoted"')
        with pytest.raises(InvalidToken):
            processor.expect_token()
        assert processor.cursor == 0
        assert processor.expect_quoted_string() == "quoted"

    def test_expect_quoted_string_mismatch(self):
        processor = HeaderFieldTokenProcessor.from_string("atom")
        with pytest.raises(InvalidQuotedString):
            processor.expect_quoted_string()
        assert processor.cursor == 0

    def test_expect_special_wrong_special(self):
        processor = HeaderFieldTokenProcessor.from_string(";")
        with pytest.raises(InvalidSpecialToken):
            processor.expect_special(HeaderFieldSpecial.SLASH)
        assert processor.cursor == 0

    def test_expect_special_on_atom(self):
        processor = HeaderFieldTokenProcessor.from_string("x")
        with pytest.raises(InvalidSpecialToken):
            processor.expect_special(HeaderFieldSpecial.SLASH)

    def test_no_more_tokens(self):
        processor = HeaderFieldTokenProcessor([])
        assert processor.is_at_end
        with pytest.raises(NoMoreTokens):
            processor.expect_token()

    def test_expect_word_prefers_quoted_string(self):
        processor = HeaderFieldTokenProcessor.from_string('"a b" c')
        assert processor.expect_word() == "a b"
        assert processor.expect_word() == "c"
        with pytest.raises(NoMoreTokens):
            processor.expect_word()

    def test_expect_word_on_special(self):
        processor = HeaderFieldTokenProcessor.from_string(";")
        with pytest.raises(InvalidAtom):
            processor.expect_word()
        assert processor.cursor == 0
