"""
Field Parsers Module
Semantic parsers for the structured MIME header fields

Grammar (over header field tokens):

    content-type        := token "/" token parameters
    content-disposition := token parameters
    content-transfer-encoding := token
    parameters          := ( ";" token "=" ( quoted-string | token ) )*

Token-level failures are re-raised as ``MalformedHeaderField`` naming the
field, so a caller sees which header was broken rather than which token.
"""

from typing import Callable, Dict, Tuple, TypeVar

from .errors import (
    InvalidParameterValue,
    MalformedHeaderField,
    TokenError,
    TrailingSemicolon,
)
from .header_lexer import HeaderFieldTokenProcessor
from .mime_data import ContentDisposition, ContentType
from .scanner import HeaderFieldSpecial
from .transfer_encoding import ContentTransferEncoding, parse_transfer_encoding

T = TypeVar("T")

CONTENT_TYPE = "Content-Type"
CONTENT_TRANSFER_ENCODING = "Content-Transfer-Encoding"
CONTENT_DISPOSITION = "Content-Disposition"


class HeaderFieldParametersParser:
    """Parses a ``; name=value`` parameter list into a dict."""

    @staticmethod
    def _parse_value(processor: HeaderFieldTokenProcessor) -> str:
        try:
            return processor.expect_word()
        except TokenError as e:
            raise InvalidParameterValue(f"Invalid parameter value: {e}") from e

    @classmethod
    def _parse_parameter(cls, processor: HeaderFieldTokenProcessor) -> Tuple[str, str]:
        processor.expect_special(HeaderFieldSpecial.SEMICOLON)

        if processor.is_at_end:
            raise TrailingSemicolon("Parameter list ends with ';'")

        name = processor.expect_token()
        processor.expect_special(HeaderFieldSpecial.EQUALITY_SIGN)
        value = cls._parse_value(processor)
        return name, value

    @classmethod
    def parse(cls, processor: HeaderFieldTokenProcessor) -> Dict[str, str]:
        """
        Consume parameters until the tokens run out.

        A repeated name overwrites the earlier value. A final ``;`` with
        nothing after it is tolerated.
        """
        parameters: Dict[str, str] = {}
        while not processor.is_at_end:
            try:
                name, value = cls._parse_parameter(processor)
            except TrailingSemicolon:
                break
            parameters[name] = value
        return parameters


def _parse_field(field_name: str, body: str, production: Callable[[HeaderFieldTokenProcessor], T]) -> T:
    processor = HeaderFieldTokenProcessor.from_string(body)
    try:
        return production(processor)
    except (TokenError, InvalidParameterValue) as e:
        raise MalformedHeaderField(field_name, body, str(e)) from e


def _content_type(processor: HeaderFieldTokenProcessor) -> ContentType:
    primary = processor.expect_token()
    processor.expect_special(HeaderFieldSpecial.SLASH)
    subtype = processor.expect_token()
    parameters = HeaderFieldParametersParser.parse(processor)
    return ContentType(primary, subtype, parameters)


def _content_transfer_encoding(processor: HeaderFieldTokenProcessor) -> ContentTransferEncoding:
    return parse_transfer_encoding(processor.expect_token())


def _content_disposition(processor: HeaderFieldTokenProcessor) -> ContentDisposition:
    disposition = processor.expect_token()
    parameters = HeaderFieldParametersParser.parse(processor)
    return ContentDisposition(disposition, parameters)


def parse_parameters(body: str) -> Dict[str, str]:
    """Parse a bare ``; name=value ...`` list."""
    return _parse_field("parameter list", body, HeaderFieldParametersParser.parse)


def parse_content_type(body: str) -> ContentType:
    """
    Parse a Content-Type field body.

    Example:
        >>> parse_content_type('text/plain; charset="utf-8"').charset
        'utf-8'
    """
    return _parse_field(CONTENT_TYPE, body, _content_type)


def parse_content_transfer_encoding(body: str) -> ContentTransferEncoding:
    """Parse a Content-Transfer-Encoding field body; unknown mechanisms are kept verbatim."""
    return _parse_field(CONTENT_TRANSFER_ENCODING, body, _content_transfer_encoding)


def parse_content_disposition(body: str) -> ContentDisposition:
    return _parse_field(CONTENT_DISPOSITION, body, _content_disposition)
