"""
MIME Data Model
Immutable dataclasses for the parsed MIME tree

The tree is built once, top-down, by ``mime_parser.parse`` and never
mutated afterwards. Each node owns its header and its children outright.

Closed unions are expressed as ``Union`` aliases over an Enum of the
well-known values plus a small dataclass carrying anything else verbatim:

- ``MimeType``      = MediaType | Multipart | OtherMediaType
- ``MultipartSubtype`` = MultipartKind | OtherSubtype
- ``MimeContent``   = MimeBody | Mixed | Alternative
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from . import content_decoder
from .transfer_encoding import ContentTransferEncoding, TransferEncoding


@dataclass(frozen=True)
class HeaderField:
    """An RFC 822 ``name: body`` field. Names compare case-insensitively via ``key``."""

    name: str
    body: str
    key: str = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "key", self.name.lower())


# ---------------------------------------------------------------------------
# Content-Type
# ---------------------------------------------------------------------------

class MediaType(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    APPLICATION = "application"
    MESSAGE = "message"


class MultipartKind(str, Enum):
    MIXED = "mixed"
    ALTERNATIVE = "alternative"


@dataclass(frozen=True)
class OtherSubtype:
    value: str


MultipartSubtype = Union[MultipartKind, OtherSubtype]


@dataclass(frozen=True)
class Multipart:
    subtype: MultipartSubtype
    boundary: str


@dataclass(frozen=True)
class OtherMediaType:
    value: str


MimeType = Union[MediaType, Multipart, OtherMediaType]

_MEDIA_TYPES_BY_NAME = {member.value: member for member in MediaType}
_MULTIPART_KINDS_BY_NAME = {member.value: member for member in MultipartKind}


def parse_multipart_subtype(value: str) -> MultipartSubtype:
    return _MULTIPART_KINDS_BY_NAME.get(value.lower(), OtherSubtype(value))


@dataclass(frozen=True)
class ContentType:
    """
    A parsed Content-Type header.

    Parameter keys keep the case they were written with and are looked up
    by exact key.
    """

    type: str
    subtype: str
    parameters: Dict[str, str] = field(default_factory=dict)

    @property
    def raw(self) -> str:
        """The ``type/subtype`` form."""
        return f"{self.type}/{self.subtype}"

    @property
    def charset(self) -> Optional[str]:
        return self.parameters.get("charset")

    @property
    def name(self) -> Optional[str]:
        return self.parameters.get("name")

    @property
    def mime_type(self) -> MimeType:
        """
        Classify the primary type (case-insensitive, RFC 2045 section 5.1).

        A ``multipart`` type without a ``boundary`` parameter degrades to
        ``OtherMediaType`` so the node is treated as an opaque leaf.
        """
        primary = self.type.lower()
        if primary == "multipart":
            boundary = self.parameters.get("boundary")
            if boundary is None:
                return OtherMediaType(self.type)
            return Multipart(parse_multipart_subtype(self.subtype), boundary)
        return _MEDIA_TYPES_BY_NAME.get(primary, OtherMediaType(self.type))


# ---------------------------------------------------------------------------
# Content-Disposition / header
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ContentDisposition:
    type: str
    parameters: Dict[str, str] = field(default_factory=dict)

    @property
    def filename(self) -> Optional[str]:
        return self.parameters.get("filename")


@dataclass(frozen=True)
class MimeHeader:
    """
    The three well-known MIME fields plus every other field, in order.

    A well-known field that is ``None`` was not specified.
    """

    content_transfer_encoding: Optional[ContentTransferEncoding] = None
    content_type: Optional[ContentType] = None
    content_disposition: Optional[ContentDisposition] = None
    other: Tuple[HeaderField, ...] = ()

    def get(self, name: str) -> Optional[str]:
        """Body of the first leftover field called ``name`` (case-insensitive)."""
        key = name.lower()
        for header_field in self.other:
            if header_field.key == key:
                return header_field.body
        return None


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MimeBody:
    """An undecoded leaf payload."""

    raw: str
    encoding: ContentTransferEncoding = TransferEncoding.SEVEN_BIT

    def decoded_content_bytes(self) -> bytes:
        return content_decoder.decode(self.raw, self.encoding)

    def decoded_content_text(self, charset: Optional[str] = None) -> str:
        return content_decoder.decode_text(self.raw, self.encoding, charset)


@dataclass(frozen=True)
class Mixed:
    parts: Tuple["Mime", ...] = ()


@dataclass(frozen=True)
class Alternative:
    parts: Tuple["Mime", ...] = ()


MimeContent = Union[MimeBody, Mixed, Alternative]


@dataclass(frozen=True)
class Mime:
    """A node of the MIME tree: either a leaf body or a container of parts."""

    header: MimeHeader
    content: MimeContent

    @property
    def is_leaf(self) -> bool:
        return isinstance(self.content, MimeBody)

    @property
    def children(self) -> Tuple["Mime", ...]:
        """Directly encapsulated parts; empty for leaves."""
        if isinstance(self.content, (Mixed, Alternative)):
            return self.content.parts
        return ()

    def decoded_content_bytes(self) -> Optional[bytes]:
        """Decoded payload of a leaf, ``None`` for containers."""
        if isinstance(self.content, MimeBody):
            return self.content.decoded_content_bytes()
        return None

    def decoded_content_text(self) -> Optional[str]:
        """Decoded text of a leaf using its own ``charset`` parameter, ``None`` for containers."""
        if isinstance(self.content, MimeBody):
            content_type = self.header.content_type
            charset = content_type.charset if content_type else None
            return self.content.decoded_content_text(charset)
        return None

    def find_child_by_name(self, name: str) -> Optional["Mime"]:
        """First direct child whose Content-Type ``name`` parameter equals ``name``."""
        for child in self.children:
            content_type = child.header.content_type
            if content_type is not None and content_type.name == name:
                return child
        return None

    def find_attachment_by_filename(self, filename: str) -> Optional["Mime"]:
        """First direct child whose Content-Disposition ``filename`` equals ``filename``."""
        for child in self.children:
            disposition = child.header.content_disposition
            if disposition is not None and disposition.filename == filename:
                return child
        return None
