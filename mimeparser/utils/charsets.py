"""
Charset Module
Resolves IANA charset names to Python codecs and decodes bytes with them

Python's codec registry already understands most IANA names and aliases
("us-ascii", "iso-8859-1", "windows-1252", "shift_jis", ...). The small
alias table below covers names that show up in real mail but that the
registry does not know.
"""

import codecs
from functools import lru_cache

DEFAULT_CHARSET = "utf-8"

IANA_ALIASES = {
    "unicode-1-1-utf-7": "utf-7",
    "x-sjis": "shift_jis",
    "x-euc-jp": "euc_jp",
    "x-gbk": "gbk",
    "x-mac-roman": "mac_roman",
    "x-mac-cyrillic": "mac_cyrillic",
    "windows-874": "cp874",
}


@lru_cache(maxsize=128)
def resolve_codec(charset: str) -> str:
    """
    Return the canonical Python codec name for an IANA charset name.

    Raises:
        LookupError: If neither the alias table nor the codec registry
            knows the name
    """
    name = charset.strip().lower()
    if not name:
        raise LookupError("empty charset name")
    return codecs.lookup(IANA_ALIASES.get(name, name)).name


def decode_bytes(data: bytes, charset: str = DEFAULT_CHARSET) -> str:
    """
    Strictly decode ``data`` using an IANA charset name.

    Raises:
        LookupError: If the charset name is unknown
        UnicodeDecodeError: If the bytes are invalid in that charset
    """
    return data.decode(resolve_codec(charset), errors="strict")
