"""Content type tokens and how each one is stored inside atom:content.

https://www.rfc-editor.org/rfc/rfc4287#section-4.1.3.3
"""
from enum import Enum

# Type tokens RFC 4287 allows without a slash.
RESERVED_TYPES = frozenset({"", "text", "html", "xhtml"})

# https://www.rfc-editor.org/rfc/rfc3023#section-3
XML_MEDIA_TYPES = frozenset({
    "text/xml",
    "application/xml",
    "text/xml-external-parsed-entity",
    "application/xml-external-parsed-entity",
    "application/xml-dtd",
})

XML_SUFFIXES = ("+xml", "/xml")


class ContentKind(Enum):
    """Where a payload of a given type lives in the document."""
    MARKUP = "markup"   # child markup, emitted verbatim
    TEXT = "text"       # character data, escaped on output
    BINARY = "binary"   # base64 text, needs a summary


def is_mime_type(content_type: str) -> bool:
    """Whatever a media type is, it contains at least one slash."""
    return "/" in content_type


def content_kind(content_type: str) -> ContentKind:
    """Classify a type token. Markup wins over text (``text/xml`` is markup)."""
    lowered = content_type.lower()
    if content_type == "xhtml" or content_type in XML_MEDIA_TYPES or lowered.endswith(XML_SUFFIXES):
        return ContentKind.MARKUP
    if content_type in ("", "text", "html") or lowered.startswith("text/"):
        return ContentKind.TEXT
    return ContentKind.BINARY
