"""Data models for atomgen.

Plain records mirroring the Atom 1.0 elements: https://www.rfc-editor.org/rfc/rfc4287
Absent single values are ``None``; repeated elements are lists that may be empty.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass
class CommonAttributes:
    """xml:base / xml:lang, allowed on every Atom element (RFC 4287 §2)."""
    base: str = ""
    lang: str = ""


@dataclass
class Person:
    """An author, co-author or contributor (RFC 4287 §3.2)."""
    name: str = ""
    email: str = ""
    uri: str = ""


@dataclass
class Category:
    term: str
    scheme: str = ""   # IRI of the categorization scheme
    label: str = ""    # human-readable


@dataclass
class Link:
    """Reference from a feed or entry to a Web resource (RFC 4287 §4.2.7)."""
    href: str
    rel: str = ""
    type: str = ""      # advisory media type of the target
    hreflang: str = ""
    title: str = ""
    length: str = ""    # advisory length in octets


@dataclass
class Generator:
    value: str = ""
    uri: str = ""
    version: str = ""


@dataclass
class TextConstruct:
    """Human-readable text such as title, subtitle or rights (RFC 4287 §3.1)."""
    value: str = ""
    type: str = ""
    attrs: Optional[CommonAttributes] = None


@dataclass
class Date:
    """An RFC 3339 date-time string. A missing date is ``None``, never a zero value."""
    value: str


@dataclass
class TextContent:
    """Inline content stored as character data.

    Holds plain text, escaped HTML, or base64 text for binary media types.
    """
    value: str = ""
    type: str = ""
    base64_encoded: bool = False
    attrs: Optional[CommonAttributes] = None


@dataclass
class MarkupContent:
    """Inline XHTML/XML content emitted as child markup, without escaping."""
    markup: str = ""
    type: str = "xhtml"
    attrs: Optional[CommonAttributes] = None


@dataclass
class ExternalContent:
    """Content living elsewhere; the element itself stays empty (RFC 4287 §4.1.3.2)."""
    src: str
    type: str = ""
    attrs: Optional[CommonAttributes] = None


Content = Union[TextContent, MarkupContent, ExternalContent]


@dataclass
class Source:
    """Metadata of the feed an entry was copied from (RFC 4287 §4.2.11)."""
    id: Optional[str] = None
    generator: Optional[Generator] = None
    links: List[Link] = field(default_factory=list)
    updated: Optional[Date] = None
    title: Optional[TextConstruct] = None
    subtitle: Optional[TextConstruct] = None
    icon: Optional[str] = None
    logo: Optional[str] = None
    categories: List[Category] = field(default_factory=list)
    author: Optional[Person] = None
    contributors: List[Person] = field(default_factory=list)
    rights: Optional[TextConstruct] = None
    attrs: Optional[CommonAttributes] = None


@dataclass
class Entry:
    id: str = ""
    title: Optional[TextConstruct] = None
    links: List[Link] = field(default_factory=list)
    published: Optional[Date] = None
    updated: Optional[Date] = None
    author: Optional[Person] = None
    categories: List[Category] = field(default_factory=list)
    rights: Optional[TextConstruct] = None
    contributors: List[Person] = field(default_factory=list)
    source: Optional[Source] = None
    summary: Optional[Content] = None
    content: Optional[Content] = None
    attrs: Optional[CommonAttributes] = None


@dataclass
class Feed:
    """The atom:feed document element. Owns its entries."""
    id: str = ""
    generator: Optional[Generator] = None
    links: List[Link] = field(default_factory=list)
    updated: Optional[Date] = None
    title: Optional[TextConstruct] = None
    subtitle: Optional[TextConstruct] = None
    icon: Optional[str] = None
    logo: Optional[str] = None
    categories: List[Category] = field(default_factory=list)
    author: Optional[Person] = None
    contributors: List[Person] = field(default_factory=list)
    rights: Optional[TextConstruct] = None
    entries: List[Entry] = field(default_factory=list)
    attrs: Optional[CommonAttributes] = None
