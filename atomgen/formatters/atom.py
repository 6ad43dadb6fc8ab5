"""Atom 1.0 feed output: https://www.rfc-editor.org/rfc/rfc4287"""
import logging
import re
import uuid
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, TextIO

from atomgen.models import (
    Category, CommonAttributes, Content, Date, Entry, ExternalContent, Feed, Generator,
    Link, MarkupContent, Person, Source, TextConstruct,
)

logger = logging.getLogger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"
XML_NS = "http://www.w3.org/XML/1998/namespace"
XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'
# Characters XML 1.0 does not allow anywhere in a document.
_INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def _clean(value: str) -> str:
    """Replace characters XML cannot carry with U+FFFD."""
    return _INVALID_XML_CHARS.sub("\ufffd", value) if value else value


def _attrs(**pairs: str) -> Dict[str, str]:
    """Keep attributes in the given order, dropping empty optional ones."""
    return {k: _clean(v) for k, v in pairs.items() if v}


class AtomFormatter:
    """Render a :class:`~atomgen.models.Feed` as an Atom 1.0 document.

    Output is deterministic: element order follows the model's field order
    and lists are written in sequence. The feed is not validated here; run
    :func:`atomgen.verify.verify_feed` first if that matters.
    """

    def __init__(self):
        self._raw: List[str] = []
        self._token = ""

    def format(self, feed: Feed) -> str:
        while True:
            self._token = uuid.uuid4().hex
            out = self._serialize(feed)
            # Placeholders must be the only occurrences of the token.
            if out.count(self._token) == len(self._raw):
                break
            logger.debug("[Atom] Placeholder token found in feed text, retrying")

        # Raw markup bypasses escaping: swap each placeholder for its payload.
        marker = re.compile(re.escape(self._token) + r":(\d+):")
        out = marker.sub(lambda m: self._raw[int(m.group(1))], out)
        logger.debug(f"[Atom] Rendered {len(feed.entries)} entries, {len(out)} chars")
        return XML_HEADER + out

    def _serialize(self, feed: Feed) -> str:
        self._raw = []
        root = ET.Element("feed", xmlns=ATOM_NS)
        self._common(root, feed.attrs)
        ET.SubElement(root, "id").text = _clean(feed.id)
        self._feed_metadata(root, feed)
        for entry in feed.entries:
            self._entry(root, entry)

        ET.indent(root, space="  ")
        return ET.tostring(root, encoding="unicode", short_empty_elements=False)

    def write(self, feed: Feed, stream: TextIO) -> None:
        """Write the document to a text stream."""
        stream.write(self.format(feed))

    # ── element builders ──────────────────────────────────────────────

    def _marker(self, index: int) -> str:
        return f"{self._token}:{index}:"

    @staticmethod
    def _common(el: ET.Element, attrs: Optional[CommonAttributes]) -> None:
        if attrs is None:
            return
        if attrs.base:
            el.set(f"{{{XML_NS}}}base", _clean(attrs.base))
        if attrs.lang:
            el.set(f"{{{XML_NS}}}lang", _clean(attrs.lang))

    def _feed_metadata(self, parent: ET.Element, feed) -> None:
        """Elements shared by atom:feed and atom:source, in document order."""
        self._generator(parent, feed.generator)
        self._links(parent, feed.links)
        self._date(parent, "updated", feed.updated)
        self._text(parent, "title", feed.title)
        self._text(parent, "subtitle", feed.subtitle)
        if feed.icon is not None:
            ET.SubElement(parent, "icon").text = _clean(feed.icon)
        if feed.logo is not None:
            ET.SubElement(parent, "logo").text = _clean(feed.logo)
        self._categories(parent, feed.categories)
        self._person(parent, "author", feed.author)
        for contributor in feed.contributors:
            self._person(parent, "contributor", contributor)
        self._text(parent, "rights", feed.rights)

    def _entry(self, parent: ET.Element, entry: Entry) -> None:
        el = ET.SubElement(parent, "entry")
        self._common(el, entry.attrs)
        ET.SubElement(el, "id").text = _clean(entry.id)
        self._text(el, "title", entry.title)
        self._links(el, entry.links)
        self._date(el, "published", entry.published)
        self._date(el, "updated", entry.updated)
        self._person(el, "author", entry.author)
        self._categories(el, entry.categories)
        self._text(el, "rights", entry.rights)
        for contributor in entry.contributors:
            self._person(el, "contributor", contributor)
        self._source(el, entry.source)
        self._content(el, "summary", entry.summary)
        self._content(el, "content", entry.content)

    def _source(self, parent: ET.Element, source: Optional[Source]) -> None:
        if source is None:
            return
        el = ET.SubElement(parent, "source")
        self._common(el, source.attrs)
        if source.id is not None:
            ET.SubElement(el, "id").text = _clean(source.id)
        self._feed_metadata(el, source)

    @staticmethod
    def _generator(parent: ET.Element, generator: Optional[Generator]) -> None:
        if generator is None:
            return
        el = ET.SubElement(parent, "generator", _attrs(uri=generator.uri, version=generator.version))
        el.text = _clean(generator.value)

    @staticmethod
    def _links(parent: ET.Element, links: List[Link]) -> None:
        for link in links:
            attrib = {"href": _clean(link.href)}
            attrib.update(_attrs(rel=link.rel, type=link.type, hreflang=link.hreflang,
                                 title=link.title, length=link.length))
            ET.SubElement(parent, "link", attrib)

    @staticmethod
    def _categories(parent: ET.Element, categories: List[Category]) -> None:
        for category in categories:
            attrib = {"term": _clean(category.term)}
            attrib.update(_attrs(scheme=category.scheme, label=category.label))
            ET.SubElement(parent, "category", attrib)

    @staticmethod
    def _date(parent: ET.Element, tag: str, date: Optional[Date]) -> None:
        if date is not None:
            ET.SubElement(parent, tag).text = _clean(date.value)

    def _text(self, parent: ET.Element, tag: str, text: Optional[TextConstruct]) -> None:
        if text is None:
            return
        el = ET.SubElement(parent, tag, _attrs(type=text.type))
        self._common(el, text.attrs)
        el.text = _clean(text.value)

    @staticmethod
    def _person(parent: ET.Element, tag: str, person: Optional[Person]) -> None:
        if person is None:
            return
        el = ET.SubElement(parent, tag)
        ET.SubElement(el, "name").text = _clean(person.name)
        if person.email:
            ET.SubElement(el, "email").text = _clean(person.email)
        if person.uri:
            ET.SubElement(el, "uri").text = _clean(person.uri)

    def _content(self, parent: ET.Element, tag: str, content: Optional[Content]) -> None:
        if content is None:
            return
        if isinstance(content, ExternalContent):
            el = ET.SubElement(parent, tag, _attrs(type=content.type, src=content.src))
        else:
            el = ET.SubElement(parent, tag, _attrs(type=content.type))
        self._common(el, content.attrs)
        if isinstance(content, MarkupContent):
            el.text = self._marker(len(self._raw))
            self._raw.append(_clean(content.markup))
        elif not isinstance(content, ExternalContent):
            el.text = _clean(content.value)
