"""Convenience constructors for the common case of a blog-style feed.

For anything fancier, build the records in :mod:`atomgen.models` directly.
"""
from datetime import datetime
from typing import Iterable, List, Optional, Union

from atomgen.content import classify_content
from atomgen.models import Category, Date, Entry, Feed, Generator, Link, Person, TextConstruct
from atomgen.utils import format_rfc3339

GENERATOR_URI = "https://github.com/atomgen/atomgen"
GENERATOR_NAME = "atomgen"

new_content = classify_content


def _generator() -> Generator:
    from atomgen import __version__
    return Generator(value=GENERATOR_NAME, uri=GENERATOR_URI, version=__version__)


def new_date(dt: Optional[datetime]) -> Optional[Date]:
    """Wrap a datetime as an RFC 3339 date. No datetime, no date."""
    if dt is None:
        return None
    return Date(value=format_rfc3339(dt))


def new_person(name: str, email: str = "", uri: str = "") -> Person:
    return Person(name=name, email=email, uri=uri)


def new_category(term: str, scheme: str = "", label: str = "") -> Category:
    return Category(term=term, scheme=scheme, label=label)


def new_link(href: str, rel: str = "", type: str = "", hreflang: str = "", title: str = "", length: str = "") -> Link:
    return Link(href=href, rel=rel, type=type, hreflang=hreflang, title=title, length=length)


def new_feed(
    id: str,
    author: Optional[Person],
    title: str,
    subtitle: str,
    base_url: str,
    feed_url: str,
    updated: Optional[datetime],
    entries: Optional[List[Entry]] = None,
) -> Feed:
    """Create a feed with an alternate link to the site and a self link to the feed."""
    return Feed(
        id=id,
        generator=_generator(),
        links=[
            new_link(base_url, rel="alternate", type="text/html"),
            new_link(feed_url, rel="self", type="application/atom+xml"),
        ],
        updated=new_date(updated),
        title=TextConstruct(value=title),
        subtitle=TextConstruct(value=subtitle) if subtitle else None,
        author=author,
        entries=list(entries or []),
    )


def new_entry(
    id: str,
    title: str,
    permalink: str,
    author: Optional[Person],
    updated: Optional[datetime],
    published: Optional[datetime] = None,
    categories: Optional[Iterable[str]] = None,
    summary: Union[bytes, str, None] = None,
    content: Union[bytes, str, None] = None,
) -> Entry:
    """Create an entry whose summary and content are HTML."""
    return Entry(
        id=id,
        title=TextConstruct(value=title),
        links=[new_link(permalink, rel="alternate", type="text/html")],
        published=new_date(published),
        updated=new_date(updated),
        author=author,
        categories=[new_category(term) for term in (categories or [])],
        summary=classify_content("html", "", summary),
        content=classify_content("html", "", content),
    )
