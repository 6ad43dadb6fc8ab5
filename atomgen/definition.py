"""YAML/JSON feed definitions.

A definition file describes a whole feed in plain data and is turned into
a :class:`~atomgen.models.Feed` with the builders:

    # blog.yaml
    authority: example.com
    owned: 2005-12-21
    specifier: blog
    title: example.com blog
    subtitle: Get the very latest news from the net.
    base_url: https://example.com
    feed_url: https://example.com/feed.atom
    updated: 2015-03-21T08:30:15Z
    lang: en
    author:
      name: Go Pher
      uri: https://blog.golang.org/gopher
    entries:
      - title: Article 1
        permalink: https://example.com/post/1
        created: 2012-10-21T08:30:15Z
        updated: 2012-10-21T08:30:15Z
        categories: [tech, go]
        summary: <em>go go go</em>
        content: <h1>Header 1</h1>
      - title: Logo
        permalink: https://example.com/post/2
        updated: 2012-12-21T08:30:15Z
        summary: Our new logo.
        content_type: image/png
        content_file: logo.png     # relative to the definition file

``id`` may be given instead of authority/owned/specifier, on the feed and on
each entry. Entries without an ``id`` get one from their ``created`` date,
falling back to ``published`` and then ``updated``.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from atomgen.builders import new_category, new_entry, new_feed, new_link, new_person
from atomgen.content import classify_content
from atomgen.ids import entry_id, feed_id
from atomgen.models import Category, CommonAttributes, Entry, Feed, Link, Person, TextConstruct
from atomgen.utils import parse_datetime

logger = logging.getLogger(__name__)


def load_definition(path: str) -> Dict[str, Any]:
    """Read a definition file (.yaml, .yml or .json) into a dict."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Definition file not found: {path}")

    content = p.read_text(encoding="utf-8")

    if p.suffix in (".yaml", ".yml"):
        import yaml
        data = yaml.safe_load(content)
    elif p.suffix == ".json":
        data = json.loads(content)
    else:
        raise ValueError(f"Unsupported definition file format: {p.suffix} (use .yaml, .yml, or .json)")

    if not isinstance(data, dict):
        raise ValueError("Definition file must contain a mapping of feed fields")
    if "entries" in data and not isinstance(data["entries"], list):
        raise ValueError("'entries' must be a list")
    return data


def _date(value):
    return parse_datetime(value) if value is not None else None


def _person(value) -> Optional[Person]:
    if value is None:
        return None
    if isinstance(value, str):
        return new_person(value)
    if isinstance(value, dict):
        return new_person(value.get("name", ""), value.get("email", ""), value.get("uri", ""))
    raise ValueError(f"Invalid person {value!r}: expected a name or a mapping with 'name'")


def _people(values) -> List[Person]:
    return [_person(v) for v in (values or [])]


def _category(value) -> Category:
    if isinstance(value, dict):
        if "term" not in value:
            raise ValueError(f"Category {value!r} must have a 'term'")
        return new_category(value["term"], value.get("scheme", ""), value.get("label", ""))
    return new_category(str(value))


def _links(values) -> List[Link]:
    links = []
    for i, v in enumerate(values or []):
        if not isinstance(v, dict) or "href" not in v:
            raise ValueError(f"Link #{i+1} must be a dict with at least 'href'")
        links.append(new_link(v["href"], v.get("rel", ""), v.get("type", ""),
                              v.get("hreflang", ""), v.get("title", ""), str(v.get("length", ""))))
    return links


def _common(data: Dict[str, Any]) -> Optional[CommonAttributes]:
    if data.get("lang") or data.get("base"):
        return CommonAttributes(base=data.get("base", ""), lang=data.get("lang", ""))
    return None


def _feed_identifier(data: Dict[str, Any]) -> str:
    if data.get("id"):
        return str(data["id"])
    if "authority" in data:
        owned = parse_datetime(data.get("owned", "")).date()
        return feed_id(str(data["authority"]), owned, str(data.get("specifier", "")))
    raise ValueError("Definition needs either 'id' or 'authority' (with 'owned' and 'specifier')")


def _entry(data: Dict[str, Any], index: int, feed_identifier: str, base_dir: Path) -> Entry:
    if not isinstance(data, dict):
        raise ValueError(f"Entry #{index+1} must be a mapping")
    updated = _date(data.get("updated"))
    published = _date(data.get("published"))

    identifier = str(data.get("id") or "")
    if not identifier:
        created = _date(data.get("created")) or published or updated
        if created is not None:
            identifier = entry_id(feed_identifier, created)
        else:
            logger.warning(f"[Definition] Entry #{index+1} has no id and no date to derive one from")

    entry = new_entry(
        identifier,
        data.get("title", ""),
        data.get("permalink", ""),
        _person(data.get("author")),
        updated,
        published=published,
        summary=data.get("summary"),
        content=data.get("content"),
    )
    if not data.get("permalink"):
        entry.links = []
    entry.links.extend(_links(data.get("links")))
    entry.categories = [_category(c) for c in data.get("categories") or []]
    entry.contributors = _people(data.get("contributors"))
    if data.get("rights"):
        entry.rights = TextConstruct(value=data["rights"])
    entry.attrs = _common(data)

    if "content_type" in data or "content_src" in data or "content_file" in data:
        payload = data.get("content")
        if data.get("content_file"):
            payload = (base_dir / data["content_file"]).read_bytes()
        entry.content = classify_content(data.get("content_type", ""), data.get("content_src", ""), payload)
    if "summary_type" in data:
        entry.summary = classify_content(data["summary_type"], "", data.get("summary"))
    return entry


def build_feed(data: Dict[str, Any], base_dir: Optional[Path] = None) -> Feed:
    """Turn a definition mapping into a Feed. Raises ValueError on malformed input."""
    base_dir = base_dir or Path(".")
    identifier = _feed_identifier(data)
    entries = [_entry(e, i, identifier, base_dir) for i, e in enumerate(data.get("entries") or [])]

    feed = new_feed(
        identifier,
        _person(data.get("author")),
        data.get("title", ""),
        data.get("subtitle", ""),
        data.get("base_url", ""),
        data.get("feed_url", ""),
        _date(data.get("updated")),
        entries,
    )
    # Only keep the builder's links for the URLs actually given.
    feed.links = [link for link in feed.links if link.href]
    feed.links.extend(_links(data.get("links")))
    feed.categories = [_category(c) for c in data.get("categories") or []]
    feed.contributors = _people(data.get("contributors"))
    feed.icon = data.get("icon")
    feed.logo = data.get("logo")
    if data.get("rights"):
        feed.rights = TextConstruct(value=data["rights"])
    feed.attrs = _common(data)
    return feed


def load_feed(path: str) -> Feed:
    """Load a definition file and build its feed."""
    data = load_definition(path)
    feed = build_feed(data, base_dir=Path(path).parent)
    logger.info(f"Loaded feed {feed.id} with {len(feed.entries)} entries from {path}")
    return feed
