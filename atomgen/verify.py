"""Feed verification against the must-haves of RFC 4287.

Checks the existence of atom:id, atom:author, atom:title and atom:updated,
the shape of URIs, emails and dates, and the atom:content rules. Every
problem found across the feed and all of its entries is collected into a
:class:`VerificationReport`; nothing is raised and nothing is modified.

Usage:

    report = verify_feed(feed)
    for problem in report:
        print(problem)
    report.raise_for_problems()   # or raise VerificationError
"""
import logging
import re
from dataclasses import dataclass, field
from email.utils import parseaddr
from enum import Enum
from typing import Callable, Iterator, List, Optional
from urllib.parse import urlsplit

from atomgen.mediatypes import ContentKind, RESERVED_TYPES, content_kind, is_mime_type
from atomgen.models import Content, Date, Entry, ExternalContent, Feed, Link, MarkupContent, Person, Source, TextContent
from atomgen.utils import ZERO_TIME, parse_rfc3339

logger = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_WHITESPACE = re.compile(r"\s")


class ErrorKind(Enum):
    MALFORMED_URI = "malformed-uri"
    MALFORMED_EMAIL = "malformed-email"
    MISSING_FIELD = "missing-field"
    INVALID_DATE = "invalid-date"
    CONTENT_RULE = "content-rule"
    AUTHOR_RULE = "author-rule"


@dataclass(frozen=True)
class Problem:
    """One defect, located by a path such as ``feed/entry[2]/author``."""
    path: str
    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class VerificationError(ValueError):
    """Raised by :meth:`VerificationReport.raise_for_problems`."""

    def __init__(self, problems: List[Problem]):
        self.problems = list(problems)
        super().__init__("\n".join(str(p) for p in self.problems))


@dataclass
class VerificationReport:
    """Ordered problems found by a verification pass. Empty means the document is fine."""
    problems: List[Problem] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.problems

    def __len__(self) -> int:
        return len(self.problems)

    def __iter__(self) -> Iterator[Problem]:
        return iter(self.problems)

    def add(self, path: str, kind: ErrorKind, message: str) -> None:
        self.problems.append(Problem(path, kind, message))

    def check(self, path: str, kind: ErrorKind, func: Callable[..., None], *args) -> None:
        """Run a checker and record its ValueError, if any, as a problem."""
        try:
            func(*args)
        except ValueError as e:
            self.add(path, kind, str(e))

    def extend(self, other: "VerificationReport") -> None:
        self.problems.extend(other.problems)

    def by_path(self, prefix: str) -> List[Problem]:
        return [p for p in self.problems if p.path == prefix or p.path.startswith(prefix + "/")]

    def raise_for_problems(self) -> None:
        if self.problems:
            raise VerificationError(self.problems)


# ── Field checkers: return None or raise ValueError ───────────────────

def check_uri(uri: str) -> None:
    """An empty URI means "not set" and passes."""
    if not uri:
        return
    if uri.startswith(":"):
        raise ValueError(f"{uri!r} is not a valid URI: missing protocol scheme")
    if _CONTROL_CHARS.search(uri):
        raise ValueError(f"{uri!r} is not a valid URI: invalid control character")
    if _BAD_ESCAPE.search(uri):
        raise ValueError(f"{uri!r} is not a valid URI: invalid percent escape")
    try:
        urlsplit(uri)
    except ValueError as e:
        raise ValueError(f"{uri!r} is not a valid URI: {e}")


def check_email(email: str) -> None:
    """An empty email means "not set" and passes."""
    if not email:
        return
    # parseaddr is lenient about whitespace; check the addr-spec as written.
    spec = email.strip()
    if spec.endswith(">") and "<" in spec:
        spec = spec[spec.rindex("<") + 1:-1]
    local, _, domain = spec.rpartition("@")
    quoted = len(local) > 1 and local.startswith('"') and local.endswith('"')
    if (_WHITESPACE.search(local) and not quoted) or _WHITESPACE.search(domain):
        raise ValueError(f"{email!r} is not a valid email address: unquoted whitespace")

    _, address = parseaddr(email)
    local, _, domain = address.rpartition("@")
    if not local or not domain:
        raise ValueError(f"{email!r} is not a valid email address: missing @ or domain")


def check_id(identifier: str) -> None:
    if not identifier:
        raise ValueError("ID cannot be empty")
    check_uri(identifier)


def check_date(value: str) -> None:
    dt = parse_rfc3339(value)
    if dt == ZERO_TIME:
        raise ValueError(f"invalid date {value!r}: date is zero")


def content_is_empty(content: Optional[Content]) -> bool:
    if isinstance(content, TextContent):
        return not content.value
    if isinstance(content, MarkupContent):
        return not content.markup
    return True


def check_content(content: Optional[Content]) -> None:
    """Enforce RFC 4287 §4.1.3: src vs inline, and the right slot for the declared type."""
    if content is None:
        return
    ctype = content.type
    if isinstance(content, ExternalContent):
        check_uri(content.src)  # MUST be an IRI
        if ctype and not is_mime_type(ctype):  # SHOULD be given, MUST be a media type
            raise ValueError(f"invalid mime type {ctype!r}: content with src needs a media type")
        return
    if ctype not in RESERVED_TYPES and not is_mime_type(ctype):
        raise ValueError(f"invalid mime type: {ctype!r}")
    markup_type = content_kind(ctype) is ContentKind.MARKUP
    if isinstance(content, MarkupContent) and not markup_type:
        raise ValueError(f"type {ctype!r} takes text content, not markup")
    if isinstance(content, TextContent) and markup_type:
        raise ValueError(f"type {ctype!r} takes markup content, not text")


def needs_summary(content: Optional[Content]) -> Optional[str]:
    """Return why a summary is required for this content, or None.

    Applies to every base64-encoded or binary-typed payload alike.
    """
    if isinstance(content, ExternalContent):
        return "content has src attribute set"
    if isinstance(content, TextContent):
        if content.base64_encoded or content_kind(content.type) is ContentKind.BINARY:
            return "content is base64 encoded"
    return None


# ── Structural walkers ────────────────────────────────────────────────

def _verify_person(report: VerificationReport, path: str, person: Optional[Person]) -> None:
    if person is None:
        return
    if not person.name:
        report.add(path, ErrorKind.MISSING_FIELD, "name cannot be empty")
    report.check(path, ErrorKind.MALFORMED_EMAIL, check_email, person.email)
    report.check(path, ErrorKind.MALFORMED_URI, check_uri, person.uri)


def _verify_links(report: VerificationReport, path: str, links: List[Link]) -> None:
    for i, link in enumerate(links):
        link_path = f"{path}/link[{i}]"
        if not link.href:
            report.add(link_path, ErrorKind.MISSING_FIELD, "missing href")
        else:
            report.check(link_path, ErrorKind.MALFORMED_URI, check_uri, link.href)


def _verify_categories(report: VerificationReport, path: str, categories) -> None:
    for i, category in enumerate(categories):
        cat_path = f"{path}/category[{i}]"
        if not category.term:
            report.add(cat_path, ErrorKind.MISSING_FIELD, "missing term")
        report.check(cat_path, ErrorKind.MALFORMED_URI, check_uri, category.scheme)


def _verify_date(report: VerificationReport, path: str, date: Optional[Date], required: bool) -> None:
    if date is None:
        if required:
            report.add(path, ErrorKind.MISSING_FIELD, "missing date")
        return
    report.check(path, ErrorKind.INVALID_DATE, check_date, date.value)


def _verify_source(report: VerificationReport, path: str, source: Optional[Source]) -> None:
    if source is None:
        return
    if source.id is not None:
        report.check(path, ErrorKind.MALFORMED_URI, check_id, source.id)
    report.check(f"{path}/icon", ErrorKind.MALFORMED_URI, check_uri, source.icon or "")
    report.check(f"{path}/logo", ErrorKind.MALFORMED_URI, check_uri, source.logo or "")
    _verify_person(report, f"{path}/author", source.author)
    _verify_date(report, f"{path}/updated", source.updated, required=False)
    _verify_links(report, path, source.links)


def _has_author(person: Optional[Person]) -> bool:
    return person is not None and bool(person.name)


def check_authors_exist(feed: Feed) -> None:
    """A feed needs an author unless every one of its entries has one (RFC 4287 §4.1.1)."""
    if _has_author(feed.author):
        return
    if not feed.entries or not all(_has_author(e.author) for e in feed.entries):
        raise ValueError(
            "missing author: an atom feed must have an author unless all of its entries have an author"
        )


def verify_entry(entry: Entry, path: str = "entry") -> VerificationReport:
    """Check a single atom:entry."""
    report = VerificationReport()
    report.check(path, ErrorKind.MALFORMED_URI if entry.id else ErrorKind.MISSING_FIELD, check_id, entry.id)
    report.check(f"{path}/content", ErrorKind.CONTENT_RULE, check_content, entry.content)
    report.check(f"{path}/summary", ErrorKind.CONTENT_RULE, check_content, entry.summary)
    _verify_person(report, f"{path}/author", entry.author)
    for i, contributor in enumerate(entry.contributors):
        _verify_person(report, f"{path}/contributor[{i}]", contributor)
    if entry.title is None or not entry.title.value:
        report.add(path, ErrorKind.MISSING_FIELD, "missing title")
    _verify_date(report, f"{path}/updated", entry.updated, required=True)
    _verify_date(report, f"{path}/published", entry.published, required=False)
    _verify_links(report, path, entry.links)
    _verify_categories(report, path, entry.categories)
    _verify_source(report, f"{path}/source", entry.source)

    reason = needs_summary(entry.content)
    if reason and content_is_empty(entry.summary):
        report.add(f"{path}/summary", ErrorKind.CONTENT_RULE, f"need a summary because {reason}")
    return report


def verify_feed(feed: Feed) -> VerificationReport:
    """Check an atom:feed and every entry in it."""
    report = VerificationReport()
    report.check("feed", ErrorKind.MALFORMED_URI if feed.id else ErrorKind.MISSING_FIELD, check_id, feed.id)
    report.check("feed", ErrorKind.AUTHOR_RULE, check_authors_exist, feed)
    _verify_person(report, "feed/author", feed.author)
    for i, contributor in enumerate(feed.contributors):
        _verify_person(report, f"feed/contributor[{i}]", contributor)
    report.check("feed/icon", ErrorKind.MALFORMED_URI, check_uri, feed.icon or "")
    report.check("feed/logo", ErrorKind.MALFORMED_URI, check_uri, feed.logo or "")
    if feed.title is None or not feed.title.value:
        report.add("feed", ErrorKind.MISSING_FIELD, "missing title")
    _verify_date(report, "feed/updated", feed.updated, required=True)
    _verify_links(report, "feed", feed.links)
    _verify_categories(report, "feed", feed.categories)

    for i, entry in enumerate(feed.entries):
        report.extend(verify_entry(entry, path=f"feed/entry[{i}]"))

    logger.debug(f"[Verify] {feed.id or '<no id>'}: {len(report)} problem(s)")
    return report
