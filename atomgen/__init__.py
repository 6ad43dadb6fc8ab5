"""atomgen: build, verify and serialize Atom 1.0 (RFC 4287) feeds."""
__version__ = "1.0.0"

from atomgen.builders import new_category, new_content, new_date, new_entry, new_feed, new_link, new_person
from atomgen.content import classify_content
from atomgen.ids import entry_id, feed_id
from atomgen.models import (
    Category, CommonAttributes, Content, Date, Entry, ExternalContent, Feed, Generator,
    Link, MarkupContent, Person, Source, TextConstruct, TextContent,
)
from atomgen.verify import ErrorKind, Problem, VerificationError, VerificationReport, verify_entry, verify_feed

__all__ = [
    "__version__",
    "new_category", "new_content", "new_date", "new_entry", "new_feed", "new_link", "new_person",
    "classify_content", "entry_id", "feed_id",
    "Category", "CommonAttributes", "Content", "Date", "Entry", "ExternalContent", "Feed", "Generator",
    "Link", "MarkupContent", "Person", "Source", "TextConstruct", "TextContent",
    "ErrorKind", "Problem", "VerificationError", "VerificationReport", "verify_entry", "verify_feed",
]
