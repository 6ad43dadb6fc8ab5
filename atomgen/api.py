"""Public Python API for atomgen, for use as a library.

Quick start:

    from datetime import datetime, timezone
    from atomgen.api import render_feed
    from atomgen.builders import new_entry, new_feed, new_person
    from atomgen.ids import entry_id, feed_id

    fid = feed_id("example.com", datetime(2005, 12, 21), "blog")
    now = datetime.now(timezone.utc)
    entry = new_entry(entry_id(fid, now), "Hello", "https://example.com/hello",
                      None, now, content="<p>Hi!</p>")
    feed = new_feed(fid, new_person("Go Pher"), "My blog", "", "https://example.com",
                    "https://example.com/feed.atom", now, [entry])

    xml, report = render_feed(feed)
    for problem in report:
        print(problem)

Verification is opt-in: pass ``verify=False`` to render a document as-is,
or ``strict=True`` to raise :class:`~atomgen.verify.VerificationError`
instead of rendering a feed with problems.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple, Union

from atomgen.formatters.atom import AtomFormatter
from atomgen.models import Feed
from atomgen.verify import VerificationReport, verify_feed

logger = logging.getLogger(__name__)


def render_feed(feed: Feed, *, verify: bool = True, strict: bool = False) -> Tuple[str, VerificationReport]:
    """Verify (optionally) and serialize a feed. Returns the XML and the report."""
    report = verify_feed(feed) if verify else VerificationReport()
    if strict:
        report.raise_for_problems()
    for problem in report:
        logger.warning(f"[Verify] {problem}")
    return AtomFormatter().format(feed), report


def write_feed(
    feed: Feed,
    path: Union[str, Path],
    *,
    verify: bool = True,
    strict: bool = False,
) -> VerificationReport:
    """Render a feed and write it as UTF-8 to ``path``."""
    xml, report = render_feed(feed, verify=verify, strict=strict)
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(xml, encoding="utf-8")
    logger.info(f"Wrote {len(feed.entries)} entries to {p}")
    return report
