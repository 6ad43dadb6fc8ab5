"""Permanent feed and entry identifiers using the ``tag`` URI scheme.

https://www.rfc-editor.org/rfc/rfc4151

A tag URI never depends on mutable content such as a post title or a
permalink, which is what RFC 4287 §4.2.6 asks of atom:id. Nothing here is
validated: degenerate input gives a degenerate ID and verification flags it.
"""
from datetime import date, datetime
from typing import Union

from atomgen.utils import to_utc


def feed_id(authority: str, owned: Union[date, datetime], specifier: str) -> str:
    """Build a feed ID from the authority name, the date it was owned, and a specifier.

    >>> feed_id("example.com", date(2005, 7, 18), "blog")
    'tag:example.com,2005-07-18:blog'
    """
    return f"tag:{authority},{owned.strftime('%Y-%m-%d')}:{specifier}"


def entry_id(feed_identifier: str, created: datetime) -> str:
    """Build an entry ID from its feed's ID and the entry's creation instant (UTC).

    Two entries created in the same second under one feed collide; keeping
    creation instants unique is up to the caller.

    >>> entry_id("tag:example.com,2005-07-18:blog", datetime(2017, 12, 21, 8, 30, 15))
    'tag:example.com,2005-07-18:blog.post-20171221083015'
    """
    return f"{feed_identifier}.post-{to_utc(created).strftime('%Y%m%d%H%M%S')}"
