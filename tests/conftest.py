"""Shared test fixtures."""
from datetime import datetime, timedelta, timezone

import pytest

from atomgen.builders import new_entry, new_feed, new_person
from atomgen.ids import entry_id, feed_id

NOW = datetime(2012, 12, 21, 8, 30, 15, tzinfo=timezone.utc)
BASE_URL = "https://example.com"


@pytest.fixture
def author():
    return new_person("Go Pher", "", "https://blog.golang.org/gopher")


@pytest.fixture
def coauthor():
    return new_person("Octo Cat", "octo@github.com", "https://octodex.github.com/")


@pytest.fixture
def blog_feed(author, coauthor):
    """Three-entry blog feed that passes verification."""
    fid = feed_id("example.com", NOW, "blog")
    d1 = NOW - timedelta(hours=72)
    d2 = NOW - timedelta(hours=48)
    d3 = NOW - timedelta(hours=12)
    entries = [
        new_entry(entry_id(fid, d1), "Article 1", BASE_URL + "/blog/1", author, d1, d1,
                  ["tech", "go"], b"<em>summary</em>", b"<h1>Header 1</h1>"),
        new_entry(entry_id(fid, d2), "Article 2", BASE_URL + "/blog/2", author, d2, None,
                  None, None, b"<h1>Header 2</h1>"),
        new_entry(entry_id(fid, d3), "Article 3", BASE_URL + "/blog/3", coauthor, d3, None,
                  ["dog", "cat"], b"I'm a cat!", b"<h1>Header 3</h1>"),
    ]
    return new_feed(fid, author, "example.com blog", "Get the very latest news from the net.",
                    BASE_URL, BASE_URL + "/feed.atom", NOW, entries)
