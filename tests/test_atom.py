"""Tests for the Atom document writer."""
import base64
import io
import xml.etree.ElementTree as ET
from datetime import datetime, timezone

from atomgen import __version__
from atomgen.builders import new_date, new_entry, new_feed, new_link, new_person
from atomgen.content import classify_content
from atomgen.formatters.atom import AtomFormatter
from atomgen.ids import entry_id, feed_id
from atomgen.models import (
    CommonAttributes, ExternalContent, Feed, MarkupContent, Person, Source, TextConstruct,
)

ATOM_NS = "http://www.w3.org/2005/Atom"
XHTML = '<div xmlns="http://www.w3.org/1999/xhtml"><p>Fish &amp; <b>chips</b></p></div>'

EXPECTED = f"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <id>tag:example.com,2012-12-21:blog</id>
  <generator uri="https://github.com/atomgen/atomgen" version="{__version__}">atomgen</generator>
  <link href="https://example.com" rel="alternate" type="text/html"></link>
  <link href="https://example.com/feed.atom" rel="self" type="application/atom+xml"></link>
  <updated>2012-12-21T08:30:15Z</updated>
  <title>example.com blog</title>
  <subtitle>Get the very latest news from the net.</subtitle>
  <author>
    <name>Go Pher</name>
    <uri>https://blog.golang.org/gopher</uri>
  </author>
  <entry>
    <id>tag:example.com,2012-12-21:blog.post-20121218083015</id>
    <title>Article 1</title>
    <link href="https://example.com/blog/1" rel="alternate" type="text/html"></link>
    <published>2012-12-18T08:30:15Z</published>
    <updated>2012-12-18T08:30:15Z</updated>
    <author>
      <name>Go Pher</name>
      <uri>https://blog.golang.org/gopher</uri>
    </author>
    <category term="tech"></category>
    <category term="go"></category>
    <summary type="html">&lt;em&gt;summary&lt;/em&gt;</summary>
    <content type="html">&lt;h1&gt;Header 1&lt;/h1&gt;</content>
  </entry>
  <entry>
    <id>tag:example.com,2012-12-21:blog.post-20121219083015</id>
    <title>Article 2</title>
    <link href="https://example.com/blog/2" rel="alternate" type="text/html"></link>
    <updated>2012-12-19T08:30:15Z</updated>
    <author>
      <name>Go Pher</name>
      <uri>https://blog.golang.org/gopher</uri>
    </author>
    <content type="html">&lt;h1&gt;Header 2&lt;/h1&gt;</content>
  </entry>
  <entry>
    <id>tag:example.com,2012-12-21:blog.post-20121220203015</id>
    <title>Article 3</title>
    <link href="https://example.com/blog/3" rel="alternate" type="text/html"></link>
    <updated>2012-12-20T20:30:15Z</updated>
    <author>
      <name>Octo Cat</name>
      <email>octo@github.com</email>
      <uri>https://octodex.github.com/</uri>
    </author>
    <category term="dog"></category>
    <category term="cat"></category>
    <summary type="html">I'm a cat!</summary>
    <content type="html">&lt;h1&gt;Header 3&lt;/h1&gt;</content>
  </entry>
</feed>"""


def _ns(tag):
    return f"{{{ATOM_NS}}}{tag}"


def _minimal_feed(*entries) -> Feed:
    now = datetime(2017, 12, 22, 8, 30, 15, tzinfo=timezone.utc)
    return Feed(id="tag:example.com,2017-12-22:blog", title=TextConstruct("Blog"),
                updated=new_date(now), author=new_person("Go Pher"), entries=list(entries))


class TestAtomFormatter:
    def test_blog_feed(self, blog_feed):
        assert AtomFormatter().format(blog_feed) == EXPECTED

    def test_deterministic(self, blog_feed):
        fmt = AtomFormatter()
        assert fmt.format(blog_feed) == fmt.format(blog_feed)
        assert AtomFormatter().format(blog_feed) == fmt.format(blog_feed)

    def test_well_formed(self, blog_feed):
        root = ET.fromstring(AtomFormatter().format(blog_feed).encode("utf-8"))
        assert root.tag == _ns("feed")
        assert len(root.findall(_ns("entry"))) == 3

    def test_write_to_stream(self, blog_feed):
        buf = io.StringIO()
        AtomFormatter().write(blog_feed, buf)
        assert buf.getvalue() == EXPECTED

    def test_no_trailing_newline(self, blog_feed):
        assert AtomFormatter().format(blog_feed).endswith("</feed>")

    def test_lang_and_base(self):
        feed = _minimal_feed()
        feed.attrs = CommonAttributes(base="https://example.com/", lang="en")
        out = AtomFormatter().format(feed)
        assert '<feed xmlns="http://www.w3.org/2005/Atom" xml:base="https://example.com/" xml:lang="en">' in out
        assert "xmlns:xml" not in out

    def test_omits_absent_optionals(self):
        out = AtomFormatter().format(_minimal_feed())
        for tag in ("<generator", "<subtitle", "<icon", "<logo", "<rights", "<link", "<category",
                    "<contributor", "<entry", "<email", "<uri"):
            assert tag not in out
        assert "<id>tag:example.com,2017-12-22:blog</id>" in out

    def test_entry_id_always_written(self):
        entry = new_entry("", "Untitled", "https://example.com/1", None, None)
        out = AtomFormatter().format(_minimal_feed(entry))
        assert "<id></id>" in out

    def test_escapes_text(self):
        feed = _minimal_feed()
        feed.title = TextConstruct("Fish & Chips <daily>")
        out = AtomFormatter().format(feed)
        assert "<title>Fish &amp; Chips &lt;daily&gt;</title>" in out

    def test_text_construct_type(self):
        feed = _minimal_feed()
        feed.rights = TextConstruct("&copy; 2017", type="html")
        assert '<rights type="html">&amp;copy; 2017</rights>' in AtomFormatter().format(feed)


class TestContent:
    def _render(self, content, summary=None):
        entry = new_entry("tag:example.com,2017-12-22:blog.post-1", "Post", "https://example.com/1",
                          None, datetime(2017, 12, 22, tzinfo=timezone.utc))
        entry.content = content
        entry.summary = summary
        return AtomFormatter().format(_minimal_feed(entry))

    def test_xhtml_written_verbatim(self):
        out = self._render(MarkupContent(markup=XHTML, type="xhtml"))
        assert f'<content type="xhtml">{XHTML}</content>' in out

    def test_xml_media_type_verbatim(self):
        svg = '<svg xmlns="http://www.w3.org/2000/svg"><circle r="1"/></svg>'
        out = self._render(classify_content("image/svg+xml", "", svg))
        assert f'<content type="image/svg+xml">{svg}</content>' in out

    def test_markup_in_summary(self):
        out = self._render(None, summary=MarkupContent(markup=XHTML))
        assert f'<summary type="xhtml">{XHTML}</summary>' in out

    def test_many_markup_payloads_keep_their_place(self):
        entries = []
        for i in range(12):
            entry = new_entry(f"tag:example.com,2017-12-22:blog.post-{i}", f"Post {i}",
                              f"https://example.com/{i}", None, datetime(2017, 12, 22, tzinfo=timezone.utc))
            entry.content = MarkupContent(markup=f"<div>payload {i}</div>")
            entries.append(entry)
        root = ET.fromstring(AtomFormatter().format(_minimal_feed(*entries)).encode("utf-8"))
        for i, el in enumerate(root.findall(_ns("entry"))):
            content = el.find(_ns("content"))
            assert content.find(_ns("div")).text == f"payload {i}"

    def test_external_content(self):
        out = self._render(ExternalContent(src="https://example.com/video.mp4", type="video/mp4"),
                           summary=classify_content("text", "", "A short video."))
        assert '<content type="video/mp4" src="https://example.com/video.mp4"></content>' in out
        assert '<summary type="text">A short video.</summary>' in out

    def test_external_content_without_type(self):
        out = self._render(ExternalContent(src="https://example.com/a"))
        assert '<content src="https://example.com/a"></content>' in out

    def test_content_lang(self):
        out = self._render(classify_content("text", "", "bonjour"))
        assert '<content type="text">bonjour</content>' in out
        content = classify_content("text", "", "bonjour")
        content.attrs = CommonAttributes(lang="fr")
        out = self._render(content)
        assert '<content type="text" xml:lang="fr">bonjour</content>' in out


class TestSource:
    def test_source_element(self):
        entry = new_entry("tag:example.com,2017-12-22:blog.post-1", "Post", "https://example.com/1",
                          None, datetime(2017, 12, 22, tzinfo=timezone.utc))
        entry.source = Source(id="tag:other.example,2016-01-01:news", title=TextConstruct("Other news"),
                              author=Person(name="Someone Else"), rights=TextConstruct("CC-BY"))
        root = ET.fromstring(AtomFormatter().format(_minimal_feed(entry)).encode("utf-8"))
        source = root.find(_ns("entry")).find(_ns("source"))
        assert [child.tag for child in source] == [_ns("id"), _ns("title"), _ns("author"), _ns("rights")]
        assert source.find(_ns("id")).text == "tag:other.example,2016-01-01:news"

    def test_source_without_id(self):
        entry = new_entry("tag:example.com,2017-12-22:blog.post-1", "Post", "https://example.com/1",
                          None, datetime(2017, 12, 22, tzinfo=timezone.utc))
        entry.source = Source(title=TextConstruct("Other news"))
        out = AtomFormatter().format(_minimal_feed(entry))
        assert "<source>" in out
        assert "<source>\n      <id>" not in out


class TestEndToEnd:
    def test_binary_entry_with_coauthor(self, author, coauthor):
        """One html entry and one gif entry with its own author and a summary."""
        owned = datetime(2005, 12, 21, tzinfo=timezone.utc)
        fid = feed_id("example.com", owned, "blog")
        t1 = datetime(2012, 10, 21, 8, 30, 15, tzinfo=timezone.utc)
        t2 = datetime(2012, 12, 21, 8, 30, 15, tzinfo=timezone.utc)
        gif = base64.b64decode("R0lGODlhAQABAIAAAP///wAAACwAAAAAAQABAAACAkQBADs=")

        post = new_entry(entry_id(fid, t1), "Article 1", "https://example.com/post/1", None, t1, t1,
                         ["tech", "go"], "<em>go go go</em>", "<h1>Header 1</h1>")
        logo = new_entry(entry_id(fid, t2), "Logo", "https://example.com/post/2", coauthor, t2,
                         summary="Our new logo.")
        logo.content = classify_content("image/gif", "", gif)
        feed = new_feed(fid, author, "example.com blog", "", "https://example.com",
                        "https://example.com/feed.atom", t2, [post, logo])

        out = AtomFormatter().format(feed)
        assert "<id>tag:example.com,2005-12-21:blog</id>" in out
        assert "<id>tag:example.com,2005-12-21:blog.post-20121021083015</id>" in out
        assert "<id>tag:example.com,2005-12-21:blog.post-20121221083015</id>" in out
        assert f'<content type="image/gif">{base64.b64encode(gif).decode("ascii")}</content>' in out
        assert '<summary type="html">Our new logo.</summary>' in out
        assert "<subtitle" not in out

        root = ET.fromstring(out.encode("utf-8"))
        second = root.findall(_ns("entry"))[1]
        assert second.find(_ns("author")).find(_ns("email")).text == "octo@github.com"


class TestEscaping:
    LOOKALIKE = "see \ue0000\ue001 here"

    def test_private_use_text_without_markup(self):
        feed = _minimal_feed()
        feed.title = TextConstruct(self.LOOKALIKE)
        root = ET.fromstring(AtomFormatter().format(feed).encode("utf-8"))
        assert root.find(_ns("title")).text == self.LOOKALIKE

    def test_private_use_text_next_to_markup(self):
        entry = new_entry("tag:example.com,2017-12-22:blog.post-1", self.LOOKALIKE, "https://example.com/1",
                          None, datetime(2017, 12, 22, tzinfo=timezone.utc))
        entry.content = MarkupContent(markup='<div xmlns="http://www.w3.org/1999/xhtml">x</div>')
        out = AtomFormatter().format(_minimal_feed(entry))
        assert out.count("<div") == 1
        root = ET.fromstring(out.encode("utf-8"))
        assert root.find(_ns("entry")).find(_ns("title")).text == self.LOOKALIKE

    def test_placeholder_shaped_text_kept(self):
        entry = new_entry("tag:example.com,2017-12-22:blog.post-1", "0123456789abcdef0123456789abcdef:0:",
                          "https://example.com/1", None, datetime(2017, 12, 22, tzinfo=timezone.utc))
        entry.content = MarkupContent(markup="<div>payload</div>")
        out = AtomFormatter().format(_minimal_feed(entry))
        assert "<title>0123456789abcdef0123456789abcdef:0:</title>" in out
        assert '<content type="xhtml"><div>payload</div></content>' in out

    def test_control_characters_replaced(self):
        feed = _minimal_feed()
        feed.title = TextConstruct("a\x01b")
        feed.author = Person(name="Go\x00Pher", email="go@example.com\x0b")
        feed.links = [new_link("https://example.com/\x1f", rel="alternate", title="t\x08")]
        entry = new_entry("tag:example.com,2017-12-22:blog.post-1", "Post", "https://example.com/1",
                          None, datetime(2017, 12, 22, tzinfo=timezone.utc))
        entry.content = classify_content("text", "", "tab\tnew\nline\x0c")
        feed.entries = [entry]

        out = AtomFormatter().format(feed)
        root = ET.fromstring(out.encode("utf-8"))
        assert root.find(_ns("title")).text == "a\ufffdb"
        assert root.find(_ns("author")).find(_ns("name")).text == "Go\ufffdPher"
        link = root.find(_ns("link"))
        assert link.get("href") == "https://example.com/\ufffd"
        assert link.get("title") == "t\ufffd"
        assert root.find(_ns("entry")).find(_ns("content")).text == "tab\tnew\nline\ufffd"
