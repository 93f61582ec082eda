import json
from dataclasses import replace
from datetime import date
from xml.etree import ElementTree

from almanac.build import build_context
from almanac.collections import PostCollection, TagColors
from almanac.config import SiteConfig, load_config
from almanac.content import Post
from almanac.feeds import (
    AtomFeedGenerator,
    JsonManifestGenerator,
    create_default_feed_registry,
)
from almanac.pages import RenderContext
from almanac.renderers import MarkdownRenderer
from almanac.templates import TemplateLoader

ATOM = "{http://www.w3.org/2005/Atom}"
TODAY = date(2024, 3, 11)


def make_post(slug, title=None, day=date(2024, 1, 1), body_html="<p>Body</p>", updated=None):
    return Post(
        title=title or slug.upper(),
        date=day,
        tags=(),
        slug=slug,
        body_html=body_html,
        word_count=1,
        updated=updated,
    )


def make_context(tmp_path, posts, **config):
    site = SiteConfig(project_root=tmp_path, **config)
    return RenderContext(
        config=site,
        posts=PostCollection(posts),
        tag_colors=TagColors({}),
        templates=TemplateLoader(site.templates_path),
        markdown=MarkdownRenderer(),
        today=TODAY,
        output_dir=tmp_path / "public",
    )


def test_json_manifest_shape(tmp_path):
    context = make_context(tmp_path, [make_post("a", title="A")])
    assert json.loads(JsonManifestGenerator().generate(context)) == [
        {"title": "A", "url": "/posts/a/"}
    ]


def test_json_manifest_pretty_printed(tmp_path):
    context = make_context(tmp_path, [make_post("a", title="Ünïcode")])
    assert JsonManifestGenerator().generate(context) == (
        '[\n  {\n    "title": "Ünïcode",\n    "url": "/posts/a/"\n  }\n]'
    )
    assert JsonManifestGenerator().generate(make_context(tmp_path, [])) == "[]"


def test_atom_feed_document(tmp_path):
    posts = [
        make_post(
            "b",
            title="Tom & \"Jerry's\" <cat>",
            day=date(2024, 3, 1),
            body_html="<p>Fish & <em>chips</em></p>",
            updated=date(2024, 3, 5),
        ),
        make_post("a", day=date(2024, 1, 1)),
    ]
    context = make_context(
        tmp_path, posts, site_url="https://example.com/", title="Notes", author="Ann O'Nym"
    )
    xml = AtomFeedGenerator().generate(context)

    assert xml.startswith('<?xml version="1.0" encoding="utf-8"?>\n<feed')
    assert "<title>Tom &amp; &quot;Jerry&apos;s&quot; &lt;cat&gt;</title>" in xml
    assert "<name>Ann O&apos;Nym</name>" in xml
    assert (
        '<content type="html">&lt;p&gt;Fish &amp; &lt;em&gt;chips&lt;/em&gt;&lt;/p&gt;</content>'
    ) in xml

    root = ElementTree.fromstring(xml.encode("utf-8"))
    assert root.find(f"{ATOM}title").text == "Notes"
    links = root.findall(f"{ATOM}link")
    assert links[0].get("href") == "https://example.com/feed.xml"
    assert links[0].get("rel") == "self"
    assert links[1].get("href") == "https://example.com/"
    assert root.find(f"{ATOM}updated").text == "2024-03-01"
    assert root.find(f"{ATOM}id").text == "https://example.com/"

    entries = root.findall(f"{ATOM}entry")
    assert len(entries) == 2
    first, second = entries
    assert first.find(f"{ATOM}title").text == "Tom & \"Jerry's\" <cat>"
    assert first.find(f"{ATOM}link").get("href") == "https://example.com/posts/b/"
    assert first.find(f"{ATOM}id").text == "https://example.com/posts/b/"
    assert first.find(f"{ATOM}published").text == "2024-03-01"
    assert first.find(f"{ATOM}updated").text == "2024-03-05"
    assert first.find(f"{ATOM}summary").text == "Fish & chips"
    assert first.find(f"{ATOM}content").text == "<p>Fish & <em>chips</em></p>"
    assert second.find(f"{ATOM}updated").text == "2024-01-01"


def test_atom_feed_limits_entries(tmp_path):
    posts = [make_post(f"p{i:02d}", day=date(2024, 1, 1)) for i in range(25)]
    context = make_context(tmp_path, posts)
    root = ElementTree.fromstring(AtomFeedGenerator().generate(context).encode("utf-8"))
    entries = root.findall(f"{ATOM}entry")
    assert len(entries) == 20
    assert entries[-1].find(f"{ATOM}id").text.endswith("/posts/p19/")


def test_atom_feed_empty_uses_today(tmp_path):
    context = make_context(tmp_path, [])
    root = ElementTree.fromstring(AtomFeedGenerator().generate(context).encode("utf-8"))
    assert root.find(f"{ATOM}updated").text == "2024-03-11"
    assert root.findall(f"{ATOM}entry") == []


def test_atom_summary_truncation(tmp_path):
    exact = make_post("exact", body_html="<p>" + "x" * 200 + "</p>")
    short = make_post("short", body_html="<p>" + "y" * 150 + "</p>")
    context = make_context(tmp_path, [exact, short])
    root = ElementTree.fromstring(AtomFeedGenerator().generate(context).encode("utf-8"))
    summaries = [e.find(f"{ATOM}summary").text for e in root.findall(f"{ATOM}entry")]
    assert summaries == ["x" * 200 + "...", "y" * 150]


def test_registry_writes_both_feeds(project):
    context = build_context(load_config(project), today=TODAY)
    context.output_dir.mkdir(parents=True)
    written = create_default_feed_registry().generate_all(context)
    assert [p.name for p in written] == ["posts.json", "feed.xml"]

    manifest = json.loads((context.output_dir / "posts.json").read_text(encoding="utf-8"))
    assert [item["url"] for item in manifest] == [
        "/posts/second/",
        "/posts/the-third/",
        "/posts/first/",
    ]
    feed = (context.output_dir / "feed.xml").read_text(encoding="utf-8")
    assert "<name>Ada &amp; Co</name>" in feed
    assert "https://journal.example.com/posts/second/" in feed


def test_feed_limit_from_config(project):
    config = replace(load_config(project), feed_limit=1)
    context = build_context(config, today=TODAY)
    root = ElementTree.fromstring(AtomFeedGenerator().generate(context).encode("utf-8"))
    assert len(root.findall(f"{ATOM}entry")) == 1
