from datetime import date, timedelta

from almanac import html_utils, utils
from almanac.renderers import MarkdownRenderer

TODAY = date(2024, 6, 15)


def ago(days: int) -> str:
    return utils.time_ago(TODAY - timedelta(days=days), TODAY)


def test_time_ago_days():
    assert ago(0) == "today"
    assert ago(1) == "yesterday"
    assert ago(2) == "2 days ago"
    assert ago(29) == "29 days ago"


def test_time_ago_months_round_half_up():
    assert ago(30) == "1 month ago"
    assert ago(44) == "1 month ago"
    assert ago(45) == "2 months ago"
    assert ago(344) == "11 months ago"


def test_time_ago_years():
    assert ago(345) == "1 year ago"
    assert ago(400) == "1 year ago"
    assert ago(730) == "2 years ago"
    assert ago(912) == "2 years ago"
    assert ago(913) == "3 years ago"


def test_date_formats():
    assert utils.format_long_date(date(2024, 1, 5)) == "January 05, 2024"
    assert utils.format_iso_date(date(2024, 1, 5)) == "2024-01-05"


def test_count_words():
    assert utils.count_words("Hello, world! 2 words?") == 4
    assert utils.count_words("") == 0
    assert utils.count_words("don't stop") == 3


def test_slugify():
    assert utils.slugify("My First Journal Entry") == "my-first-journal-entry"
    assert utils.slugify("  Hello, World!  ") == "hello-world"
    assert utils.slugify("snake_case and   spaces") == "snake-case-and-spaces"
    assert utils.slugify("--dashes--") == "dashes"
    assert utils.slugify("!!!") == ""


def test_escape_xml():
    assert html_utils.escape_xml("Tom & Jerry's \"<b>\"") == (
        "Tom &amp; Jerry&apos;s &quot;&lt;b&gt;&quot;"
    )
    assert html_utils.escape_xml(42) == "42"


def test_summarize_strips_tags_and_collapses_whitespace():
    html = "<p>Hello\n  <em>there</em></p>\n<p>friend</p>"
    assert html_utils.summarize(html) == "Hello there friend"


def test_summarize_truncation_boundary():
    assert html_utils.summarize("a" * 150) == "a" * 150
    assert html_utils.summarize("a" * 200) == "a" * 200 + "..."
    assert html_utils.summarize(f"<p>{'b' * 250}</p>") == "b" * 200 + "..."


def test_markdown_renderer_basics():
    html = MarkdownRenderer().render(
        "# Title\n\n- one\n- two\n\n*em* and [link](https://example.com)\n"
    )
    assert '<h1 id="title">Title</h1>' in html
    assert "<li>one</li>" in html
    assert "<em>em</em>" in html
    assert '<a href="https://example.com">link</a>' in html


def test_markdown_renderer_code_blocks():
    renderer = MarkdownRenderer()
    highlighted = renderer.render("```python\nprint('hi')\n```\n")
    assert 'class="highlight"' in highlighted

    plain = renderer.render("```nosuchlang\n<tag>\n```\n")
    assert '<pre><code class="language-nosuchlang">&lt;tag&gt;' in plain


def test_markdown_renderer_duplicate_heading_ids():
    html = MarkdownRenderer().render("## Notes\n\n## Notes\n")
    assert 'id="notes"' in html
    assert 'id="notes-1"' in html
