import pytest

from almanac.collections import TagColors
from almanac.errors import MissingTemplateError
from almanac.templates import (
    TemplateLoader,
    create_resource_environment,
    render_layout,
    render_tags,
    substitute,
)


def test_substitute_first_replaces_only_first_occurrence():
    result = substitute("{{a}}-{{a}}-{{b}}", {"{{a}}": "x", "{{b}}": "y"})
    assert result == "x-{{a}}-y"


def test_substitute_all_replaces_every_occurrence():
    result = substitute("{{a}}-{{a}}-{{b}}", {"{{a}}": "x", "{{b}}": "y"}, mode="all")
    assert result == "x-x-y"


def test_substitute_does_not_rescan_inserted_values():
    template = "<h1>{{title}}</h1>{{body}}<time>{{date}}</time>"
    result = substitute(
        template,
        {"{{title}}": "T", "{{body}}": "<p>use {{date}} here</p>", "{{date}}": "D"},
    )
    assert result == "<h1>T</h1><p>use {{date}} here</p><time>D</time>"


def test_substitute_distinguishes_prefix_tokens():
    result = substitute(
        "{{date}} {{date_ago}}", {"{{date}}": "May 01", "{{date_ago}}": "today"}
    )
    assert result == "May 01 today"


def test_substitute_leaves_unknown_tokens_and_rejects_bad_mode():
    assert substitute("{{x}}", {}) == "{{x}}"
    assert substitute("{{x}}", {"{{y}}": "1"}) == "{{x}}"
    with pytest.raises(ValueError):
        substitute("{{x}}", {"{{x}}": "1"}, mode="some")


def test_template_loader(tmp_path):
    (tmp_path / "entry.html").write_text("<b>{{title}}</b>", encoding="utf-8")
    loader = TemplateLoader(tmp_path)
    assert loader.load("entry.html") == "<b>{{title}}</b>"
    with pytest.raises(MissingTemplateError) as excinfo:
        loader.load("missing.html")
    assert excinfo.value.source_path == tmp_path / "missing.html"


def test_render_layout():
    layout = (
        "<title>{{page_title}}</title><link href=\"{{css_path}}\">"
        "<a href=\"{{root}}\">home</a><a href=\"{{root}}all/\">all</a>"
        "<main>{{content}}</main>"
    )
    html = render_layout(layout, "<p>{{root}}</p>", "Post", "Journal", "../../")
    assert html == (
        "<title>Post – Journal</title><link href=\"../../style.css\">"
        "<a href=\"../../\">home</a><a href=\"../../all/\">all</a>"
        "<main><p>{{root}}</p></main>"
    )

    bare = render_layout(layout, "", None, "Journal")
    assert "<title>Journal</title>" in bare
    assert 'href="style.css"' in bare


def test_render_tags():
    colors = TagColors({"code": "#094fff"})
    assert render_tags([], colors) == ""
    assert render_tags(("code", "misc"), colors) == (
        '<span class="tags">'
        '<span class="tag" style="background-color: #094fff">code</span> '
        '<span class="tag" style="background-color: #666">misc</span>'
        "</span>"
    )


def test_post_skeleton_quotes_title():
    template = create_resource_environment().get_template("post.md.jinja")
    text = template.render(title='Say "hi": now', date="2024-01-01", slug="say-hi-now")
    assert 'title: "Say \\"hi\\": now"' in text
    assert "date: 2024-01-01" in text
    assert "status: draft" in text
