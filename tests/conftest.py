from pathlib import Path

import pytest

TEMPLATES = {
    "layout.html": (
        "<html><head><title>{{page_title}}</title>"
        '<link rel="stylesheet" href="{{css_path}}">'
        '<link rel="alternate" href="{{root}}feed.xml">'
        '<link rel="home" href="{{root}}"></head>'
        "<body>{{content}}</body></html>"
    ),
    "entry.html": (
        "<article><h1>{{title}}</h1><time>{{date}}</time>"
        "<span>{{date_ago}}</span>{{tags}}{{body}}</article>"
    ),
    "about.html": "<section><h2>{{title}}</h2>{{body}}</section>",
    "all.html": "<select>{{tag_options}}</select><ul>\n{{items}}\n</ul>",
    "all-item.html": (
        '<li data-tags="{{tags_plain}}"><a href="/posts/{{slug}}/" title="{{title}}">'
        "{{title}}</a> {{date}} {{word_count}} {{tags}} ({{slug}})</li>"
    ),
    "recent.html": "<section>\n{{entries}}\n</section>",
    "recent-entry.html": (
        '<article><a href="posts/{{slug}}/">{{title}}</a>'
        "<time>{{date}}</time>{{tags}}{{body}}</article>"
    ),
    "style.css": "body { color: black; }",
}


def write_post(project: Path, name: str, front: str, body: str = "Some body text.") -> Path:
    posts = project / "content" / "posts"
    posts.mkdir(parents=True, exist_ok=True)
    path = posts / name
    path.write_text(f"---\n{front}\n---\n{body}", encoding="utf-8")
    return path


def create_project(root: Path) -> Path:
    templates = root / "templates"
    templates.mkdir(parents=True)
    for name, text in TEMPLATES.items():
        (templates / name).write_text(text, encoding="utf-8")
    (root / "almanac.yaml").write_text(
        "title: Journal\nauthor: Ada & Co\nsite_url: https://journal.example.com/\n",
        encoding="utf-8",
    )
    write_post(
        root,
        "first.md",
        "title: First\ndate: 2024-01-01\ntags: [life]\nstatus: published",
        "Hello, world! 2 words?",
    )
    write_post(
        root,
        "second.md",
        "title: Second & more\ndate: 2024-03-01\ntags: [code, life]\nstatus: published",
        "# Second\n\nSome <b>bold</b> text.",
    )
    write_post(
        root,
        "third.md",
        "title: Third\ndate: 2024-02-01\nslug: the-third\nstatus: published",
        "Third body.",
    )
    write_post(root, "draft.md", "title: Draft\ndate: 2024-04-01\nstatus: draft")
    return root


@pytest.fixture
def project(tmp_path: Path) -> Path:
    return create_project(tmp_path / "journal")


@pytest.fixture
def add_post(project: Path):
    def _add(name: str, front: str, body: str = "Some body text.") -> Path:
        return write_post(project, name, front, body)

    return _add
