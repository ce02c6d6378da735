"""Shared fixtures: a throwaway project tree with views, layouts, posts and assets."""

from pathlib import Path
from textwrap import dedent

import pytest
from fastapi.testclient import TestClient

from website.config import Settings
from website.main import create_app
from website.models.request import Request
from website.services.context import RenderContext
from website.services.markdown import Markdown
from website.services.templates import Templates
from website.services.url import Url

BASE_URL = "https://example.com"

_PAGE_LAYOUT = "<html><head><title>{{ page.title }}</title></head><body>{{ content }}</body></html>\n"

_POST_LAYOUT = (
    "<html><head><title>{{ page.title }}</title>"
    "{% if page.hidden %}<meta name=\"robots\" content=\"noindex\">{% endif %}</head>"
    "<body><article>{{ content }}</article></body></html>\n"
)

_HOME = dedent(
    """\
    ---
    title: Home
    description: Latest posts
    image: "{{ url.asset('fallback.png') }}"
    ---
    <ul>{% for post in collection.load('posts') %}<li><a href="{{ url.page(post) }}">{{ post.title }}</a></li>{% endfor %}</ul>
    """
)

_ABOUT = dedent(
    """\
    ---
    title: About
    description: About me
    image: "{{ url.asset('fallback.png') }}"
    ---
    <p>About me</p>
    """
)

_FEED = dedent(
    """\
    <?xml version="1.0" encoding="utf-8"?>
    <feed>{% for post in collection.load('posts') %}<entry><id>{{ url.page(post) }}</id></entry>{% endfor %}</feed>
    """
)

_ERROR = "<h1>{{ message }}</h1>\n"


def write_view(project: Path, relative: str, content: str) -> Path:
    path = project / "resources" / "views" / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def write_post(
    project: Path,
    slug: str,
    date: str,
    title: str = "",
    hidden: bool = False,
    body: str = "Hello *world*.",
    kind: str = "posts",
) -> Path:
    front_matter = dedent(
        f"""\
        ---
        title: {title or slug.replace('-', ' ').title()}
        description: About {slug}
        image: "{{{{ url.asset('fallback.png') }}}}"
        template: post
        og_type: article
        date: {date}
        hidden: {'true' if hidden else 'false'}
        ---
        """
    )
    return write_view(project, f"{kind}/{slug}.md", front_matter + body + "\n")


@pytest.fixture
def project(tmp_path: Path) -> Path:
    write_view(tmp_path, "templates/page.html", _PAGE_LAYOUT)
    write_view(tmp_path, "templates/post.html", _POST_LAYOUT)
    write_view(tmp_path, "home.html", _HOME)
    write_view(tmp_path, "about.html", _ABOUT)
    write_view(tmp_path, "feed.xml", _FEED)
    write_view(tmp_path, "error.html", _ERROR)

    write_post(tmp_path, "first-post", "2024-01-01")
    write_post(tmp_path, "second-post", "2024-06-01")
    write_post(tmp_path, "third-post", "2023-12-01")
    write_post(tmp_path, "secret-post", "2024-03-01", hidden=True)

    assets = tmp_path / "public" / "assets"
    assets.mkdir(parents=True)
    (assets / "fallback.png").write_bytes(b"\x89PNG fallback")
    (assets / "site.css").write_text("body { color: black; }\n")

    return tmp_path


@pytest.fixture
def settings(project: Path) -> Settings:
    return Settings(_env_file=None, project_base=project, base_url=BASE_URL, local=False)


@pytest.fixture
def local_settings(project: Path) -> Settings:
    return Settings(_env_file=None, project_base=project, base_url=BASE_URL, local=True)


@pytest.fixture
def client(settings: Settings) -> TestClient:
    return TestClient(create_app(settings))


@pytest.fixture
def local_client(local_settings: Settings) -> TestClient:
    return TestClient(create_app(local_settings))


@pytest.fixture
def url(settings: Settings) -> Url:
    return Url(BASE_URL, settings.public_root, settings.views_root)


@pytest.fixture
def templates(settings: Settings) -> Templates:
    return Templates(settings.views_root)


@pytest.fixture
def context(settings: Settings, url: Url) -> RenderContext:
    return RenderContext(
        settings=settings,
        request=Request(base=BASE_URL, path="/"),
        url=url,
        markdown=Markdown(),
    )
