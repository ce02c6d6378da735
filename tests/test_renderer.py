"""Tests for website.services.renderer.Renderer."""

import pytest

from website.errors import HttpException
from website.services.collection import Collection
from website.services.renderer import LAYOUTS, Renderer
from website.models.page import Layout
from tests.conftest import write_view


@pytest.fixture
def renderer(templates, context) -> Renderer:
    return Renderer(templates, context.with_collection(Collection(templates, context)))


class TestRender:
    def test_missing_view_raises_not_found_immediately(self, renderer: Renderer):
        with pytest.raises(HttpException) as exc_info:
            renderer.render("missing.html")
        assert exc_info.value.status == 404

    def test_rendering_is_deferred_until_render_is_called(self, renderer: Renderer, project):
        write_view(project, "plain.html", "before\n")
        response = renderer.render("plain.html")
        write_view(project, "plain.html", "after\n")
        assert response.render() == "after\n"

    def test_view_without_page_is_the_whole_body(self, renderer: Renderer):
        body = renderer.render("feed.xml").render()
        assert body.startswith('<?xml version="1.0" encoding="utf-8"?>')
        assert "<html>" not in body

    def test_page_view_is_wrapped_in_page_layout(self, renderer: Renderer):
        body = renderer.render("about.html").render()
        assert body == "<html><head><title>About</title></head><body><p>About me</p>\n</body></html>\n"

    def test_post_view_is_rendered_as_markdown(self, renderer: Renderer):
        body = renderer.render("posts/first-post.md").render()
        assert "<title>First Post</title>" in body
        assert "<article><p>Hello <em>world</em>.</p></article>" in body

    def test_props_reach_the_view(self, renderer: Renderer):
        assert renderer.render("error.html", {"message": "Gone <now>"}).render() == "<h1>Gone &lt;now&gt;</h1>\n"

    def test_shared_names_win_over_props(self, renderer: Renderer, project):
        write_view(project, "which.html", "{{ url.to('x') }}\n")
        body = renderer.render("which.html", {"url": "shadowed"}).render()
        assert body == "https://example.com/x\n"

    def test_status(self, renderer: Renderer):
        assert renderer.render("about.html").status == 200
        assert renderer.render("about.html", status=404).status == 404

    def test_rendering_twice_is_idempotent(self, renderer: Renderer):
        response = renderer.render("home.html")
        assert response.render() == response.render()

    def test_home_lists_posts_newest_first(self, renderer: Renderer):
        body = renderer.render("home.html").render()
        assert body.index("Second Post") < body.index("First Post") < body.index("Third Post")
        assert "Secret Post" not in body


class TestLayouts:
    def test_every_layout_has_a_renderer(self):
        assert set(LAYOUTS) == set(Layout)
