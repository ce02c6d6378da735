import logging
from pathlib import Path
from typing import Any, Mapping, Optional, TextIO, Union

from markupsafe import Markup

from website.models.page import Layout, Page
from website.models.response import Response
from website.services.capture import capture
from website.services.context import RenderContext
from website.services.templates import Templates

logger = logging.getLogger(__name__)


class PageLayout:
    """Wraps already rendered HTML in the site chrome."""

    template = "templates/page.html"

    def render(self, out: TextIO, templates: Templates, variables: Mapping[str, Any], page: Page, content: str) -> None:
        layout = templates.env.get_template(self.template)
        layout.stream({**variables, "page": page, "content": Markup(content)}).dump(out)


class PostLayout:
    """Treats the captured body as Markdown."""

    template = "templates/post.html"

    def render(self, out: TextIO, templates: Templates, variables: Mapping[str, Any], page: Page, content: str) -> None:
        layout = templates.env.get_template(self.template)
        html = variables["markdown"](content)
        layout.stream({**variables, "page": page, "content": html}).dump(out)


LAYOUTS = {
    Layout.PAGE: PageLayout(),
    Layout.POST: PostLayout(),
}


class Renderer:
    def __init__(self, templates: Templates, context: RenderContext) -> None:
        self.templates = templates
        self.context = context

    def render(
        self,
        path_or_route: Union[str, Path],
        props: Optional[Mapping[str, Any]] = None,
        status: int = 200,
    ) -> Response:
        """Lazily render a view, wrapped in its layout when it declares a page.

        Only the view lookup happens now; a missing view raises a 404 here.
        """
        path = self.templates.resolve(path_or_route)

        def produce() -> str:
            variables = self.context.with_props(props or {}).variables()
            view = self.templates.load(path)
            content, page = capture(lambda out: view.render(out, variables))
            if page is None:
                return content

            layout = LAYOUTS[page.template]
            logger.debug("Wrapping %s in the %s layout", path.name, page.template.value)
            shared = self.context.variables()
            body, _ = capture(lambda out: layout.render(out, self.templates, shared, page, content))
            return body

        return Response(produce, status)
