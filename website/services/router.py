"""Maps requests to views and applies the site-wide response policy."""

import logging
import re
from typing import Dict, Tuple, Union

from website.config import Settings
from website.errors import HttpException
from website.models.request import Request
from website.models.response import HTML, XML, RenderableResponse, Response
from website.services.cache import Cache
from website.services.collection import CachedCollection, Collection
from website.services.context import RenderContext
from website.services.markdown import Markdown
from website.services.renderer import Renderer
from website.services.templates import Templates
from website.services.url import Url

logger = logging.getLogger(__name__)

# path -> (view, content type)
STATIC_ROUTES: Dict[str, Tuple[str, str]] = {
    "/": ("home.html", HTML),
    "/about": ("about.html", HTML),
    "/feed.xml": ("feed.xml", XML),
}

# Legacy URLs from earlier versions of the site.
REDIRECTS: Dict[str, str] = {
    "/blog": "/",
    "/posts": "/",
    "/talks": "/",
    "/rss": "/feed.xml",
    "/feed": "/feed.xml",
}

DYNAMIC_ROUTE = re.compile(r"^/(posts|talk)/[0-9a-z\-]+$")

ALLOWED_METHODS = ("get", "head")


class Router:
    def __init__(self, renderer: Renderer, collection: Union[Collection, CachedCollection], url: Url) -> None:
        self.renderer = renderer
        self.collection = collection
        self.url = url

    def match(self, request: Request) -> Response:
        """Return the response for *request* or raise a 404."""
        if request.path in REDIRECTS:
            return Response.redirect(self.url.to(REDIRECTS[request.path]))

        if request.path in STATIC_ROUTES:
            view, content_type = STATIC_ROUTES[request.path]
            return self.renderer.render(view).with_headers({"content-type": content_type})

        return self._lookup(request)

    def _lookup(self, request: Request) -> Response:
        match = DYNAMIC_ROUTE.match(request.path)
        if match is None:
            raise HttpException.not_found()

        # Hidden pages are left out of listings but stay reachable here.
        target = request.url()
        for page in self.collection.all(match.group(1)):
            if self.url.page(page) == target:
                return self.renderer.render(page.file)

        raise HttpException.not_found()


class Site:
    """Wires the services for one request and produces its response."""

    def __init__(self, settings: Settings, request: Request) -> None:
        self.settings = settings
        self.request = request
        self.url = Url(request.base, settings.public_root, settings.views_root)
        self.templates = Templates(settings.views_root)

        context = RenderContext(settings=settings, request=request, url=self.url, markdown=Markdown())
        collection: Union[Collection, CachedCollection] = Collection(
            self.templates, context, show_hidden=settings.local
        )
        if settings.production and settings.cache_collections:
            collection = CachedCollection(collection, settings.cache_root)
        self.collection = collection

        self.renderer = Renderer(self.templates, context.with_collection(collection))
        self.router = Router(self.renderer, collection, self.url)
        self.cache = Cache(settings.public_root, always_render=settings.local)

    def handle(self) -> RenderableResponse:
        """Route, enforce allowed methods, cache successes and render HTTP errors.

        Any response below 400, redirects included, is refused with a 405
        for methods other than GET and HEAD. Only responses below 300 are
        cached.
        """
        request = self.request
        try:
            response = self.router.match(request)

            if response.status < 400 and request.method not in ALLOWED_METHODS:
                raise HttpException.method_not_allowed()

            if response.status < 300:
                return self.cache.apply(request.path, response)

            return response
        except HttpException as exc:
            logger.info("%s %s -> %s %s", request.method.upper(), request.path, exc.status, exc.message)
            return self.renderer.render("error.html", {"message": exc.message}).with_status(exc.status)
