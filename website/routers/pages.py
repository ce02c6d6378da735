import logging

from fastapi import APIRouter, Request
from fastapi.responses import Response

from website.config import Settings
from website.models.request import Request as SiteRequest
from website.services.router import Site

logger = logging.getLogger(__name__)

router = APIRouter()


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def page(request: Request) -> Response:
    """Serve any path of the site, whatever the method.

    Production builds absolute URLs from ``base_url``; local development
    uses whatever host the browser asked for.
    """
    settings = get_app_settings(request)
    site_request = SiteRequest(
        base=settings.base_url if settings.production else str(request.base_url),
        method=request.method,
        path=request.url.path,
    )

    response = Site(settings, site_request).handle()

    # Headers are read after rendering so the cache can report hit or miss.
    body = response.render().encode("utf-8")
    headers = {**response.headers, "content-length": str(len(body))}
    logger.info("%s %s -> %s", request.method, site_request.path, response.status)

    return Response(
        content=b"" if site_request.method == "head" else body,
        status_code=response.status,
        headers=headers,
    )


# An empty method list matches every method; Site.handle answers 404 and 405.
router.add_route("/{path:path}", page, methods=[], include_in_schema=False)
