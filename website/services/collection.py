import logging
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

from website.errors import MissingPage
from website.models.page import Page
from website.services.cache import write_atomic
from website.services.capture import capture
from website.services.context import RenderContext
from website.services.templates import Templates

logger = logging.getLogger(__name__)

_PAGES = TypeAdapter(List[Page])


class Collection:
    """All pages of one kind (``posts``, ``talk``, ...), newest first.

    Every file directly inside ``views/<kind>/`` is rendered to read its
    page metadata. A file without front matter aborts the whole load with
    :class:`~website.errors.MissingPage`.
    """

    def __init__(self, templates: Templates, context: RenderContext, show_hidden: bool = False) -> None:
        self.templates = templates
        self.context = context
        self.show_hidden = show_hidden

    def load(self, kind: str, props: Optional[Mapping[str, Any]] = None) -> List[Page]:
        """Pages for listings: hidden pages are dropped unless ``show_hidden``."""
        pages = self.all(kind, props)
        if self.show_hidden:
            return pages
        return [page for page in pages if not page.hidden]

    def all(self, kind: str, props: Optional[Mapping[str, Any]] = None) -> List[Page]:
        """Every page of *kind*, hidden ones included."""
        directory = self.templates.views_root / kind
        paths = sorted(path for path in directory.glob("*") if path.is_file())
        variables = self.context.with_collection(self).with_props(props or {}).variables()

        pages = [self._page(path, variables) for path in paths]
        # sorted() is stable, so equal dates keep file name order
        return sorted(pages, key=lambda page: page.date, reverse=True)

    def _page(self, path: Path, variables: Mapping[str, Any]) -> Page:
        view = self.templates.load(path)
        _, page = capture(lambda out: view.render(out, variables))
        if page is None:
            raise MissingPage(path)
        return page


class CachedCollection:
    """Persists collection results as JSON under the cache directory.

    Nothing is invalidated automatically: delete ``cache/*-collection.json``
    after changing content.
    """

    def __init__(self, collection: Collection, cache_root: Path) -> None:
        self.collection = collection
        self.cache_root = cache_root

    def load(self, kind: str, props: Optional[Mapping[str, Any]] = None) -> List[Page]:
        return self._remember(kind, "published", lambda: self.collection.load(kind, props))

    def all(self, kind: str, props: Optional[Mapping[str, Any]] = None) -> List[Page]:
        return self._remember(kind, "all", lambda: self.collection.all(kind, props))

    def path_for(self, kind: str, variant: str) -> Path:
        return self.cache_root / f"{kind}-{variant}-collection.json"

    def _remember(self, kind: str, variant: str, compute: Callable[[], List[Page]]) -> List[Page]:
        path = self.path_for(kind, variant)
        try:
            return _PAGES.validate_json(path.read_bytes())
        except (OSError, ValidationError) as exc:
            logger.info("Rebuilding collection cache %s: %s", path.name, exc.__class__.__name__)

        pages = compute()
        write_atomic(path, _PAGES.dump_json(pages))
        return pages
