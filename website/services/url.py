import hashlib
from pathlib import Path, PurePosixPath

from website.errors import AssetNotFound, InvalidPageLocation
from website.models.page import Page

ASSET_PREFIX = "assets"


class Url:
    """Builds absolute URLs for routes, assets and pages."""

    def __init__(self, base: str, public_root: Path, views_root: Path) -> None:
        self.base = base.rstrip("/")
        self.public_root = public_root
        self.views_root = views_root

    def to(self, path: str) -> str:
        path = path.strip("/")
        return self.base + ("/" + path if path else "")

    def asset(self, path: str) -> str:
        """URL of a file under ``/assets/`` with a content hash for cache busting."""
        relative = f"{ASSET_PREFIX}/{path.lstrip('/')}"
        file = self.public_root / relative
        if not file.is_file():
            raise AssetNotFound(file)
        return f"{self.to(relative)}?v={_fingerprint(file)}"

    def page(self, page: Page) -> str:
        """Canonical URL of *page*, derived from where its view lives."""
        try:
            relative = Path(page.file).resolve().relative_to(self.views_root.resolve())
        except ValueError:
            raise InvalidPageLocation(page.file) from None
        return self.to(str(PurePosixPath(*relative.with_suffix("").parts)))


def _fingerprint(file: Path) -> str:
    return hashlib.md5(file.read_bytes(), usedforsecurity=False).hexdigest()[:12]
