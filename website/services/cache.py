"""Write-through page cache under the public directory.

A cached page lives where a static file server would look for it:
``/posts/hello`` maps to ``public/posts/hello/index.html`` and paths with an
extension, such as ``/feed.xml``, map to ``public/feed.xml``. There is no
expiry; delete the file to force a fresh render.
"""

import logging
import os
import tempfile
from pathlib import Path, PurePosixPath
from typing import Mapping

from website.errors import CacheWriteError
from website.models.response import Response

logger = logging.getLogger(__name__)


def write_atomic(path: Path, data: bytes) -> None:
    """Write *data* to a sibling temporary file, then move it into place."""
    try:
        path.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
    except OSError as exc:
        raise CacheWriteError(path, f"Unable to create directory [{path.parent}]: {exc}") from exc

    temporary = None
    try:
        with tempfile.NamedTemporaryFile(dir=path.parent, prefix=f".{path.name}.", delete=False) as handle:
            temporary = Path(handle.name)
            handle.write(data)
        os.chmod(temporary, 0o644)
        os.replace(temporary, path)
    except OSError as exc:
        if temporary is not None:
            temporary.unlink(missing_ok=True)
        raise CacheWriteError(path, str(exc)) from exc


class Cache:
    def __init__(self, public_root: Path, always_render: bool = False) -> None:
        self.public_root = public_root
        # Local development re-renders every request but still writes the file.
        self.always_render = always_render

    def path_for(self, request_path: str) -> Path:
        relative = request_path.strip("/")
        if PurePosixPath(relative).suffix:
            return self.public_root / relative
        return self.public_root / relative / "index.html"

    def apply(self, request_path: str, response: Response) -> "CachedResponse":
        return CachedResponse(self, request_path, response)


class CachedResponse:
    """A response served from, or written to, the page cache.

    ``cache_miss`` and the ``cache-miss`` header reflect the latest render.
    """

    def __init__(self, cache: Cache, request_path: str, response: Response) -> None:
        self.cache = cache
        self.request_path = request_path
        self.response = response
        self.cache_miss = False
        self._decorated = response.decorate(self._read_through)

    @property
    def status(self) -> int:
        return self.response.status

    @property
    def headers(self) -> Mapping[str, str]:
        return {**self.response.headers, "cache-miss": "1" if self.cache_miss else "0"}

    def render(self) -> str:
        return self._decorated.render()

    def _read_through(self, response: Response) -> str:
        path = self.cache.path_for(self.request_path)

        if path.is_file() and not self.cache.always_render:
            self.cache_miss = False
            logger.info("Cache hit for %s", self.request_path)
            return path.read_text(encoding="utf-8")

        self.cache_miss = True
        logger.info("Cache miss for %s, writing %s", self.request_path, path)
        content = response.render()
        write_atomic(path, content.encode("utf-8"))
        return content
