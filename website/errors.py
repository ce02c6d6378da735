"""Exception taxonomy.

``HttpException`` is expected and user facing: the dispatcher turns it into a
rendered error page. Everything deriving from ``SiteError`` is an authoring or
I/O fault and propagates to the process-wide handler in ``website.main``.
"""

from pathlib import Path


class HttpException(RuntimeError):
    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message

    @classmethod
    def not_found(cls) -> "HttpException":
        return cls(404, "Not Found")

    @classmethod
    def method_not_allowed(cls) -> "HttpException":
        return cls(405, "Method Not Allowed")


class SiteError(RuntimeError):
    """Base class for content, build and cache faults."""


class MissingPage(SiteError):
    def __init__(self, path: Path | str) -> None:
        super().__init__(f"Did not find page metadata in [{path}].")
        self.path = Path(path)


class InvalidPageLocation(SiteError):
    def __init__(self, path: Path | str) -> None:
        super().__init__(f"Page [{path}] is not located within the views directory.")
        self.path = Path(path)


class AssetNotFound(SiteError):
    def __init__(self, path: Path | str) -> None:
        super().__init__(f"Unable to find asset [{path}].")
        self.path = Path(path)


class CacheWriteError(SiteError):
    def __init__(self, path: Path | str, reason: str = "") -> None:
        message = f"Unable to write cache file [{path}]."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)
        self.path = Path(path)
