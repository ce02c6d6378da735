from dataclasses import dataclass, field
from typing import Callable, Mapping, Protocol

HTML = "text/html; charset=utf-8"
XML = "text/xml; charset=utf-8"


class RenderableResponse(Protocol):
    """What the HTTP layer needs from any response."""

    @property
    def status(self) -> int: ...

    @property
    def headers(self) -> Mapping[str, str]: ...

    def render(self) -> str: ...


@dataclass(frozen=True)
class Response:
    """A lazily rendered response.

    Nothing is read or rendered until :meth:`render` is called. Rendering
    may happen more than once and must produce the same body each time.
    """

    callback: Callable[[], str]
    status: int = 200
    headers: Mapping[str, str] = field(default_factory=lambda: {"content-type": HTML})

    def render(self) -> str:
        return self.callback()

    def with_status(self, status: int) -> "Response":
        return Response(self.callback, status, self.headers)

    def with_headers(self, headers: Mapping[str, str]) -> "Response":
        return Response(self.callback, self.status, {**self.headers, **headers})

    def decorate(self, callback: Callable[["Response"], str]) -> "Response":
        """Wrap the body producer; *callback* receives this response."""
        return Response(lambda: callback(self), self.status, self.headers)

    @classmethod
    def redirect(cls, location: str, status: int = 307) -> "Response":
        return cls(lambda: "", status, {"location": location})
