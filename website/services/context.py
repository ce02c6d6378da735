from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from website.config import Settings
from website.models.request import Request
from website.services.escape import escape
from website.services.markdown import Markdown
from website.services.url import Url

if TYPE_CHECKING:
    from website.services.collection import Collection


@dataclass(frozen=True)
class RenderContext:
    """Everything a view can see while it renders.

    The named fields are shared by every view of a request; ``props`` holds
    view specific values such as an error message.
    """

    settings: Settings
    request: Request
    url: Url
    markdown: Markdown
    collection: Optional["Collection"] = None
    props: Mapping[str, Any] = field(default_factory=dict)

    def with_props(self, props: Mapping[str, Any]) -> "RenderContext":
        return replace(self, props={**self.props, **props})

    def with_collection(self, collection: "Collection") -> "RenderContext":
        return replace(self, collection=collection)

    def variables(self) -> Dict[str, Any]:
        """Template variables; the shared names win over same-named props."""
        return {
            **self.props,
            "site": self.settings,
            "request": self.request,
            "url": self.url,
            "e": escape,
            "markdown": self.markdown,
            "collection": self.collection,
        }
