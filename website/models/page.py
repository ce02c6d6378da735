from datetime import date as date_type, datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Layout(str, Enum):
    """Which layout template wraps a page's body."""

    PAGE = "page"
    POST = "post"


class OgType(str, Enum):
    WEBSITE = "website"
    ARTICLE = "article"


class Format(str, Enum):
    ARTICLE = "article"
    VIDEO = "video"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Page(BaseModel):
    """Metadata for one renderable content item.

    Built from a view's front matter every time the view is rendered.
    ``file`` is the source path and doubles as the page's identity.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    file: Path
    title: str
    description: str
    image: str
    template: Layout = Layout.PAGE
    og_type: OgType = OgType.WEBSITE
    hidden: bool = False  # excluded from listings, still reachable by URL
    show_menu: bool = True
    date: datetime = Field(default_factory=_now)
    format: Optional[Format] = None
    external_link: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Any:
        # YAML gives a plain date for "2024-01-01".
        if isinstance(value, date_type) and not isinstance(value, datetime):
            return datetime(value.year, value.month, value.day)
        return value

    @field_validator("date")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def with_changes(self, **changes: Any) -> "Page":
        """Return a copy of the page with *changes* applied (re-validated)."""
        return self.model_validate({**self.model_dump(), **changes})
