"""View files and the Jinja2 environment that renders them.

A view is a text file with optional YAML front matter::

    ---
    title: Hello
    image: "{{ url.asset('fallback.png') }}"
    ---
    Body rendered by Jinja2.

Rendering happens in two phases. The front matter is rendered (without
autoescaping) and parsed into a :class:`~website.models.page.Page`, then the
body is rendered with ``page`` added to the variables. A view without front
matter produces no page.
"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional, TextIO, Tuple, Union
from zoneinfo import ZoneInfo

import yaml
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from website.errors import HttpException
from website.models.page import Page

logger = logging.getLogger(__name__)

_FRONT_MATTER = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE)

_IMAGE_TYPES = {".png": "png", ".jpg": "jpeg", ".jpeg": "jpeg"}


def split_front_matter(text: str) -> Tuple[Optional[str], str]:
    """Return ``(front matter or None, body)``."""
    match = _FRONT_MATTER.match(text)
    if match is None:
        return None, text
    return match.group(1), text[match.end():]


def atom(value: datetime) -> str:
    return value.isoformat(timespec="seconds")


def long_date(value: datetime) -> str:
    """``1st January, 2024``"""
    day = value.day
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix} {value:%B, %Y}"


def now(timezone: str) -> datetime:
    return datetime.now(ZoneInfo(timezone))


def image_type(url: str) -> str:
    """MIME subtype for an ``og:image`` URL."""
    path = url.split("?", 1)[0].lower()
    for extension, subtype in _IMAGE_TYPES.items():
        if path.endswith(extension):
            return subtype
    raise ValueError(f"Unknown og:image:type extension [{url}].")


class Templates:
    def __init__(self, views_root: Path) -> None:
        self.views_root = views_root
        self.env = Environment(
            loader=FileSystemLoader(views_root),
            autoescape=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.env.filters["atom"] = atom
        self.env.filters["long_date"] = long_date
        self.env.globals["image_type"] = image_type
        self.env.globals["now"] = now
        self.data_env = self.env.overlay(autoescape=False)

    def resolve(self, path_or_route: Union[str, Path]) -> Path:
        """Absolute path of a view.

        Absolute paths are taken as they are, anything else is looked up
        under the views root. Raises a 404 when neither is a file.
        """
        candidate = Path(path_or_route)
        if candidate.is_absolute() and candidate.is_file():
            return candidate
        candidate = self.views_root / str(path_or_route).lstrip("/")
        if candidate.is_file():
            logger.debug("Resolved view %s to %s", path_or_route, candidate)
            return candidate
        raise HttpException.not_found()

    def load(self, path: Path) -> "ViewTemplate":
        front_matter, body = split_front_matter(path.read_text(encoding="utf-8"))
        return ViewTemplate(self, path, front_matter, body)


class ViewTemplate:
    def __init__(self, templates: Templates, path: Path, front_matter: Optional[str], body: str) -> None:
        self.templates = templates
        self.path = path
        self.front_matter = front_matter
        self.body = body

    def page(self, variables: Mapping[str, Any]) -> Optional[Page]:
        if self.front_matter is None:
            return None
        source = self.templates.data_env.from_string(self.front_matter).render(variables)
        data = yaml.safe_load(source) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Front matter of [{self.path}] must be a mapping.")
        return Page.model_validate({**data, "file": self.path})

    def render(self, out: TextIO, variables: Mapping[str, Any]) -> Optional[Page]:
        """Write the body to *out* and return the view's page, if it declares one."""
        page = self.page(variables)
        if page is not None:
            variables = {**variables, "page": page}
        self.templates.env.from_string(self.body).stream(variables).dump(out)
        return page
