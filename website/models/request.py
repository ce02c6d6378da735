from pydantic import BaseModel, ConfigDict, field_validator


class Request(BaseModel):
    """The parts of an incoming HTTP request the site cares about.

    ``base`` is scheme and host without a trailing slash, ``method`` is lower
    cased and ``path`` always starts with a slash and never ends with one,
    except for the root path.
    """

    model_config = ConfigDict(frozen=True)

    base: str
    path: str = "/"
    method: str = "get"

    @field_validator("base")
    @classmethod
    def _strip_base(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("method")
    @classmethod
    def _lower_method(cls, value: str) -> str:
        return value.lower()

    @field_validator("path")
    @classmethod
    def _normalise_path(cls, value: str) -> str:
        return "/" + value.strip("/")

    def url(self) -> str:
        return self.base + ("" if self.path == "/" else self.path)
