import logging
import logging.config
import traceback
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from website.config import Settings, get_settings
from website.routers.pages import router as pages_router

logger = logging.getLogger(__name__)
error_logger = logging.getLogger("website.errors")


def configure_logging(settings: Settings) -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
                },
                "error_record": {
                    "format": "[%(asctime)s] %(message)s\n",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                },
                "error_file": {
                    "class": "logging.FileHandler",
                    "formatter": "error_record",
                    "filename": str(settings.error_log),
                    "mode": "a",
                    "encoding": "utf-8",
                    "delay": True,
                },
            },
            "loggers": {
                "website.errors": {"level": "ERROR", "handlers": ["error_file"]},
            },
            "root": {"level": "INFO", "handlers": ["console"]},
        }
    )


def describe_exception(exc: BaseException) -> str:
    """Plain-text report: type, message, origin and stack trace."""
    frames = traceback.extract_tb(exc.__traceback__)
    origin = f"{frames[-1].filename}:{frames[-1].lineno}" if frames else "unknown"
    trace = "".join(traceback.format_tb(exc.__traceback__)).rstrip()

    sections = [
        f"{type(exc).__module__}.{type(exc).__qualname__}",
        f"[message]\n{exc}",
        f"[file]\n{origin}",
    ]
    if trace:
        sections.append(f"[trace]\n{trace}")
    return "\n\n".join(sections)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Renders the personal website from views and Markdown posts.",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
        report = describe_exception(exc)
        error_logger.error(report)
        return PlainTextResponse(report, status_code=500)

    app.include_router(pages_router)

    return app


app = create_app()
