"""structlog setup shared by the API and the CLI.

Both structlog and stdlib loggers (uvicorn, SQLAlchemy) end up in one stdout
handler, rendered either as colored console lines or as JSON lines.
"""

import logging
import sys

import structlog
from structlog.typing import Processor

from edi_dashboard.config import settings

# Third-party loggers and the level they are held at
QUIET_LOGGERS = {
    "asyncio": logging.INFO,
    "multipart": logging.WARNING,
    "passlib": logging.ERROR,
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
}

_configured = False


def _shared_processors(json_output: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso" if json_output else "%Y-%m-%d %H:%M:%S", utc=json_output),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_output:
        processors.append(structlog.processors.format_exc_info)
    return processors


def _renderer(json_output: bool) -> Processor:
    if json_output:
        # Japanese product names stay readable in the log stream
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=True, exception_formatter=structlog.dev.plain_traceback)


def configure_logging(level: str | None = None, *, json_output: bool | None = None) -> None:
    """Configure structlog and the root logger.

    Defaults come from LOG_LEVEL and LOG_JSON. Calling again replaces the
    previous handler, so the CLI can switch level after the app module set it up.
    """
    level = level or settings.log_level
    json_output = settings.log_json if json_output is None else json_output
    shared = _shared_processors(json_output)

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, _renderer(json_output)],
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


def setup_logging() -> None:
    """Setup logging once. Safe to call multiple times."""
    global _configured
    if not _configured:
        configure_logging()
        _configured = True


def bind_request_context(method: str, path: str, client_ip: str | None) -> None:
    """Attach request fields to every log line emitted while handling it."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(method=method, path=path, client_ip=client_ip)
