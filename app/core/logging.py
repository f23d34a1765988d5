import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from app.core.config import Settings


class _AppContext(logging.Filter):
    """Stamps every record with the app name and environment."""

    def __init__(self, settings: Settings):
        super().__init__()
        self.app = settings.app_name
        self.env = settings.environment

    def filter(self, record: logging.LogRecord) -> bool:
        record.app = self.app
        record.env = self.env
        return True


def configure_logging(settings: Settings) -> None:
    """
    One JSON handler on stdout for the whole process; nothing is written to disk.
    Request, service and uvicorn loggers all go through it.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(_AppContext(settings))
    handler.setFormatter(
        JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(app)s %(env)s %(message)s",
            rename_fields={"levelname": "level", "name": "logger"},
        )
    )

    root = logging.getLogger()
    root.setLevel(level)
    # replace, so building a second app in one process does not double every line
    root.handlers = [handler]

    for name in ("uvicorn.access", "uvicorn.error"):
        logging.getLogger(name).setLevel(level)
    # SQL echo is controlled by db_echo on the engine, not by the root level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.db_echo else logging.WARNING)


def null_logger(name: str = "climate_finance.null") -> logging.Logger:
    """Logger that drops everything; pass it to a service to keep test output quiet."""
    log = logging.getLogger(name)
    log.handlers = [logging.NullHandler()]
    log.propagate = False
    return log
