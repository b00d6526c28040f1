import logging
import sys

from couture.settings import settings

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Third-party loggers that are noisy below WARNING.
QUIET_LOGGERS = ("PIL", "fontTools", "fpdf.output")


def _build_formatter() -> logging.Formatter:
    if settings.log_json:
        from pythonjsonlogger.json import JsonFormatter

        return JsonFormatter(
            fmt=JSON_FORMAT,
            rename_fields={"asctime": "timestamp", "levelname": "level"},
            static_fields={"app": "couture"},
        )
    return logging.Formatter(TEXT_FORMAT)


def configure_logging() -> None:
    """Install a single stderr handler on the root logger.

    Alembic's ``fileConfig`` replaces root handlers while migrating, so
    ``__main__`` calls ``reconfigure()`` again once migrations are done.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_build_formatter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


reconfigure = configure_logging
