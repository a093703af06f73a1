import logging
import sys
from typing import Iterable, Optional

from .config import LOG_LEVEL, LOG_NAMESPACES


class NamespaceFilter(logging.Filter):
    def __init__(self, allowed_namespaces=None):
        super().__init__()
        self.allowed_namespaces = allowed_namespaces if allowed_namespaces is not None else []

    def filter(self, record):
        if not self.allowed_namespaces:
            return True # If no namespaces are specified, allow all records
        # Allow record if its name starts with any of the allowed namespaces
        return any(record.name.startswith(ns) for ns in self.allowed_namespaces)


log_formatter = logging.Formatter(
    fmt="%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

app_logger = logging.getLogger("chai_adda")


def configure_logging(
    level: str = LOG_LEVEL,
    allowed_namespaces: Optional[Iterable[str]] = None,
) -> logging.Logger:
    """
    Attaches a stdout handler to the ``chai_adda`` logger.

    Modules log through ``logging.getLogger(__name__)`` so their records
    propagate here, e.g. ``chai_adda.features.reports.service``. Calling this
    again replaces the handler rather than stacking a second one.
    """
    namespaces = list(allowed_namespaces) if allowed_namespaces is not None else LOG_NAMESPACES

    app_logger.setLevel(getattr(logging, level, logging.INFO))
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    if namespaces:
        console_handler.addFilter(NamespaceFilter(namespaces))
    app_logger.addHandler(console_handler)

    # Report builders log their windows and bucket counts at DEBUG.
    if level == "DEBUG":
        logging.getLogger("chai_adda.features.reports").setLevel(logging.DEBUG)

    return app_logger
