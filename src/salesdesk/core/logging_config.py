import logging
import sys
from typing import Optional

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

_HANDLER_NAME = "salesdesk-console"


def configure_logging(
    level: Optional[str] = None, namespaces: Optional[list[str]] = None
) -> logging.Logger:
    """
    Attach the console handler to the 'salesdesk' logger.

    Modules log through logging.getLogger(__name__), so every
    "salesdesk.features.*" logger inherits this handler and level.
    Calling this more than once replaces the handler instead of stacking
    a second one.
    """
    app_logger = logging.getLogger("salesdesk")
    app_logger.setLevel(level or LOG_LEVEL)

    for handler in list(app_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            app_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setFormatter(log_formatter)

    allowed = namespaces if namespaces is not None else LOG_NAMESPACES
    if allowed:
        console_handler.addFilter(NamespaceFilter(allowed))

    app_logger.addHandler(console_handler)
    return app_logger

# To see SQL emitted by the report queries:
# logging.getLogger("tortoise.db_client").setLevel(logging.DEBUG)
