import logging
from rich.logging import RichHandler

from calculagraph.settings import get_settings

# The stdlib has no level below DEBUG; timer_log_trace emits here.
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

PACKAGE_LOGGER = "calculagraph"


def _configure_package_logger() -> logging.Logger:
    # Only the package logger is touched; the root logger belongs to the host.
    package = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(h, RichHandler) for h in package.handlers):
        handler = RichHandler(rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        package.addHandler(handler)
        package.setLevel(get_settings().log_level)
    return package


def get_logger(name: str) -> logging.Logger:
    """Logger for calculagraph's own messages, under the package logger."""
    _configure_package_logger()
    return logging.getLogger(name)
