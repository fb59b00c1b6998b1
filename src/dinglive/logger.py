"""
Leveled Logger Module.

The client logs through an injected logger rather than a module-level one.
Any object exposing `debug`, `info`, `warning` and `error` (a `logging.Logger`,
a `logging.LoggerAdapter`, or a thin wrapper around another logging library)
can be passed through `ClientConfig.logger`.
"""

import logging as log
from typing import Any, Protocol

DEFAULT_LOGGER_NAME = "dinglive"


class LeveledLogger(Protocol):
    """
    Protocol for the logger used by the transport and the response decoder.

    A class implicitly satisfies this protocol if it implements the four
    leveled methods below.
    """

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> Any: ...

    def info(self, msg: str, *args: Any, **kwargs: Any) -> Any: ...

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> Any: ...

    def error(self, msg: str, *args: Any, **kwargs: Any) -> Any: ...


def default_logger() -> log.Logger:
    """
    Returns the SDK logger.

    No handler is attached: unless the application configures logging, Python's
    last-resort handler prints warnings and errors to stderr and drops the rest.
    """
    return log.getLogger(DEFAULT_LOGGER_NAME)
