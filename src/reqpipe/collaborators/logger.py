"""Logger collaborator — records pipeline messages through an injected sink.

A plain ``Logger()`` discards everything. ``Logger.build()`` writes to the
``reqpipe.requests`` stdlib logger at ``settings.request_log_level``
(WARNING by default), or to any sink passed in explicitly.

Usage:
    pipeline = RequestPipeline()
    Logger.configure(pipeline)          # real logger in the "logger" slot

    Logger(print).log("hello")          # custom sink
    Logger.call("hello")                # one-shot, same as Logger.build().log(...)
"""

import functools
import logging
from collections.abc import Callable
from typing import Any

from reqpipe.config import settings

logger = logging.getLogger(__name__)

REQUEST_LOGGER_NAME = "reqpipe.requests"

Sink = Callable[[str], None]


def _discard(message: str) -> None:
    pass


def default_sink() -> Sink:
    """Return a sink writing to the request logger at the configured level."""
    level = logging.getLevelName(settings.request_log_level)
    return functools.partial(logging.getLogger(REQUEST_LOGGER_NAME).log, level)


class Logger:
    """Wraps a single-argument, side-effecting sink.

    Sink exceptions are not caught; they propagate to whoever called ``log``.

    Args:
        sink: Callable receiving each message (default: discard)
    """

    def __init__(self, sink: Sink | None = None) -> None:
        self._sink = sink if sink is not None else _discard

    @classmethod
    def build(cls, sink: Sink | None = None) -> "Logger":
        """Create a logger that actually writes somewhere."""
        return cls(sink if sink is not None else default_sink())

    @classmethod
    def configure(cls, receiver: Any) -> None:
        """Put a freshly built logger into ``receiver``'s logger slot."""
        receiver.configure("logger", cls.build())

    @classmethod
    def call(cls, message: str) -> None:
        """Log a single message through a freshly built logger."""
        cls.build().log(message)

    def log(self, message: str) -> None:
        self._sink(message)

    def __call__(self, message: str) -> None:
        self.log(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sink={self._sink!r})"
