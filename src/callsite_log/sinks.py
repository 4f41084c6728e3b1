"""Destinations for formatted log lines.

Sinks wrap stdlib ``logging`` handlers: the handler lock keeps concurrent
lines from interleaving and ``handleError`` keeps write failures away from
the caller.
"""

import logging
import re
import sys
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

_STDOUT = re.compile(r"^stdout$", re.IGNORECASE)


class Sink(Protocol):
    """Anything that accepts finished log lines."""

    def write(self, line: str) -> None: ...

    def close(self) -> None: ...


class HandlerSink:
    def __init__(self, handler: logging.Handler) -> None:
        # Lines already carry their newline.
        if isinstance(handler, logging.StreamHandler):
            handler.terminator = ""
        handler.setFormatter(logging.Formatter("%(message)s"))
        self.handler = handler

    @property
    def name(self) -> str | None:
        return self.handler.get_name()

    def write(self, line: str) -> None:
        self.handler.handle(logging.makeLogRecord({"msg": line}))

    def close(self) -> None:
        self.handler.close()


def console_sink(name: str) -> HandlerSink:
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(f"{name}stdout")
    return HandlerSink(handler)


def file_sink(name: str, path: str) -> HandlerSink:
    """Open ``path`` for appending; existing content is never truncated.

    Raises:
        OSError: If the file or its directory cannot be created
    """
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.set_name(f"{name}fileoutput")
    return HandlerSink(handler)


def build_sink(destination: str, name: str) -> HandlerSink:
    """Select a sink for a configured destination.

    Args:
        destination: 'stdout' (any case) for the console, otherwise a file path
        name: Logger name used to label the underlying handler

    Returns:
        HandlerSink: The console or file sink
    """
    if _STDOUT.match(destination or ""):
        return console_sink(name)
    logger.debug("Appending log lines to %s", destination)
    return file_sink(name, destination)
