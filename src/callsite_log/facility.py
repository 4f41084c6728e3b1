"""The process-wide log facility.

Logs one line per call with the format::

    [Level]: [Timestamp (ISO-8601)]: [File:linenum]: [Log Message]

Use through the helper::

    from callsite_log import get_log

    get_log().warn("This is my log message")
"""

import inspect
import logging
import re
import sys
import threading
from typing import Any, Optional

from callsite_log.config import Settings, load_settings
from callsite_log.formatter import LineFormatter, LogEvent
from callsite_log.levels import Level
from callsite_log.resolver import PathResolver, capture_trace
from callsite_log.sinks import Sink, build_sink
from callsite_log.telemetry import MetricsCollector, TelemetryCollector

logger = logging.getLogger(__name__)

DEFAULT_NAME = "no_name_given"
DEFAULT_LEVEL = Level.DEBUG


def logger_name(project_name: Optional[str]) -> str:
    """Project name with whitespace removed, or the fallback name."""
    name = re.sub(r"\s+", "", project_name or "")
    return name or DEFAULT_NAME


class LogFacility:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        sink: Optional[Sink] = None,
        metrics: Optional[MetricsCollector] = None,
        resolver: Optional[PathResolver] = None,
    ) -> None:
        settings = settings or load_settings()
        self.name = logger_name(settings.project_name)

        self._level = DEFAULT_LEVEL
        if settings.logging.enabled:
            level = Level.from_name(settings.logging.level)
            if level is None:
                logger.debug(
                    "Ignoring unknown log level %r; keeping %s",
                    settings.logging.level,
                    DEFAULT_LEVEL.name,
                )
            else:
                self._level = level
        else:
            self._level = Level.OFF

        if metrics is None and settings.statsd.enabled:
            metrics = TelemetryCollector(sample_rate=settings.statsd.sample_rate)
        self.metrics = metrics
        self._excluded = frozenset(
            str(name).strip().lower() for name in settings.statsd.exclude_levels
        )

        self.sink = sink if sink is not None else build_sink(settings.logging.file, self.name)
        self.formatter = LineFormatter(resolver)

    @property
    def level(self) -> Level:
        return self._level

    def is_enabled(self, level: Level) -> bool:
        """True iff the current gate lets ``level`` messages through."""
        return level != Level.OFF and level >= self._level

    # Each public emitter calls _dispatch directly so the call site is
    # always the second entry of the captured trace.

    def debug(self, *args: Any) -> None:
        self._dispatch(Level.DEBUG, args)

    def info(self, *args: Any) -> None:
        self._dispatch(Level.INFO, args)

    def warn(self, *args: Any) -> None:
        self._dispatch(Level.WARN, args)

    def error(self, *args: Any) -> None:
        self._dispatch(Level.ERROR, args)

    def fatal(self, *args: Any) -> None:
        self._dispatch(Level.FATAL, args)

    def log(self, level: Level, *args: Any) -> None:
        """Emit at an explicit level."""
        self._dispatch(level, args)

    def _dispatch(self, level: Level, args: tuple[Any, ...]) -> None:
        if level == Level.OFF:
            return

        # Counted whether or not the gate lets the message through.
        if self.metrics is not None and level.label not in self._excluded:
            self.metrics.increment(f"log.{level.label}")

        if not self.is_enabled(level):
            return

        # A lone function is a deferred message, only built when it will be written.
        if len(args) == 1 and (inspect.isfunction(args[0]) or inspect.ismethod(args[0])):
            try:
                args = (args[0](),)
            except Exception:  # noqa: BLE001
                logger.debug("Deferred log message failed; writing it as-is", exc_info=True)

        event = LogEvent(
            level=level,
            trace=capture_trace(sys._getframe(1)),
            message=args,
        )
        self.sink.write(self.formatter.format(event))


_instance: Optional[LogFacility] = None
_instance_lock = threading.Lock()


def get_log() -> LogFacility:
    """Return the process-wide facility, building it on first use.

    Settings are read exactly once, even when several threads race on the
    first call.
    """
    global _instance
    if _instance is None:
        with _instance_lock:
            if _instance is None:
                _instance = LogFacility()
                logger.debug("Log facility %s ready at level %s", _instance.name, _instance.level.name)
    return _instance
