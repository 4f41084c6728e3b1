"""Composition of the single log line emitted per event.

Lines have the shape::

    [Level]: [Timestamp (ISO-8601, UTC, millis)]: [path:line]: [Message]

The message is written unescaped, so consumers should split on the first
three ``": "`` separators only.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict

from callsite_log.levels import Level
from callsite_log.resolver import CallTrace, PathResolver


class LogEvent(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    level: Level
    trace: CallTrace = ()
    message: tuple[Any, ...] = ()
    # Left unset by the facility; the formatter stamps the line itself.
    timestamp: Optional[datetime] = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as ``YYYY-MM-DDTHH:MM:SS.sssZ``.

    Naive datetimes are taken to be UTC already.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return f"{moment.strftime('%Y-%m-%dT%H:%M:%S')}.{moment.microsecond // 1000:03d}Z"


def _stringify(part: Any) -> str:
    try:
        return str(part)
    except Exception:  # noqa: BLE001
        return object.__repr__(part)


def render_message(parts: tuple[Any, ...]) -> str:
    """Join message arguments with single spaces.

    Exceptions render through their own ``str()``; objects whose ``__str__``
    fails fall back to the default repr.
    """
    return " ".join(_stringify(part) for part in parts)


class LineFormatter:
    def __init__(
        self,
        resolver: Optional[PathResolver] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.resolver = resolver or PathResolver()
        self._clock = clock

    def location(self, event: LogEvent) -> str:
        """Resolved call site of the event, or an empty string."""
        if len(event.trace) < 2:
            return ""
        return self.resolver.resolve(event.trace[1]) or ""

    def format(self, event: LogEvent) -> str:
        """Build the line for ``event``, trailing newline included.

        Args:
            event: The event to render

        Returns:
            str: The formatted log line
        """
        moment = event.timestamp or self._clock()
        return (
            f"{event.level.name}: {format_timestamp(moment)}: "
            f"{self.location(event)}: {render_message(event.message)}\n"
        )
