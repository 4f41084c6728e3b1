import logging
import random
import threading
from collections import Counter
from typing import Protocol

logger = logging.getLogger(__name__)


class MetricsCollector(Protocol):
    """Counts emitted log calls; the facility only ever increments."""

    def increment(self, metric: str) -> None: ...


class TelemetryCollector:
    """In-process counter collector.

    Counts are kept in memory and each sampled increment is reported on this
    module's logger at debug level.
    """

    def __init__(self, sample_rate: float = 1.0) -> None:
        self.sample_rate = sample_rate
        self._counts: Counter[str] = Counter()
        self._lock = threading.Lock()

    def _should_sample(self) -> bool:
        """Determine if an increment should be recorded.

        Returns:
            bool: True if this increment is inside the sample
        """
        try:
            return random.random() < max(  # nosec B311  # Non-cryptographic sampling
                0.0, min(1.0, self.sample_rate)
            )
        except (TypeError, ValueError):
            # Handle invalid sample_rate values gracefully
            return False

    def increment(self, metric: str, value: int = 1) -> None:
        """Increment a counter metric.

        Args:
            metric: The metric name, e.g. 'log.warn'
            value: The value to increment by (default: 1)
        """
        if not self._should_sample():
            return

        with self._lock:
            self._counts[metric] += value
            total = self._counts[metric]
        logger.debug(
            "Telemetry counter: %s",
            {"metric": metric, "type": "counter", "value": value, "total": total},
        )

    def counts(self) -> dict[str, int]:
        """Snapshot of all counters recorded so far."""
        with self._lock:
            return dict(self._counts)
