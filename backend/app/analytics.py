import logging
import threading
from collections import deque

from app.core.config import settings
from app.models import AnalyticsEvent, AnalyticsStats, StyleBreakdown

logger = logging.getLogger(__name__)

RECENT_EVENTS_COUNT = 10
DEFAULT_STATS_LIMIT = 100


class AnalyticsRecorder:
    """Append-only, bounded in-memory event log.

    Holds at most `capacity` events; the oldest are evicted first. Appends are
    serialized by a lock, reads take a snapshot copy.
    """

    def __init__(self, capacity: int | None = None):
        self.capacity = capacity or settings.ANALYTICS_CAPACITY
        self._events: deque[AnalyticsEvent] = deque(maxlen=self.capacity)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._events)

    def record(self, **fields) -> AnalyticsEvent:
        """Create an event (id and timestamp assigned here) and append it."""
        event = AnalyticsEvent(**fields)
        with self._lock:
            self._events.append(event)
        logger.debug("Recorded analytics event %s (%s)", event.event, event.id)
        return event

    def stats(self, limit: int = DEFAULT_STATS_LIMIT) -> AnalyticsStats:
        """Aggregate the most recent `limit` events."""
        with self._lock:
            snapshot = list(self._events)
        events = snapshot[-limit:] if limit > 0 else []

        total = len(events)
        successful = sum(1 for e in events if e.success)
        breakdown = StyleBreakdown(
            professional=sum(1 for e in events if e.style == "professional"),
            casual=sum(1 for e in events if e.style == "casual"),
            creative=sum(1 for e in events if e.style == "creative"),
        )
        generation_times = [e.generation_time for e in events if e.success and e.generation_time]

        return AnalyticsStats(
            total_requests=total,
            successful_requests=successful,
            failed_requests=total - successful,
            success_rate=(successful / total) * 100 if total else 0,
            style_breakdown=breakdown,
            average_generation_time=(
                sum(generation_times) / len(generation_times) if generation_times else 0
            ),
            recent_events=events[-RECENT_EVENTS_COUNT:],
        )

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


_recorder_instance: AnalyticsRecorder | None = None

def get_analytics_recorder() -> AnalyticsRecorder:
    """Lazily initializes the process-wide analytics recorder."""
    global _recorder_instance
    if _recorder_instance is None:
        _recorder_instance = AnalyticsRecorder()
    return _recorder_instance
