"""
Ready-made score observers.
"""

import logging
import threading
from typing import List

from ..core.events import ScoreEvent
from ..core.enums import ScoreEventKind
from ..core.interfaces import ScoreObserver

logger = logging.getLogger(__name__)


class ScoreChangeLogger(ScoreObserver):
    """Logs every score event it receives."""

    def __init__(self, level: int = logging.INFO):
        self._level = level

    def on_score_event(self, event: ScoreEvent) -> None:
        at = event.occurred_at.isoformat(timespec="seconds")
        if event.kind is ScoreEventKind.ENROLLED:
            logger.log(self._level, "%s enrolled in %s at %s", event.student_id, event.course_id, at)
            return
        old = "none" if event.old_score is None else f"{event.old_score:.1f}"
        logger.log(self._level, "%s %s: %s -> %.1f at %s",
                   event.student_id, event.course_id, old, event.new_score, at)


class ScoreEventRecorder(ScoreObserver):
    """Keeps every received event in arrival order."""

    def __init__(self):
        self._events: List[ScoreEvent] = []
        self._lock = threading.Lock()

    def on_score_event(self, event: ScoreEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> List[ScoreEvent]:
        with self._lock:
            return self._events.copy()

    def events_for(self, student_id: str, course_id: str) -> List[ScoreEvent]:
        return [e for e in self.events if e.student_id == student_id and e.course_id == course_id]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()
