"""
Score events and the per-student observer bus.
"""

import logging
import threading
import weakref
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Tuple, Union

from .enums import ScoreEventKind
from .exceptions import NotifyError
from .interfaces import ScoreObserver

logger = logging.getLogger(__name__)

ObserverLike = Union[ScoreObserver, Callable[['ScoreEvent'], Any]]


@dataclass(frozen=True)
class ScoreEvent:
    """A change to one student's score slot for one course.

    Enrollment events carry ``old_score=None`` and ``new_score=None``: the
    slot exists but holds no grade yet.
    """
    student_id: str
    course_id: str
    old_score: Optional[float]
    new_score: Optional[float]
    kind: ScoreEventKind = ScoreEventKind.SCORE_UPDATED
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def enrolled(cls, student_id: str, course_id: str) -> "ScoreEvent":
        return cls(student_id, course_id, None, None, ScoreEventKind.ENROLLED)

    def as_tuple(self) -> Tuple[str, str, Optional[float], Optional[float]]:
        return (self.student_id, self.course_id, self.old_score, self.new_score)


class ObserverBus:
    """Thread-safe, weakly-referencing publisher of score events.

    Subscriptions never keep an observer alive: the bus stores weak
    references and silently drops entries whose target has been collected.
    Delivery is synchronous and in subscription order, under the bus lock.
    """

    def __init__(self, owner_id: str):
        self._owner_id = owner_id
        self._refs: List[weakref.ref] = []
        self._lock = threading.RLock()

    def subscribe(self, observer: ObserverLike) -> None:
        """Subscribe a :class:`ScoreObserver` or a callable taking a :class:`ScoreEvent`."""
        if not isinstance(observer, ScoreObserver) and not callable(observer):
            raise TypeError(f"Observer must be a ScoreObserver or callable, got {type(observer).__name__}")
        if hasattr(observer, '__self__') and hasattr(observer, '__func__'):
            ref = weakref.WeakMethod(observer)
        else:
            ref = weakref.ref(observer)
        with self._lock:
            self._refs.append(ref)

    @property
    def subscriber_count(self) -> int:
        """Number of subscribers still alive."""
        with self._lock:
            return sum(1 for ref in self._refs if ref() is not None)

    def notify(self, event: ScoreEvent) -> None:
        """Deliver an event to every live subscriber.

        A failing observer does not stop delivery to the rest; all failures
        are raised together as one :class:`NotifyError` afterwards.
        """
        failures: List[Tuple[Any, BaseException]] = []
        with self._lock:
            for ref in list(self._refs):
                observer = ref()
                if observer is None:
                    continue
                try:
                    if isinstance(observer, ScoreObserver):
                        observer.on_score_event(event)
                    else:
                        observer(event)
                except Exception as e:
                    logger.error("Observer %r failed on event for %s/%s: %s",
                                 observer, event.student_id, event.course_id, e)
                    failures.append((observer, e))
            live = [ref for ref in self._refs if ref() is not None]
            dropped = len(self._refs) - len(live)
            if dropped:
                logger.debug("Dropped %d dead observer(s) from bus of %s", dropped, self._owner_id)
                self._refs = live
        if failures:
            raise NotifyError(failures)
