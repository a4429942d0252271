"""
Random WAM updates for demonstrations.
"""

import logging
import random
import time
from typing import List, Optional, Tuple

from ..core.exceptions import ValidationError
from .registry import Registry

logger = logging.getLogger(__name__)


class WamSimulator:
    """Applies a uniformly drawn score to every enrollment in the registry."""

    def __init__(self, registry: Registry, rng: Optional[random.Random] = None,
                 low: float = 50.0, high: float = 95.0, delay: float = 0.0):
        if not 0.0 <= low <= high <= 100.0:
            raise ValidationError(f"Invalid simulation range [{low}, {high}]",
                                  details={'low': low, 'high': high})
        self._registry = registry
        self._rng = rng or random.Random()
        self._low = low
        self._high = high
        self._delay = delay

    def run(self) -> List[Tuple[str, str, float]]:
        """Update every enrolled course of every student, in registration order.

        Returns the (student name, course id, score) triples applied.
        """
        applied = []
        for student in self._registry.all_students():
            for course_id in sorted(student.enrollments):
                score = self._rng.uniform(self._low, self._high)
                student.update_score(course_id, score)
                applied.append((student.name, course_id, score))
                logger.debug("Simulated %s %s -> %.1f", student.id, course_id, score)
                if self._delay:
                    time.sleep(self._delay)
        return applied
