"""Adaptive next-question selection.

Each pick first decides between the general pool and the review pool
(questions answered wrong and not yet cleared). The review pool is chosen
with probability ``1 - 1/boost_factor`` whenever it has questions in the
selected areas. Inside the general pool, unviewed questions are preferred
90% of the time; otherwise, or when everything has been seen, any question
in the selected areas may come up.
"""
import math
import random

from tf_tutor.errors import EmptyBankError, NoQuestionsAvailableError
from tf_tutor.logging_config import get_logger
from tf_tutor.models import Question
from tf_tutor.progress import ProgressTracker

logger = get_logger(__name__)

DEFAULT_BOOST_FACTOR = 1.5
MIN_BOOST_FACTOR = 1.1
UNVIEWED_PREFERENCE = 0.9


def normalize_boost_factor(boost_factor: float | None) -> float:
    if boost_factor is None:
        return DEFAULT_BOOST_FACTOR
    if not math.isfinite(boost_factor):
        logger.warning(f"Boost factor {boost_factor} is not a finite number; using {DEFAULT_BOOST_FACTOR}")
        return DEFAULT_BOOST_FACTOR
    if boost_factor < MIN_BOOST_FACTOR:
        logger.warning(f"Boost factor {boost_factor} is below {MIN_BOOST_FACTOR}; using {MIN_BOOST_FACTOR}")
        return MIN_BOOST_FACTOR
    return boost_factor


class SelectionEngine:
    def __init__(self, tracker: ProgressTracker, rng: random.Random | None = None):
        self.tracker = tracker
        self.store = tracker.store
        self.rng = rng or tracker.rng

    def next_question(self, allowed_areas, boost_factor: float | None = None) -> Question:
        """Pick the next question from ``allowed_areas``.

        Raises:
            EmptyBankError: no bank has been loaded.
            NoQuestionsAvailableError: none of the areas has any question.
        """
        if not len(self.store):
            raise EmptyBankError("No questions loaded")
        allowed_areas = set(allowed_areas)
        if not self.tracker.positions_for(allowed_areas):
            raise NoQuestionsAvailableError(
                f"No questions in selected areas: {', '.join(sorted(allowed_areas)) or '(none)'}"
            )

        boost_factor = normalize_boost_factor(boost_factor)
        use_all_threshold = 1.0 / boost_factor
        has_incorrect = self.tracker.has_incorrect_in(allowed_areas)

        if self.rng.random() < use_all_threshold or not has_incorrect:
            return self._from_general_pool(allowed_areas)
        return self.rng.choice(self.tracker.incorrect_for(allowed_areas))

    def _from_general_pool(self, allowed_areas: set[str]) -> Question:
        if self.rng.random() < UNVIEWED_PREFERENCE:
            unviewed = self.tracker.unviewed_positions_for(allowed_areas)
            if unviewed:
                return self.store.question_at(self.rng.choice(unviewed))
        return self.store.question_at(self.rng.choice(self.tracker.positions_for(allowed_areas)))
