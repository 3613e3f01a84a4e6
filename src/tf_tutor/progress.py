"""Learner progress: viewed questions, missed questions and per-area averages."""
import random

from tf_tutor.bank import QuestionStore
from tf_tutor.errors import PersistenceError
from tf_tutor.logging_config import get_logger
from tf_tutor.models import ProgressSnapshot, Question

logger = get_logger(__name__)

# Smoothing constant for the per-area moving average (half-life ~14 answers)
ALPHA = 0.05
# Chance that a correct answer clears a question from the review pool
GRADUATION_PROBABILITY = 0.10


class ProgressTracker:
    """Owns the mutable progress state for one session.

    Question identity is the question text: two questions with the same
    text count as one, whatever their area.

    Args:
        store: The loaded question bank.
        persistence: Adapter that snapshots state after each change. Optional.
        rng: Random source for the graduation roll.
    """

    def __init__(self, store: QuestionStore, persistence=None, rng: random.Random | None = None):
        self.store = store
        self.persistence = persistence
        self.rng = rng or random.Random()

        self._viewed_texts: set[str] = set()
        self._viewed_by_area: dict[str, set[str]] = {}
        self._incorrect_texts: set[str] = set()
        self._incorrect_questions: list[Question] = []
        self._average_by_area: dict[str, float] = {}

        self._positions_key = None
        self._positions: list[int] = []
        self._unviewed_key = None
        self._unviewed: list[int] = []

    # -- mutation --------------------------------------------------------

    def record_answer(self, question: Question, correct: bool) -> None:
        area = question.area
        score = 1.0 if correct else 0.0
        previous = self._average_by_area.get(area)
        if previous is None:
            self._average_by_area[area] = score
        else:
            self._average_by_area[area] = ALPHA * score + (1 - ALPHA) * previous

        self._viewed_texts.add(question.text)
        self._viewed_by_area.setdefault(area, set()).add(question.text)

        if not correct:
            if question.text not in self._incorrect_texts:
                self._incorrect_questions.append(question)
                self._incorrect_texts.add(question.text)
        elif question.text in self._incorrect_texts and self.rng.random() < GRADUATION_PROBABILITY:
            self._incorrect_questions = [q for q in self._incorrect_questions if q.text != question.text]
            self._incorrect_texts.discard(question.text)
            logger.debug(f"Question cleared from review pool: {question.text!r}", extra={"area": area})

        self._unviewed_key = None
        self._persist()

    def reset(self) -> None:
        """Clear all progress and persist the empty state."""
        (
            self._viewed_texts,
            self._viewed_by_area,
            self._incorrect_texts,
            self._incorrect_questions,
            self._average_by_area,
        ) = set(), {}, set(), [], {}
        self.invalidate_caches()
        logger.info("Progress reset")
        self._persist()

    def restore(self) -> None:
        """Load the last snapshot, keeping empty state if it is missing or unreadable."""
        if self.persistence is None:
            return
        try:
            snapshot = self.persistence.load_snapshot()
        except PersistenceError:
            logger.exception("Stored progress is unreadable; starting with empty progress")
            return
        if snapshot is None:
            return
        self._apply(snapshot)
        logger.info(f"Restored progress: {len(self._viewed_texts)} viewed, {len(self._incorrect_texts)} to review")

    def _apply(self, snapshot: ProgressSnapshot) -> None:
        incorrect_questions = []
        incorrect_texts = set()
        for question in snapshot.incorrect_questions:
            if question.text not in incorrect_texts:
                incorrect_questions.append(question)
                incorrect_texts.add(question.text)
        if incorrect_texts != snapshot.incorrect_texts:
            logger.warning("Stored incorrect-question sets disagree; using the question records")

        viewed_by_area = {area: set(texts) for area, texts in snapshot.viewed_by_area.items()}
        placed = set().union(*viewed_by_area.values())
        for text in snapshot.viewed_texts - placed:
            area = self.store.area_of(text)
            if area is None:
                logger.warning(f"Dropping viewed question with unknown area: {text!r}")
                continue
            viewed_by_area.setdefault(area, set()).add(text)
            placed.add(text)

        self._average_by_area = dict(snapshot.average_by_area)
        self._viewed_by_area = viewed_by_area
        self._viewed_texts = placed
        self._incorrect_questions = incorrect_questions
        self._incorrect_texts = incorrect_texts
        self.invalidate_caches()

    def _persist(self) -> None:
        if self.persistence is None:
            return
        try:
            self.persistence.save_snapshot(self.snapshot())
        except PersistenceError:
            logger.exception("Could not save progress")

    def add_extra_questions(self, questions) -> int:
        """Append questions to the bank, skipping any already viewed."""
        added = self.store.add_extra_questions(questions, exclude_texts=self._viewed_texts)
        self.invalidate_caches()
        return added

    # -- caches ----------------------------------------------------------

    def invalidate_caches(self) -> None:
        self._positions_key = None
        self._unviewed_key = None

    def _cache_key(self, areas) -> tuple:
        return (frozenset(areas), self.store.revision)

    def positions_for(self, areas) -> list[int]:
        """Bank positions in the given areas, in bank area order."""
        key = self._cache_key(areas)
        if key != self._positions_key:
            wanted = key[0]
            self._positions = self.store.positions_for_areas(a for a in self.store.areas() if a in wanted)
            self._positions_key = key
        return self._positions

    def unviewed_positions_for(self, areas) -> list[int]:
        key = self._cache_key(areas)
        if key != self._unviewed_key:
            self._unviewed = [
                p for p in self.positions_for(areas)
                if self.store.question_at(p).text not in self._viewed_texts
            ]
            self._unviewed_key = key
        return self._unviewed

    def incorrect_for(self, areas) -> list[Question]:
        wanted = set(areas)
        return [q for q in self._incorrect_questions if q.area in wanted]

    def has_incorrect_in(self, areas) -> bool:
        wanted = set(areas)
        return any(q.area in wanted for q in self._incorrect_questions)

    # -- read accessors --------------------------------------------------

    def average_for(self, area: str) -> float | None:
        return self._average_by_area.get(area)

    def viewed_count_for(self, area: str) -> int:
        return len(self._viewed_by_area.get(area, ()))

    @property
    def viewed_count(self) -> int:
        return len(self._viewed_texts)

    @property
    def viewed_ratio(self) -> float:
        if not len(self.store):
            return 0.0
        return self.viewed_count / len(self.store)

    @property
    def incorrect_count(self) -> int:
        return len(self._incorrect_questions)

    @property
    def incorrect_ratio(self) -> float:
        if not len(self.store):
            return 0.0
        return self.incorrect_count / len(self.store)

    def is_viewed(self, question: Question) -> bool:
        return question.text in self._viewed_texts

    def is_incorrect(self, question: Question) -> bool:
        return question.text in self._incorrect_texts

    def average_scores(self) -> dict[str, float]:
        return dict(self._average_by_area)

    def viewed_by_area(self) -> dict[str, set[str]]:
        return {area: set(texts) for area, texts in self._viewed_by_area.items()}

    def viewed_texts(self) -> set[str]:
        return set(self._viewed_texts)

    def incorrect_texts(self) -> set[str]:
        return set(self._incorrect_texts)

    def incorrect_questions(self) -> list[Question]:
        return list(self._incorrect_questions)

    def snapshot(self) -> ProgressSnapshot:
        return ProgressSnapshot(
            average_by_area=self.average_scores(),
            viewed_by_area=self.viewed_by_area(),
            incorrect_questions=self.incorrect_questions(),
            incorrect_texts=self.incorrect_texts(),
            viewed_texts=self.viewed_texts(),
        )
