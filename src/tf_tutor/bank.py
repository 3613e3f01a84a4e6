"""Question bank with an index of positions by area."""
from typing import Iterable

from tf_tutor.errors import EmptyBankError, IndexOutOfRangeError
from tf_tutor.logging_config import get_logger
from tf_tutor.models import Question

logger = get_logger(__name__)


class QuestionStore:
    """Holds the loaded questions and groups their positions by area.

    Dicts keep insertion order, so the index keys double as the list of areas
    in order of first appearance.
    """

    def __init__(self):
        self._questions: list[Question] = []
        self._area_index: dict[str, list[int]] = {}
        self.revision = 0

    def __len__(self) -> int:
        return len(self._questions)

    @property
    def questions(self) -> tuple[Question, ...]:
        return tuple(self._questions)

    def load(self, bank: Iterable[Question]) -> None:
        """Load the bank and build the area index.

        A store that already holds questions keeps them; only the index is
        rebuilt.
        """
        bank = list(bank)
        if self._questions:
            logger.debug("Bank already loaded; rebuilding area index only")
        elif not bank:
            raise EmptyBankError("Cannot load an empty question bank")
        else:
            self._questions = bank
        self._rebuild_index()
        self.revision += 1
        logger.info(f"Loaded {len(self._questions)} questions in {len(self._area_index)} areas")

    def _rebuild_index(self) -> None:
        self._area_index = {}
        for position, question in enumerate(self._questions):
            self._area_index.setdefault(question.area, []).append(position)

    def areas(self) -> list[str]:
        return list(self._area_index)

    def positions_for_areas(self, areas: Iterable[str]) -> list[int]:
        """Positions of every question in the given areas; unknown areas are skipped."""
        positions = []
        for area in areas:
            positions.extend(self._area_index.get(area, ()))
        return positions

    def area_size(self, area: str) -> int:
        return len(self._area_index.get(area, ()))

    def question_at(self, position: int) -> Question:
        if not 0 <= position < len(self._questions):
            raise IndexOutOfRangeError(f"No question at position {position}")
        return self._questions[position]

    def area_of(self, text: str) -> str | None:
        for question in self._questions:
            if question.text == text:
                return question.area
        return None

    def add_extra_questions(self, questions: Iterable[Question], exclude_texts=frozenset()) -> int:
        """Append questions whose text is not in ``exclude_texts``. Returns how many were added."""
        added = 0
        for question in questions:
            if question.text in exclude_texts:
                continue
            self._area_index.setdefault(question.area, []).append(len(self._questions))
            self._questions.append(question)
            added += 1
        if added:
            self.revision += 1
        return added
