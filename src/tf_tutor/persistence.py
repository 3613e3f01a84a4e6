"""Snapshot (de)serialization between progress state and a key/value store.

Every value is stored as JSON under its own key:

    averageScores               area -> float
    viewedByArea                area -> [text, ...]
    incorrectQuestions          [{"area", "text", "true"}, ...]
    incorrectQuestionsTextSet   [text, ...]
    viewedQuestionTextSet       [text, ...]
    questions                   cached bank, [{"area", "text", "true"}, ...]
    selectedAreas               [area, ...] last selection made in the CLI

The store needs ``get(key)``, ``set(key, value)``, ``set_many(items)`` and
``remove(key)``; ``set_many`` writes all items or none.
"""
import json

from tf_tutor.errors import InvalidQuestionError, PersistenceReadError, PersistenceWriteError
from tf_tutor.models import ProgressSnapshot, Question

AVERAGE_SCORES_KEY = "averageScores"
VIEWED_BY_AREA_KEY = "viewedByArea"
INCORRECT_QUESTIONS_KEY = "incorrectQuestions"
INCORRECT_TEXTS_KEY = "incorrectQuestionsTextSet"
VIEWED_TEXTS_KEY = "viewedQuestionTextSet"
QUESTIONS_KEY = "questions"
SELECTED_AREAS_KEY = "selectedAreas"

PROGRESS_KEYS = (
    AVERAGE_SCORES_KEY,
    VIEWED_BY_AREA_KEY,
    INCORRECT_QUESTIONS_KEY,
    INCORRECT_TEXTS_KEY,
    VIEWED_TEXTS_KEY,
)


def _string_list(value, key: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise PersistenceReadError(f"{key} must be a list of strings")
    return value


def _question_list(value, key: str) -> list[Question]:
    if not isinstance(value, list):
        raise PersistenceReadError(f"{key} must be a list of questions")
    try:
        return [Question.from_dict(item) for item in value]
    except InvalidQuestionError as e:
        raise PersistenceReadError(f"{key}: {e}") from e


class PersistenceAdapter:
    def __init__(self, store):
        self.store = store

    def _write(self, key: str, value) -> None:
        try:
            self.store.set(key, json.dumps(value))
        except Exception as e:
            raise PersistenceWriteError(f"Could not write {key}: {e}") from e

    def _read(self, key: str):
        try:
            raw = self.store.get(key)
        except Exception as e:
            raise PersistenceReadError(f"Could not read {key}: {e}") from e
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            raise PersistenceReadError(f"{key} is not valid JSON: {e}") from e

    def save_snapshot(self, snapshot: ProgressSnapshot) -> None:
        values = {
            AVERAGE_SCORES_KEY: snapshot.average_by_area,
            VIEWED_BY_AREA_KEY: {area: sorted(texts) for area, texts in snapshot.viewed_by_area.items()},
            INCORRECT_QUESTIONS_KEY: [q.to_dict() for q in snapshot.incorrect_questions],
            INCORRECT_TEXTS_KEY: sorted(snapshot.incorrect_texts),
            VIEWED_TEXTS_KEY: sorted(snapshot.viewed_texts),
        }
        try:
            self.store.set_many([(key, json.dumps(value)) for key, value in values.items()])
        except Exception as e:
            raise PersistenceWriteError(f"Could not write progress snapshot: {e}") from e

    def load_snapshot(self) -> ProgressSnapshot | None:
        """Read stored progress. Returns None if nothing was ever saved.

        Raises:
            PersistenceReadError: a stored value is unreadable or has the wrong shape.
        """
        raw = {key: self._read(key) for key in PROGRESS_KEYS}
        if all(value is None for value in raw.values()):
            return None

        snapshot = ProgressSnapshot()
        averages = raw[AVERAGE_SCORES_KEY]
        if averages is not None:
            if not isinstance(averages, dict):
                raise PersistenceReadError(f"{AVERAGE_SCORES_KEY} must be an object")
            for area, value in averages.items():
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise PersistenceReadError(f"{AVERAGE_SCORES_KEY}[{area!r}] must be a number")
                snapshot.average_by_area[area] = float(value)

        viewed_by_area = raw[VIEWED_BY_AREA_KEY]
        if viewed_by_area is not None:
            if not isinstance(viewed_by_area, dict):
                raise PersistenceReadError(f"{VIEWED_BY_AREA_KEY} must be an object")
            for area, texts in viewed_by_area.items():
                snapshot.viewed_by_area[area] = set(_string_list(texts, VIEWED_BY_AREA_KEY))

        if raw[INCORRECT_QUESTIONS_KEY] is not None:
            snapshot.incorrect_questions = _question_list(raw[INCORRECT_QUESTIONS_KEY], INCORRECT_QUESTIONS_KEY)
        if raw[INCORRECT_TEXTS_KEY] is not None:
            snapshot.incorrect_texts = set(_string_list(raw[INCORRECT_TEXTS_KEY], INCORRECT_TEXTS_KEY))
        if raw[VIEWED_TEXTS_KEY] is not None:
            snapshot.viewed_texts = set(_string_list(raw[VIEWED_TEXTS_KEY], VIEWED_TEXTS_KEY))
        return snapshot

    def save_questions(self, questions) -> None:
        self._write(QUESTIONS_KEY, [q.to_dict() for q in questions])

    def load_questions(self) -> list[Question] | None:
        data = self._read(QUESTIONS_KEY)
        if data is None:
            return None
        return _question_list(data, QUESTIONS_KEY)

    def clear_cached_questions(self) -> None:
        """Drop the cached bank so the next start reloads it; progress is kept."""
        try:
            self.store.remove(QUESTIONS_KEY)
        except Exception as e:
            raise PersistenceWriteError(f"Could not remove {QUESTIONS_KEY}: {e}") from e

    def save_selected_areas(self, areas) -> None:
        self._write(SELECTED_AREAS_KEY, list(areas))

    def load_selected_areas(self) -> list[str] | None:
        data = self._read(SELECTED_AREAS_KEY)
        if data is None:
            return None
        return _string_list(data, SELECTED_AREAS_KEY)
