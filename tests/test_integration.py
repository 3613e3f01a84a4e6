# tests/test_integration.py
"""End-to-end test of the core workflow."""
import random

import pytest

from tf_tutor.bank import QuestionStore
from tf_tutor.db import SqliteStore
from tf_tutor.models import Question
from tf_tutor.persistence import PersistenceAdapter
from tf_tutor.progress import ProgressTracker
from tf_tutor.selection import SelectionEngine


def test_answer_sequence_updates_counts(tmp_db):
    bank = [Question("A", "x", True), Question("A", "y", False), Question("B", "z", True)]
    store = QuestionStore()
    store.load(bank)
    tracker = ProgressTracker(store, PersistenceAdapter(SqliteStore(tmp_db)), rng=random.Random(0))

    tracker.record_answer(bank[0], True)
    tracker.record_answer(bank[1], False)

    assert tracker.incorrect_count == 1
    assert tracker.viewed_count == 2
    assert tracker.average_for("A") == pytest.approx(0.05 * 0 + 0.95 * 1)

    # A fresh session on the same database picks up where we left off
    restored = ProgressTracker(store, PersistenceAdapter(SqliteStore(tmp_db)))
    restored.restore()
    assert restored.snapshot() == tracker.snapshot()


def test_quiz_until_area_exhausted(tmp_db):
    bank = [Question(area=f"area{i % 3}", text=f"statement {i}", is_true=i % 2 == 0) for i in range(30)]
    store = QuestionStore()
    store.load(bank)
    rng = random.Random(2024)
    tracker = ProgressTracker(store, PersistenceAdapter(SqliteStore(tmp_db)), rng=rng)
    engine = SelectionEngine(tracker)

    areas = {"area0", "area1"}
    for _ in range(200):
        q = engine.next_question(areas)
        assert q.area in areas
        # Learner always gets area1 wrong
        tracker.record_answer(q, q.area != "area1")

    assert tracker.viewed_count_for("area0") == 10
    assert tracker.viewed_count_for("area1") == 10
    assert tracker.viewed_count_for("area2") == 0
    assert tracker.incorrect_count == 10
    assert all(q.area == "area1" for q in tracker.incorrect_questions())
    assert tracker.average_for("area0") == pytest.approx(1.0)
    assert tracker.average_for("area1") == 0.0

    tracker.reset()
    assert tracker.viewed_ratio == 0
    assert tracker.incorrect_ratio == 0
