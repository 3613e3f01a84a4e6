import random

import pytest

from tf_tutor.bank import QuestionStore
from tf_tutor.db import MemoryStore
from tf_tutor.models import Question
from tf_tutor.persistence import PersistenceAdapter
from tf_tutor.progress import ProgressTracker


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    return str(tmp_path / "test_tutor.db")


@pytest.fixture
def sample_bank():
    return [
        Question(area="A", text="x", is_true=True),
        Question(area="A", text="y", is_true=False),
        Question(area="B", text="z", is_true=True),
    ]


@pytest.fixture
def store(sample_bank):
    s = QuestionStore()
    s.load(sample_bank)
    return s


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def tracker(store, memory_store, rng):
    return ProgressTracker(store, PersistenceAdapter(memory_store), rng=rng)
