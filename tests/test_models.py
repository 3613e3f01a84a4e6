"""Tests for data model classes."""
import pytest

from tf_tutor.errors import InvalidQuestionError
from tf_tutor.models import ProgressSnapshot, Question


def test_question_from_dict():
    q = Question.from_dict({"area": "Python", "text": "Tuples are immutable.", "true": True})
    assert q.area == "Python"
    assert q.text == "Tuples are immutable."
    assert q.is_true is True


def test_question_to_dict_uses_true_key():
    q = Question(area="A", text="x", is_true=False)
    assert q.to_dict() == {"area": "A", "text": "x", "true": False}


def test_question_is_frozen():
    q = Question(area="A", text="x", is_true=True)
    with pytest.raises(AttributeError):
        q.text = "changed"


def test_question_from_dict_missing_field():
    with pytest.raises(InvalidQuestionError, match="true"):
        Question.from_dict({"area": "A", "text": "x"})


def test_question_from_dict_wrong_types():
    with pytest.raises(InvalidQuestionError):
        Question.from_dict({"area": "A", "text": "x", "true": "yes"})


def test_question_from_dict_not_a_dict():
    with pytest.raises(InvalidQuestionError):
        Question.from_dict(["A", "x", True])


def test_invalid_question_error_is_value_error():
    with pytest.raises(ValueError):
        Question.from_dict({})


def test_snapshot_defaults_empty():
    s = ProgressSnapshot()
    assert s.average_by_area == {}
    assert s.incorrect_questions == []
