"""Data classes for the quiz domain model."""
from dataclasses import dataclass, field

from tf_tutor.errors import InvalidQuestionError


@dataclass(frozen=True)
class Question:
    area: str
    text: str
    is_true: bool

    @classmethod
    def from_dict(cls, data: dict) -> "Question":
        """Build a question from a bank record ``{"area", "text", "true"}``."""
        if not isinstance(data, dict):
            raise InvalidQuestionError(f"Question record must be an object, got {type(data).__name__}")
        missing = [k for k in ("area", "text", "true") if k not in data]
        if missing:
            raise InvalidQuestionError(f"Question record missing {', '.join(missing)}: {data!r}")
        area, text, is_true = data["area"], data["text"], data["true"]
        if not isinstance(area, str) or not isinstance(text, str) or not isinstance(is_true, bool):
            raise InvalidQuestionError(f"Question record has wrong field types: {data!r}")
        return cls(area=area, text=text, is_true=is_true)

    def to_dict(self) -> dict:
        return {"area": self.area, "text": self.text, "true": self.is_true}


@dataclass
class ProgressSnapshot:
    """Copy of a tracker's progress state, as stored and restored."""
    average_by_area: dict[str, float] = field(default_factory=dict)
    viewed_by_area: dict[str, set[str]] = field(default_factory=dict)
    incorrect_questions: list[Question] = field(default_factory=list)
    incorrect_texts: set[str] = field(default_factory=set)
    viewed_texts: set[str] = field(default_factory=set)
