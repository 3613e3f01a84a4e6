"""Question bank loading from JSON and YAML files."""
import json
from pathlib import Path

from tf_tutor.errors import InvalidQuestionError, PersistenceError
from tf_tutor.logging_config import get_logger
from tf_tutor.models import Question

logger = get_logger(__name__)


def read_bank_records(file_path: str) -> list:
    """Read raw question records from a bank file.

    Accepts a bare list of records or an object with a ``questions`` list.
    """
    path = Path(file_path)
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        import yaml
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    else:
        data = json.loads(path.read_text(encoding="utf-8"))

    if isinstance(data, dict):
        data = data.get("questions")
    if not isinstance(data, list):
        raise InvalidQuestionError(f"{path.name}: expected a list of questions")
    if suffix in (".yaml", ".yml"):
        # YAML 1.1 reads an unquoted `true:` key as the boolean True
        data = [
            {("true" if k is True else k): v for k, v in r.items()} if isinstance(r, dict) else r
            for r in data
        ]
    return data


def parse_questions(records: list) -> list[Question]:
    return [Question.from_dict(r) for r in records]


def read_bank_file(file_path: str) -> list[Question]:
    return parse_questions(read_bank_records(file_path))


def load_bank(persistence, file_path: str) -> list[Question]:
    """Return the cached bank if there is one, else read the file and cache it.

    A cached copy that cannot be read is ignored and the file is used instead.
    """
    try:
        cached = persistence.load_questions()
    except PersistenceError:
        logger.exception("Cached question bank is unreadable; reloading from file")
        cached = None
    if cached:
        logger.debug(f"Using cached bank of {len(cached)} questions")
        return cached

    questions = read_bank_file(file_path)
    try:
        persistence.save_questions(questions)
    except PersistenceError:
        logger.exception("Could not cache question bank")
    return questions


def import_file(tracker, file_path: str) -> dict:
    """Add the questions in a bank file to the running session."""
    questions = read_bank_file(file_path)
    added = tracker.add_extra_questions(questions)
    return {"filename": Path(file_path).name, "read": len(questions), "added": added}
