"""Exception types raised by the quiz engine."""


class TutorError(Exception):
    """Base class for tutor errors."""


class EmptyBankError(TutorError):
    """No questions have been loaded."""


class NoQuestionsAvailableError(TutorError):
    """The selected areas do not match any question in the bank."""


class IndexOutOfRangeError(TutorError, IndexError):
    pass


class InvalidQuestionError(TutorError, ValueError):
    """A bank record is missing fields or has the wrong types."""


class PersistenceError(TutorError):
    pass


class PersistenceWriteError(PersistenceError):
    """The key/value store rejected a write."""


class PersistenceReadError(PersistenceError):
    """Stored progress could not be read or parsed."""
