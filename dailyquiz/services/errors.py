"""Errors raised by the quiz services and caught by the Streamlit views."""


class QuizAppError(Exception):
    """Base class for everything the views know how to display."""


class QuizNotFoundError(QuizAppError):
    """No quiz has been published for the requested date."""

    def __init__(self, date):
        self.date = date
        super().__init__(f"No quiz available for {date}")


class AlreadyCompletedError(QuizAppError):
    """A result is already recorded for the requested date."""

    def __init__(self, date):
        self.date = date
        super().__init__(f"The quiz for {date} has already been completed")


class ValidationError(QuizAppError):
    """Malformed input; the message names the question/field that failed."""


class DuplicateQuizError(ValidationError):
    def __init__(self, date):
        self.date = date
        super().__init__(f"A quiz already exists for {date}")


class StorageError(QuizAppError):
    """The database layer failed."""
