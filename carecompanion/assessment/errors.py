"""Errors raised by the wellness assessment engine."""


class AssessmentError(Exception):
    """Base exception for assessment engine errors."""

    pass


class InvalidAnswerError(AssessmentError):
    """Raised when an answer is not one of the current item's option values.

    The session is left unchanged; the caller should re-prompt.
    """

    def __init__(self, item_id: str, value: object, allowed: tuple[int, ...]) -> None:
        self.item_id = item_id
        self.value = value
        self.allowed = allowed
        super().__init__(
            f"Invalid answer {value!r} for item {item_id}; expected one of {list(allowed)}"
        )


class SequenceCompleteError(AssessmentError):
    """Raised when reading or answering past the last question."""

    pass


class EmptyResponseSetError(AssessmentError):
    """Raised when aggregation is attempted with no answers.

    Indicates a caller bug; never retried.
    """

    pass


class AssessmentIncompleteError(AssessmentError):
    """Raised when a result is requested before every question is answered."""

    pass


class SessionNotFoundError(AssessmentError):
    """Raised when a session id is unknown or has expired."""

    pass


class CatalogError(AssessmentError):
    """Raised when a question bank or resource catalog is malformed."""

    pass
