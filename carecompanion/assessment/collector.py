"""Response collection for a single assessment walk."""

from typing import Sequence

from carecompanion.assessment.errors import InvalidAnswerError, SequenceCompleteError
from carecompanion.assessment.models import AssessmentItem, CollectorState


class ResponseCollector:
    """Walks a filtered item sequence one answer at a time.

    The collector owns the only mutable state in a session: the cursor and
    the recorded responses. It does no I/O.
    """

    def __init__(self, items: Sequence[AssessmentItem]) -> None:
        self._items = tuple(items)
        self._responses: dict[str, int] = {}
        self._cursor = 0

    @property
    def items(self) -> tuple[AssessmentItem, ...]:
        return self._items

    @property
    def state(self) -> CollectorState:
        if self._cursor >= len(self._items):
            return CollectorState.COMPLETE
        return CollectorState.COLLECTING

    @property
    def is_complete(self) -> bool:
        return self.state == CollectorState.COMPLETE

    @property
    def responses(self) -> dict[str, int]:
        """Copy of the recorded responses keyed by item id."""
        return dict(self._responses)

    @property
    def progress(self) -> tuple[int, int]:
        """(answered, total) for progress display."""
        return self._cursor, len(self._items)

    def current_item(self) -> AssessmentItem:
        """Return the item awaiting an answer.

        Raises:
            SequenceCompleteError: If every item has been answered
        """
        if self.is_complete:
            raise SequenceCompleteError("All questions have been answered")
        return self._items[self._cursor]

    def submit_answer(self, value: int) -> CollectorState:
        """Record an answer for the current item and advance.

        Args:
            value: One of the current item's option values

        Returns:
            The collector state after advancing

        Raises:
            SequenceCompleteError: If every item has already been answered
            InvalidAnswerError: If value is not an option of the current item
        """
        item = self.current_item()

        # bool is an int subclass; True must not pass as 1
        if isinstance(value, bool) or not isinstance(value, int) or value not in item.option_values:
            raise InvalidAnswerError(item.id, value, item.option_values)

        self._responses[item.id] = value
        self._cursor += 1
        return self.state

    def reset(self) -> None:
        """Discard all answers and return to the first item."""
        self._responses.clear()
        self._cursor = 0
