"""Session-level API over the assessment engine.

A session bundles everything one run needs: the audience, the filtered
items, a collector, and the result once computed. Sessions share nothing
with each other; the bank and catalog they read from are immutable.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from carecompanion.assessment.aggregator import compute
from carecompanion.assessment.bank import QuestionBank, ResourceCatalog
from carecompanion.assessment.collector import ResponseCollector
from carecompanion.assessment.errors import AssessmentIncompleteError
from carecompanion.assessment.loader import get_question_bank, get_resource_catalog
from carecompanion.assessment.models import (
    AssessmentItem,
    AssessmentResult,
    CollectorState,
    ResourceEntry,
)
from carecompanion.assessment.recommender import recommend


@dataclass
class AssessmentSession:
    """State of a single assessment run."""

    audience: str
    collector: ResponseCollector
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    result: AssessmentResult | None = None

    @property
    def items(self) -> tuple[AssessmentItem, ...]:
        return self.collector.items

    @property
    def state(self) -> CollectorState:
        return self.collector.state


def start_session(audience: str, bank: QuestionBank | None = None) -> AssessmentSession:
    """Filter the bank for an audience and open a new session."""
    if bank is None:
        bank = get_question_bank()
    items = bank.filter_for_audience(audience)
    return AssessmentSession(audience=audience, collector=ResponseCollector(items))


def get_current_question(session: AssessmentSession) -> AssessmentItem:
    """Return the question awaiting an answer.

    Raises:
        SequenceCompleteError: If the session has no questions left
    """
    return session.collector.current_item()


def answer(session: AssessmentSession, value: int) -> CollectorState:
    """Answer the current question and advance.

    Raises:
        InvalidAnswerError: If value is not an option of the current question
        SequenceCompleteError: If the session has no questions left
    """
    return session.collector.submit_answer(value)


def get_result(session: AssessmentSession) -> AssessmentResult:
    """Return the session's result, computing it on first request.

    Raises:
        AssessmentIncompleteError: If questions remain unanswered
        EmptyResponseSetError: If the session had no questions to answer
    """
    if not session.collector.is_complete:
        answered, total = session.collector.progress
        raise AssessmentIncompleteError(
            f"Assessment incomplete: {answered} of {total} questions answered"
        )

    if session.result is None:
        session.result = compute(session.collector.responses, session.items)
    return session.result


def get_recommendations(
    session: AssessmentSession,
    catalog: ResourceCatalog | None = None,
) -> tuple[ResourceEntry, ...]:
    """Recommend resources for a completed session."""
    if catalog is None:
        catalog = get_resource_catalog()
    return recommend(get_result(session), session.audience, catalog)


def reset_session(session: AssessmentSession) -> None:
    """Restart the session from its first question."""
    session.collector.reset()
    session.result = None
