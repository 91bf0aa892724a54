"""Mental wellness assessment endpoints.

Sessions live in memory only. Engine errors map to client errors here:
unknown session -> 404, invalid answer -> 422, anything out of sequence
-> 409.
"""

import logging

from fastapi import APIRouter, HTTPException, Query, status

from carecompanion.api.deps import SessionStore
from carecompanion.assessment import (
    AssessmentIncompleteError,
    AssessmentSession,
    EmptyResponseSetError,
    InvalidAnswerError,
    SequenceCompleteError,
    SessionNotFoundError,
    answer,
    get_current_question,
    get_question_bank,
    reset_session,
)
from carecompanion.core.config import settings
from carecompanion.schemas.assessment import (
    AssessmentResultRead,
    QuestionRead,
    ResourceRead,
    StartAssessmentRequest,
    StartAssessmentResponse,
    SubmitAnswerRequest,
    SubmitAnswerResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_session(store: SessionStore, session_id: str) -> AssessmentSession:
    try:
        return store.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assessment session not found",
        )


def _current_question(session: AssessmentSession) -> QuestionRead | None:
    if session.collector.is_complete:
        return None
    return QuestionRead.from_item(get_current_question(session))


@router.get(
    "/questions",
    response_model=list[QuestionRead],
)
async def list_questions(
    audience: str = Query(default=settings.default_audience, max_length=50),
) -> list[QuestionRead]:
    """List the questions that would be asked for an audience."""
    items = get_question_bank().filter_for_audience(audience)
    return [QuestionRead.from_item(item) for item in items]


@router.post(
    "/start",
    response_model=StartAssessmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def start_assessment(
    request: StartAssessmentRequest,
    store: SessionStore,
) -> StartAssessmentResponse:
    """Start a new assessment session."""
    audience = request.audience or settings.default_audience
    session = store.start(audience)

    return StartAssessmentResponse(
        session_id=session.id,
        audience=session.audience,
        total_questions=len(session.items),
        first_question=_current_question(session),
    )


@router.get(
    "/{session_id}/question",
    response_model=QuestionRead,
)
async def get_question(session_id: str, store: SessionStore) -> QuestionRead:
    """Get the question awaiting an answer."""
    session = _get_session(store, session_id)

    try:
        item = get_current_question(session)
    except SequenceCompleteError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Assessment is complete; request the result instead",
        )

    return QuestionRead.from_item(item)


@router.post(
    "/{session_id}/answer",
    response_model=SubmitAnswerResponse,
)
async def submit_answer(
    session_id: str,
    request: SubmitAnswerRequest,
    store: SessionStore,
) -> SubmitAnswerResponse:
    """Answer the current question and advance."""
    session = _get_session(store, session_id)

    try:
        answer(session, request.value)
    except InvalidAnswerError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "message": "Answer is not one of the question's options",
                "item_id": e.item_id,
                "allowed_values": list(e.allowed),
            },
        )
    except SequenceCompleteError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Assessment is complete; request the result instead",
        )

    answered, total = session.collector.progress
    return SubmitAnswerResponse(
        complete=session.collector.is_complete,
        answered=answered,
        total=total,
        next_question=_current_question(session),
    )


@router.get(
    "/{session_id}/result",
    response_model=AssessmentResultRead,
)
async def get_assessment_result(
    session_id: str,
    store: SessionStore,
) -> AssessmentResultRead:
    """Get scores, severities and the crisis flag for a completed session."""
    _get_session(store, session_id)

    try:
        result = store.result(session_id)
    except AssessmentIncompleteError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except EmptyResponseSetError as e:
        logger.error(f"Session {session_id} completed with no answers: {e}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No answers were recorded for this assessment",
        )

    crisis_message = settings.crisis_message_text if settings.crisis_message_enabled else None
    return AssessmentResultRead.from_result(session_id, result, crisis_message)


@router.get(
    "/{session_id}/resources",
    response_model=list[ResourceRead],
)
async def get_assessment_resources(
    session_id: str,
    store: SessionStore,
) -> list[ResourceRead]:
    """Get resources recommended for a completed session."""
    _get_session(store, session_id)

    try:
        resources = store.recommendations(session_id)
    except AssessmentIncompleteError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except EmptyResponseSetError as e:
        logger.error(f"Session {session_id} completed with no answers: {e}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No answers were recorded for this assessment",
        )

    return [ResourceRead.from_entry(entry) for entry in resources]


@router.post(
    "/{session_id}/reset",
    response_model=StartAssessmentResponse,
)
async def reset_assessment(
    session_id: str,
    store: SessionStore,
) -> StartAssessmentResponse:
    """Discard all answers and start the same session over."""
    session = _get_session(store, session_id)
    reset_session(session)

    return StartAssessmentResponse(
        session_id=session.id,
        audience=session.audience,
        total_questions=len(session.items),
        first_question=_current_question(session),
    )


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def discard_assessment(session_id: str, store: SessionStore) -> None:
    """Discard a session and its answers."""
    try:
        store.discard(session_id)
    except SessionNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assessment session not found",
        )
