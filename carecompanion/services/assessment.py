"""In-memory hosting of assessment sessions.

Sessions are never persisted. Each lives in this store until it is
discarded or its TTL passes; expired sessions are pruned whenever a new
one starts. The store is only touched from the event loop, so it needs
no locking.
"""

import logging
from datetime import datetime, timedelta, timezone

from carecompanion.assessment import (
    AssessmentResult,
    AssessmentSession,
    QuestionBank,
    ResourceCatalog,
    ResourceEntry,
    SessionNotFoundError,
    get_recommendations,
    get_result,
    start_session,
)
from carecompanion.core.config import settings
from carecompanion.core.logging import safety_logger

logger = logging.getLogger(__name__)


class AssessmentSessionStore:
    """Session registry keyed by session id."""

    def __init__(
        self,
        ttl_minutes: int | None = None,
        bank: QuestionBank | None = None,
        catalog: ResourceCatalog | None = None,
    ) -> None:
        self.ttl = timedelta(
            minutes=ttl_minutes if ttl_minutes is not None
            else settings.assessment_session_ttl_minutes
        )
        self.bank = bank
        self.catalog = catalog
        self._sessions: dict[str, AssessmentSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def start(self, audience: str) -> AssessmentSession:
        """Open and register a new session for an audience."""
        self.prune_expired()

        session = start_session(audience, bank=self.bank)
        self._sessions[session.id] = session

        logger.info(
            f"Started assessment session {session.id} "
            f"(audience={audience}, questions={len(session.items)})"
        )
        return session

    def get(self, session_id: str) -> AssessmentSession:
        """Fetch a live session.

        Raises:
            SessionNotFoundError: If the id is unknown or expired
        """
        session = self._sessions.get(session_id)
        if session is None or self._is_expired(session):
            self._sessions.pop(session_id, None)
            raise SessionNotFoundError(f"Assessment session {session_id} not found")
        return session

    def discard(self, session_id: str) -> None:
        """Drop a session and everything recorded in it."""
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(f"Assessment session {session_id} not found")
        logger.info(f"Discarded assessment session {session_id}")

    def result(self, session_id: str) -> AssessmentResult:
        """Return the result of a completed session.

        The crisis flag is reported to the safety log the first time the
        result is produced.
        """
        session = self.get(session_id)
        first_time = session.result is None
        result = get_result(session)

        if first_time:
            logger.info(
                f"Completed assessment session {session.id} "
                f"(overall_score={result.overall_score})"
            )
            if result.crisis_flagged:
                safety_logger.crisis_flagged(session.id, session.audience)

        return result

    def recommendations(self, session_id: str) -> tuple[ResourceEntry, ...]:
        """Return resources for a completed session."""
        self.result(session_id)
        return get_recommendations(self.get(session_id), catalog=self.catalog)

    def prune_expired(self) -> int:
        """Remove expired sessions and return how many were removed."""
        expired = [sid for sid, s in self._sessions.items() if self._is_expired(s)]
        for session_id in expired:
            del self._sessions[session_id]
        if expired:
            logger.debug(f"Pruned {len(expired)} expired assessment sessions")
        return len(expired)

    def _is_expired(self, session: AssessmentSession) -> bool:
        return datetime.now(timezone.utc) - session.created_at > self.ttl
