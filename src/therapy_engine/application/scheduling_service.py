"""Serviço de aplicação: engine + store com escrita condicional.

Fecha a corrida entre detecção e escrita descrita no engine:
lê as revisões dos escopos → lê snapshot → decide → grava condicionado à
versão da sessão E às revisões lidas → em conflito, relê e decide de novo
(até `schedule_retry_attempts` vezes). Uma gravação concorrente de outra
sessão do mesmo terapeuta invalida a decisão, não só uma edição da própria.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from therapy_engine.application.lifecycle_engine import EngineResult, SessionLifecycleEngine
from therapy_engine.config.settings import Settings, get_settings
from therapy_engine.domain.models import Session
from therapy_engine.domain.protocols.session_store import (
    SessionStoreProtocol,
    VersionConflictError,
    therapist_scope,
    therapy_scope,
)
from therapy_engine.domain.session.states import INACTIVE_STATUSES, SessionStatus
from therapy_engine.domain.session.transitions import is_valid_transition
from therapy_engine.observability.context import operation_scope
from therapy_engine.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

Decision = Callable[[Session], EngineResult]
Scopes = Callable[[Session], set[str]]


class SchedulingService:
    """Orquestra decisões do engine contra um SessionStore."""

    def __init__(
        self,
        store: SessionStoreProtocol,
        engine: SessionLifecycleEngine | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._store = store
        self._settings = settings or get_settings()
        self._engine = engine or SessionLifecycleEngine(settings=self._settings)

    def schedule(
        self, session_id: str, proposed_start: datetime, duration: int
    ) -> EngineResult:
        """Agenda a sessão contra a agenda atual do terapeuta."""

        def decide(session: Session) -> EngineResult:
            return self._engine.request_schedule(
                session, proposed_start, duration, self._conflict_pool(session)
            )

        def scopes(session: Session) -> set[str]:
            return {self._pool_scope(session)}

        return self._commit(session_id, "schedule", decide, scopes)

    def transition(self, session_id: str, target: SessionStatus | str) -> EngineResult:
        """Aplica mudança de status usando as irmãs atuais da terapia.

        Reativar uma sessão Cancelled/NoShow (→ Scheduled) volta a ocupar a
        agenda: o horário gravado passa pela detecção de conflitos como em
        `schedule`. Sem data gravada, MalformedInputError orienta a usar
        `schedule` com um novo horário.
        """

        def decide(session: Session) -> EngineResult:
            if _reactivates(session, target):
                return self._engine.request_schedule(
                    session,
                    session.scheduled_date,
                    session.duration or self._settings.default_session_duration,
                    self._conflict_pool(session),
                )
            siblings = self._store.list_by_therapy(session.therapy_id)
            return self._engine.request_transition(session, target, siblings)

        def scopes(session: Session) -> set[str]:
            watched = {therapy_scope(session.therapy_id)}
            if _reactivates(session, target):
                watched.add(self._pool_scope(session))
            return watched

        return self._commit(session_id, "transition", decide, scopes)

    def _conflict_pool(self, session: Session) -> list[Session]:
        if session.therapist_id:
            return self._store.list_by_therapist(session.therapist_id)
        return self._store.list_by_therapy(session.therapy_id)

    def _pool_scope(self, session: Session) -> str:
        if session.therapist_id:
            return therapist_scope(session.therapist_id)
        return therapy_scope(session.therapy_id)

    def _commit(
        self, session_id: str, operation: str, decide: Decision, scopes: Scopes
    ) -> EngineResult:
        max_attempts = max(self._settings.schedule_retry_attempts, 0) + 1
        attempt = 0

        with operation_scope(operation):
            while True:
                attempt += 1
                session = self._store.load(session_id)
                # Revisões lidas antes do snapshot usado na decisão
                revisions = {scope: self._store.revision(scope) for scope in scopes(session)}
                result = decide(session)
                if not result.ok or result.session is None:
                    return result

                try:
                    saved = self._store.save(
                        result.session,
                        expected_version=session.version,
                        expected_revisions=revisions,
                    )
                except VersionConflictError as exc:
                    extra = {
                        "session_id": session_id,
                        "attempt": attempt,
                        "scope": exc.scope,
                    }
                    if attempt >= max_attempts:
                        logger.error("Write conflict persisted after retries", extra=extra)
                        raise
                    logger.warning("Write conflict; re-running decision", extra=extra)
                    continue

                return EngineResult.accepted(saved)


def _reactivates(session: Session, target: SessionStatus | str) -> bool:
    return (
        target == SessionStatus.SCHEDULED
        and session.status in INACTIVE_STATUSES
        and is_valid_transition(session.status, SessionStatus.SCHEDULED)
    )
