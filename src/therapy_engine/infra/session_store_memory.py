"""Implementação de SessionStore em memória (apenas dev/testes)."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import TYPE_CHECKING

from therapy_engine.domain.protocols.session_store import (
    SessionNotFoundError,
    SessionStoreProtocol,
    VersionConflictError,
    session_scopes,
)
from therapy_engine.observability.logging import get_logger

if TYPE_CHECKING:
    from therapy_engine.domain.models import Session

logger: logging.Logger = get_logger(__name__)


class InMemorySessionStore(SessionStoreProtocol):
    """Armazenamento em memória com versionamento otimista (não usar em produção)."""

    def __init__(self, sessions: list[Session] | None = None) -> None:
        self._sessions: dict[str, Session] = {}
        self._revisions: dict[str, int] = {}
        self._lock = threading.Lock()
        for session in sessions or []:
            self._sessions[session.id] = session

    def load(self, session_id: str) -> Session:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            logger.debug(
                "Session not found (in-memory)",
                extra={"session_id": session_id},
            )
            raise SessionNotFoundError(session_id)
        return session

    def list_by_therapy(self, therapy_id: str) -> list[Session]:
        with self._lock:
            return [s for s in self._sessions.values() if s.therapy_id == therapy_id]

    def list_by_therapist(self, therapist_id: str) -> list[Session]:
        with self._lock:
            return [s for s in self._sessions.values() if s.therapist_id == therapist_id]

    def revision(self, scope: str) -> int:
        with self._lock:
            return self._revisions.get(scope, 0)

    def save(
        self,
        session: Session,
        expected_version: int | None = None,
        expected_revisions: Mapping[str, int] | None = None,
    ) -> Session:
        with self._lock:
            current = self._sessions.get(session.id)
            current_version = current.version if current else 0
            if expected_version is not None and expected_version != current_version:
                raise VersionConflictError(session.id, expected_version, current_version)

            for scope, expected in (expected_revisions or {}).items():
                actual = self._revisions.get(scope, 0)
                if actual != expected:
                    raise VersionConflictError(session.id, expected, actual, scope=scope)

            stored = session.model_copy(update={"version": current_version + 1})
            self._sessions[session.id] = stored

            # Mudança de terapeuta/terapia invalida também os escopos antigos
            touched = session_scopes(stored)
            if current is not None:
                touched |= session_scopes(current)
            for scope in touched:
                self._revisions[scope] = self._revisions.get(scope, 0) + 1

        logger.debug(
            "Session saved (in-memory)",
            extra={"session_id": session.id, "version": stored.version},
        )
        return stored
