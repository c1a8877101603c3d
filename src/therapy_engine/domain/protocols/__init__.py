"""Protocolos de domínio (contratos para infraestrutura externa)."""

from therapy_engine.domain.protocols.session_store import (
    SessionNotFoundError,
    SessionStoreError,
    SessionStoreProtocol,
    VersionConflictError,
    session_scopes,
    therapist_scope,
    therapy_scope,
)

__all__ = [
    "SessionNotFoundError",
    "SessionStoreError",
    "SessionStoreProtocol",
    "VersionConflictError",
    "session_scopes",
    "therapist_scope",
    "therapy_scope",
]
