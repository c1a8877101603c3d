"""Protocolo de domínio para persistência de sessões terapêuticas.

O engine não persiste nada; este contrato descreve o que o chamador precisa
do store para fechar a corrida entre detecção de conflito e escrita:
leituras de snapshot e escrita condicional (optimistic concurrency) tanto
pela versão da sessão quanto pela revisão dos escopos lidos para decidir
(agenda do terapeuta, sessões irmãs da terapia).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from therapy_engine.domain.models import Session


def therapist_scope(therapist_id: str) -> str:
    """Escopo da agenda de um terapeuta (todas as terapias)."""
    return f"therapist:{therapist_id}"


def therapy_scope(therapy_id: str) -> str:
    """Escopo das sessões irmãs de uma terapia."""
    return f"therapy:{therapy_id}"


def session_scopes(session: Session) -> set[str]:
    """Escopos cuja revisão avança quando `session` é gravada."""
    scopes = {therapy_scope(session.therapy_id)}
    if session.therapist_id:
        scopes.add(therapist_scope(session.therapist_id))
    return scopes


class SessionStoreError(Exception):
    """Erro ao persistir ou recuperar sessão."""


class SessionNotFoundError(SessionStoreError):
    """Sessão inexistente no store."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id


class VersionConflictError(SessionStoreError):
    """Escrita condicional falhou: outra escrita avançou a versão.

    `scope` é None quando a divergência é na própria sessão; caso contrário
    nomeia o escopo (ex: "therapist:th-1") que mudou desde a leitura.
    """

    def __init__(
        self,
        session_id: str,
        expected: int,
        actual: int,
        scope: str | None = None,
    ) -> None:
        if scope is None:
            message = (
                f"Session {session_id} version mismatch (expected {expected}, found {actual})"
            )
        else:
            message = (
                f"Scope {scope} changed while writing session {session_id} "
                f"(expected revision {expected}, found {actual})"
            )
        super().__init__(message)
        self.session_id = session_id
        self.expected = expected
        self.actual = actual
        self.scope = scope


class SessionStoreProtocol(ABC):
    """Contrato mínimo síncrono para armazenamento de Session."""

    @abstractmethod
    def load(self, session_id: str) -> Session:
        """Carrega sessão por ID (SessionNotFoundError se ausente)."""
        ...

    @abstractmethod
    def list_by_therapy(self, therapy_id: str) -> list[Session]:
        """Sessões irmãs de uma terapia (para continuidade)."""
        ...

    @abstractmethod
    def list_by_therapist(self, therapist_id: str) -> list[Session]:
        """Agenda do terapeuta em todas as terapias (pool de conflitos)."""
        ...

    @abstractmethod
    def revision(self, scope: str) -> int:
        """Revisão atual do escopo (0 se nunca gravado).

        Toda gravação avança a revisão de cada escopo em `session_scopes`,
        antes e depois da alteração.
        """
        ...

    @abstractmethod
    def save(
        self,
        session: Session,
        expected_version: int | None = None,
        expected_revisions: Mapping[str, int] | None = None,
    ) -> Session:
        """Persiste a sessão e retorna o valor gravado (versão incrementada).

        Com `expected_version`, grava apenas se a versão armazenada coincidir.
        Com `expected_revisions`, grava apenas se cada escopo ainda estiver na
        revisão lida. Qualquer divergência lança VersionConflictError sem gravar.
        """
        ...
