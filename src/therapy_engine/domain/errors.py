"""Erros do engine.

Regras de negócio violadas são valores (retornados em EngineResult), nunca
exceções. Apenas MalformedInputError é lançada: indica defeito do chamador.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from therapy_engine.domain.conflicts import ConflictReport
    from therapy_engine.domain.session.states import SessionStatus


class MalformedInputError(ValueError):
    """Entrada estruturalmente inválida (duração ausente, sessionNumber <= 0...)."""

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class ErrorKind(StrEnum):
    """Conjunto fechado de recusas de negócio."""

    INVALID_TRANSITION = "invalid_transition"
    CONTINUITY_VIOLATION = "continuity_violation"
    SCHEDULING_CONFLICT = "scheduling_conflict"
    OBJECTIVES_REQUIRED = "objectives_required"


@dataclass(frozen=True, slots=True)
class InvalidTransition:
    """Transição ausente da tabela."""

    from_status: SessionStatus
    to_status: SessionStatus
    kind: ErrorKind = field(default=ErrorKind.INVALID_TRANSITION, init=False)

    def message(self) -> str:
        return f"Cannot transition from {self.from_status} to {self.to_status}"


@dataclass(frozen=True, slots=True)
class ContinuityViolation:
    """Sessão anterior da mesma terapia ainda não concluída."""

    session_id: str
    blocking_session_number: int
    kind: ErrorKind = field(default=ErrorKind.CONTINUITY_VIOLATION, init=False)

    def message(self) -> str:
        return (
            f"Session {self.blocking_session_number} must be completed "
            "before starting this session"
        )


@dataclass(frozen=True, slots=True)
class SchedulingConflict:
    """Janela proposta colide com uma ou mais sessões ativas.

    Carrega a lista completa para o chamador exibir todos os conflitos de uma vez.
    """

    conflicts: tuple[ConflictReport, ...]
    kind: ErrorKind = field(default=ErrorKind.SCHEDULING_CONFLICT, init=False)

    @property
    def session_ids(self) -> list[str]:
        return [report.session_id for report in self.conflicts]

    def message(self) -> str:
        return f"Proposed window overlaps {len(self.conflicts)} active session(s)"


@dataclass(frozen=True, slots=True)
class ObjectivesRequired:
    """Sessão sem objetivos não pode ser iniciada."""

    session_id: str
    kind: ErrorKind = field(default=ErrorKind.OBJECTIVES_REQUIRED, init=False)

    def message(self) -> str:
        return "At least one objective is required before starting a session"


EngineError = InvalidTransition | ContinuityViolation | SchedulingConflict | ObjectivesRequired
