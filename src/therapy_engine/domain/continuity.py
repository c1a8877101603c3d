"""Continuidade do tratamento: sessões iniciam em ordem.

Uma sessão só entra em STARTED quando toda sessão da mesma terapia com
sessionNumber estritamente menor está COMPLETED. A ordem é a numérica do
sessionNumber (não a de criação); lacunas na numeração são permitidas.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from therapy_engine.domain.models import Session
from therapy_engine.domain.session.states import SessionStatus


@dataclass(frozen=True, slots=True)
class ContinuityCheck:
    """Resultado da verificação de continuidade."""

    allowed: bool
    blocking_session_number: int | None = None


def predecessors(session: Session, siblings: Iterable[Session]) -> list[Session]:
    """Sessões da mesma terapia anteriores a `session`, em ordem crescente."""
    earlier = [
        other
        for other in siblings
        if other.therapy_id == session.therapy_id
        and other.id != session.id
        and other.session_number < session.session_number
    ]
    return sorted(earlier, key=lambda other: other.session_number)


def check_continuity(session: Session, siblings: Iterable[Session]) -> ContinuityCheck:
    """Verifica se `session` pode iniciar dado o status das anteriores.

    `siblings` pode conter sessões de outras terapias (são ignoradas) e a
    própria sessão. A primeira anterior não concluída é a bloqueante.
    """
    for other in predecessors(session, siblings):
        if other.status != SessionStatus.COMPLETED:
            return ContinuityCheck(
                allowed=False, blocking_session_number=other.session_number
            )
    return ContinuityCheck(allowed=True)
