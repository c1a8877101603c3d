"""Status canônicos de uma sessão terapêutica.

- Toda sessão nasce em NEW (criada fora do engine)
- Status definem a posição da sessão no ciclo de vida
- Transições são explícitas (tabela em transitions.py)
"""

from __future__ import annotations

from enum import StrEnum


class SessionStatus(StrEnum):
    """6 status canônicos de uma sessão."""

    # === Planejamento ===
    NEW = "New"
    """Sessão criada no plano terapêutico, ainda sem horário."""

    SCHEDULED = "Scheduled"
    """Sessão com data/horário definidos."""

    # === Execução ===
    STARTED = "Started"
    """Atendimento em andamento."""

    # === Encerramento ===
    COMPLETED = "Completed"
    """Atendimento concluído; status congelado."""

    CANCELLED = "Cancelled"
    """Cancelada; pode ser reagendada."""

    NO_SHOW = "NoShow"
    """Cliente não compareceu; pode ser reagendada."""


# Constantes auxiliares
ACTIVE_STATUSES = frozenset({
    SessionStatus.NEW,
    SessionStatus.SCHEDULED,
    SessionStatus.STARTED,
})
"""Status que ocupam a agenda do terapeuta (contam para conflitos)."""

INACTIVE_STATUSES = frozenset({
    s for s in SessionStatus if s not in ACTIVE_STATUSES
})
"""Status que nunca geram conflito de horário."""

TERMINAL_STATUSES = frozenset({
    SessionStatus.COMPLETED,
    SessionStatus.CANCELLED,
    SessionStatus.NO_SHOW,
})
"""Status de encerramento (CANCELLED/NO_SHOW só saem via reagendamento)."""
