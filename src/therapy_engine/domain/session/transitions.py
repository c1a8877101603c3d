"""Tabela de transições de status da sessão.

- TRANSITIONS[status_atual] = conjunto de destinos diretos
- COMPLETED não tem saída (notas/objetivos ainda editáveis, status congelado)
- CANCELLED/NO_SHOW só voltam ao ciclo via SCHEDULED (reagendamento)
- Validação pura: sem side effects
"""

from __future__ import annotations

from types import MappingProxyType

from therapy_engine.domain.session.states import SessionStatus

# Tabela de transições: status_atual → destinos permitidos
TRANSITIONS: MappingProxyType[SessionStatus, frozenset[SessionStatus]] = MappingProxyType({
    SessionStatus.NEW: frozenset({
        SessionStatus.SCHEDULED,
        SessionStatus.STARTED,
        SessionStatus.CANCELLED,
    }),
    SessionStatus.SCHEDULED: frozenset({
        SessionStatus.STARTED,
        SessionStatus.CANCELLED,
        SessionStatus.NO_SHOW,
    }),
    SessionStatus.STARTED: frozenset({
        SessionStatus.COMPLETED,
        SessionStatus.CANCELLED,
    }),
    SessionStatus.COMPLETED: frozenset(),
    SessionStatus.CANCELLED: frozenset({SessionStatus.SCHEDULED}),
    SessionStatus.NO_SHOW: frozenset({SessionStatus.SCHEDULED}),
})


def allowed_targets(current: SessionStatus) -> frozenset[SessionStatus]:
    """Destinos diretos a partir de `current` (vazio para COMPLETED)."""
    return TRANSITIONS.get(current, frozenset())


def is_valid_transition(current: SessionStatus, target: SessionStatus) -> bool:
    """Lookup puro na tabela de transições."""
    return target in allowed_targets(current)


def validate_transition(
    current: SessionStatus, target: SessionStatus
) -> tuple[bool, str]:
    """Valida se uma transição é permitida.

    Retorna:
    - (True, ""): transição válida
    - (False, motivo): transição inválida

    Nunca lança exceção; apenas valida.
    """
    if is_valid_transition(current, target):
        return True, ""

    targets = allowed_targets(current)
    if not targets:
        return False, f"Terminal status {current} has no transitions"

    allowed = ", ".join(sorted(targets))
    return (
        False,
        f"No transition from {current} to {target} (allowed: {allowed})",
    )
