"""Ciclo de vida da sessão: status e transições.

Exporta:
- SessionStatus: 6 status canônicos
- TRANSITIONS: tabela de adjacência
- is_valid_transition / validate_transition: validadores puros
"""

from therapy_engine.domain.session.states import (
    ACTIVE_STATUSES,
    INACTIVE_STATUSES,
    TERMINAL_STATUSES,
    SessionStatus,
)
from therapy_engine.domain.session.transitions import (
    TRANSITIONS,
    allowed_targets,
    is_valid_transition,
    validate_transition,
)

__all__ = [
    "SessionStatus",
    "TRANSITIONS",
    "allowed_targets",
    "is_valid_transition",
    "validate_transition",
    "ACTIVE_STATUSES",
    "INACTIVE_STATUSES",
    "TERMINAL_STATUSES",
]
