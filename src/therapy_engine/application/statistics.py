"""Resumo de progresso de uma terapia (agregado das sessões)."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from therapy_engine.domain.continuity import check_continuity
from therapy_engine.domain.models import Session
from therapy_engine.domain.session.states import TERMINAL_STATUSES, SessionStatus


@dataclass(slots=True)
class TherapyProgress:
    """Indicadores de progresso da terapia."""

    total_sessions: int = 0
    sessions_by_status: dict[SessionStatus, int] = field(default_factory=dict)
    completed_sessions: int = 0
    completion_rate: float = 0.0
    upcoming_sessions: int = 0
    average_duration: int = 0
    next_session_number: int = 1
    next_startable: Session | None = None


def summarize_therapy(sessions: Iterable[Session]) -> TherapyProgress:
    """Agrega as sessões de UMA terapia.

    - completion_rate: percentual concluído, 2 casas
    - upcoming_sessions: NEW + SCHEDULED
    - average_duration: média arredondada sobre sessões com duração
    - next_startable: menor sessão NEW ou SCHEDULED que passa na continuidade
    """
    ordered = sorted(sessions, key=lambda s: s.session_number)
    if not ordered:
        return TherapyProgress()

    by_status = Counter(s.status for s in ordered)
    total = len(ordered)
    completed = by_status[SessionStatus.COMPLETED]

    durations = [s.duration for s in ordered if s.duration is not None]
    average = round(sum(durations) / len(durations)) if durations else 0

    next_startable = next(
        (
            s
            for s in ordered
            if s.status not in TERMINAL_STATUSES
            and s.status != SessionStatus.STARTED
            and check_continuity(s, ordered).allowed
        ),
        None,
    )

    return TherapyProgress(
        total_sessions=total,
        sessions_by_status=dict(by_status),
        completed_sessions=completed,
        completion_rate=round(completed / total * 100, 2),
        upcoming_sessions=by_status[SessionStatus.NEW] + by_status[SessionStatus.SCHEDULED],
        average_duration=average,
        next_session_number=ordered[-1].session_number + 1,
        next_startable=next_startable,
    )
