"""Detector de conflitos de horário na agenda do terapeuta.

Puro: sem I/O, sem side effects. Assume que todos os horários estão no mesmo
referencial (a normalização de fuso é responsabilidade do chamador).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from therapy_engine.domain.models import Session, TimeWindow
from therapy_engine.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


class OverlapType(StrEnum):
    """Classificação diagnóstica da sobreposição (candidata vs. existente)."""

    CONTAINS = "contains"
    """Candidata inteiramente dentro da existente."""

    FULL = "full"
    """Candidata envolve a existente por completo."""

    START = "start"
    """Candidata começa dentro da existente e termina depois."""

    END = "end"
    """Candidata começa antes e termina dentro da existente."""


@dataclass(frozen=True, slots=True)
class ConflictReport:
    """Colisão entre a janela proposta e uma sessão ativa."""

    session_id: str
    overlap_type: OverlapType
    session_number: int
    window: TimeWindow


def classify_overlap(candidate: TimeWindow, other: TimeWindow) -> OverlapType | None:
    """Classifica a sobreposição, ou None quando as janelas não se tocam."""
    if not candidate.overlaps(other):
        return None
    if candidate.start >= other.start and candidate.end <= other.end:
        return OverlapType.CONTAINS
    if candidate.start < other.start and candidate.end > other.end:
        return OverlapType.FULL
    if other.start <= candidate.start < other.end:
        return OverlapType.START
    return OverlapType.END


def detect_conflicts(
    candidate: TimeWindow,
    pool: Iterable[Session],
    *,
    candidate_id: str | None = None,
    default_duration: int = 60,
) -> list[ConflictReport]:
    """Reporta todas as sessões ativas do `pool` que colidem com `candidate`.

    Ignora a própria sessão (`candidate_id`), sessões inativas (CANCELLED,
    COMPLETED, NO_SHOW) e sessões sem data. Lista vazia = horário livre.
    O resultado é ordenado por início da janela, independente da ordem do pool.
    """
    reports: list[ConflictReport] = []

    for other in pool:
        if other.id == candidate_id or not other.is_active:
            continue
        other_window = other.window(default_duration)
        if other_window is None:
            continue

        overlap_type = classify_overlap(candidate, other_window)
        if overlap_type is None:
            continue

        reports.append(
            ConflictReport(
                session_id=other.id,
                overlap_type=overlap_type,
                session_number=other.session_number,
                window=other_window,
            )
        )

    reports.sort(key=lambda report: (report.window.start, report.session_id))

    logger.debug(
        "Conflict detection finished",
        extra={
            "candidate_id": candidate_id,
            "conflicts_count": len(reports),
        },
    )
    return reports
