"""Engine do ciclo de vida de sessões: decisão pura, sem persistência.

- Puro: entrada → decisão, sem modificar estado externo
- Stateless: nenhum estado compartilhado; seguro para uso concorrente
- Auditável: logs estruturados sem notas clínicas

O chamador persiste o Session retornado e renderiza as recusas.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import Any

from therapy_engine.config.settings import Settings, get_settings
from therapy_engine.domain.conflicts import detect_conflicts
from therapy_engine.domain.continuity import check_continuity
from therapy_engine.domain.errors import (
    ContinuityViolation,
    EngineError,
    InvalidTransition,
    MalformedInputError,
    ObjectivesRequired,
    SchedulingConflict,
)
from therapy_engine.domain.models import Session, TimeWindow
from therapy_engine.domain.session.states import SessionStatus
from therapy_engine.domain.session.transitions import is_valid_transition
from therapy_engine.observability.logging import get_logger, log_rejection

logger: logging.Logger = get_logger(__name__)

Clock = Callable[[tzinfo | None], datetime]
SessionInput = Session | Mapping[str, Any]


@dataclass(slots=True)
class EngineResult:
    """Resultado discriminado de uma operação do engine.

    Contém:
    - session: Session atualizado (sucesso) para o chamador persistir
    - error: recusa de negócio (falha)
    """

    session: Session | None = None
    error: EngineError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def accepted(cls, session: Session) -> EngineResult:
        return cls(session=session, error=None)

    @classmethod
    def rejected(cls, error: EngineError) -> EngineResult:
        return cls(session=None, error=error)


def parse_time_of_day(raw: str) -> time:
    """Converte "HH:MM" em `time`.

    Raises:
        MalformedInputError: formato diferente de HH:MM 24h.
    """
    try:
        hours, minutes = raw.split(":")
        if len(hours) != 2 or len(minutes) != 2:
            raise ValueError(raw)
        return time(int(hours), int(minutes))
    except (AttributeError, ValueError) as exc:
        raise MalformedInputError(f"Invalid time of day: {raw!r}") from exc


class AvailableSlots:
    """Sequência lazy, finita e reiniciável dos horários ainda livres.

    Cada iteração reavalia o cardápio contra o pool; nada é guardado entre
    iterações além das entradas recebidas.
    """

    def __init__(
        self,
        *,
        day: date,
        candidate_times: Sequence[str],
        pool: Sequence[Session],
        duration: int,
        now: datetime,
        tz: tzinfo | None,
        session_id: str | None,
        default_duration: int,
    ) -> None:
        self._day = day
        self._candidates = [(raw, parse_time_of_day(raw)) for raw in candidate_times]
        self._pool = pool
        self._duration = duration
        self._now = now
        self._tz = tz
        self._session_id = session_id
        self._default_duration = default_duration

    def __iter__(self) -> Iterator[str]:
        is_today = self._now.date() == self._day
        for raw, slot_time in self._candidates:
            start = datetime.combine(self._day, slot_time, tzinfo=self._tz)
            if is_today and start <= self._now:
                continue
            window = TimeWindow.from_duration(start, self._duration)
            conflicts = detect_conflicts(
                window,
                self._pool,
                candidate_id=self._session_id,
                default_duration=self._default_duration,
            )
            if conflicts:
                continue
            yield raw


class SessionLifecycleEngine:
    """Engine de decisão: transições, agendamento e horários disponíveis."""

    def __init__(
        self,
        settings: Settings | None = None,
        clock: Clock = datetime.now,
    ) -> None:
        self._settings = settings or get_settings()
        self._clock = clock

    def request_transition(
        self,
        session: SessionInput,
        target: SessionStatus | str,
        siblings: Iterable[SessionInput] | None = None,
    ) -> EngineResult:
        """Valida a mudança de status `session.status → target`.

        Args:
            session: sessão avaliada
            target: status de destino
            siblings: sessões da mesma terapia (obrigatório quando target é STARTED)

        Returns:
            EngineResult com o Session atualizado (scheduled_date intocado) ou
            InvalidTransition / ObjectivesRequired / ContinuityViolation.

        Raises:
            MalformedInputError: status desconhecido ou siblings ausente para STARTED.
        """
        current = _as_session(session)
        target_status = _as_status(target)

        if not is_valid_transition(current.status, target_status):
            return self._reject(
                "request_transition",
                current,
                InvalidTransition(from_status=current.status, to_status=target_status),
            )

        if target_status == SessionStatus.STARTED:
            if siblings is None:
                raise MalformedInputError(
                    "Sibling sessions are required to start a session"
                )
            if not current.objectives:
                return self._reject(
                    "request_transition", current, ObjectivesRequired(session_id=current.id)
                )
            continuity = check_continuity(current, [_as_session(s) for s in siblings])
            if continuity.blocking_session_number is not None:
                return self._reject(
                    "request_transition",
                    current,
                    ContinuityViolation(
                        session_id=current.id,
                        blocking_session_number=continuity.blocking_session_number,
                    ),
                )

        updated = current.model_copy(update={"status": target_status})
        logger.debug(
            "Transition accepted",
            extra={
                "session_id": current.id,
                "from_status": current.status,
                "to_status": target_status,
            },
        )
        return EngineResult.accepted(updated)

    def request_schedule(
        self,
        session: SessionInput,
        proposed_start: datetime | None,
        duration: int | None,
        pool: Iterable[SessionInput],
    ) -> EngineResult:
        """Agenda (ou reagenda) a sessão em `[proposed_start, +duration)`.

        A mudança implícita para SCHEDULED precisa ser legal a partir do status
        atual (uma sessão já SCHEDULED apenas muda de horário); isso é checado
        antes da detecção de conflitos. Todos os conflitos são devolvidos de uma
        vez para o usuário escolher outro horário com informação completa.

        Raises:
            MalformedInputError: início ausente ou duração ausente/fora do intervalo.
        """
        current = _as_session(session)
        if proposed_start is None:
            raise MalformedInputError("Proposed start is required")
        minutes = self._validate_duration(duration)

        if current.status != SessionStatus.SCHEDULED and not is_valid_transition(
            current.status, SessionStatus.SCHEDULED
        ):
            return self._reject(
                "request_schedule",
                current,
                InvalidTransition(
                    from_status=current.status, to_status=SessionStatus.SCHEDULED
                ),
            )

        window = TimeWindow.from_duration(proposed_start, minutes)
        conflicts = detect_conflicts(
            window,
            [_as_session(other) for other in pool],
            candidate_id=current.id,
            default_duration=self._settings.default_session_duration,
        )
        if conflicts:
            return self._reject(
                "request_schedule",
                current,
                SchedulingConflict(conflicts=tuple(conflicts)),
                conflicts_count=len(conflicts),
            )

        updated = current.model_copy(
            update={
                "status": SessionStatus.SCHEDULED,
                "scheduled_date": proposed_start,
                "duration": minutes,
            }
        )
        logger.debug(
            "Schedule accepted",
            extra={
                "session_id": current.id,
                "from_status": current.status,
                "duration": minutes,
            },
        )
        return EngineResult.accepted(updated)

    def available_slots(
        self,
        day: date,
        candidate_times: Sequence[str] | None,
        pool: Iterable[SessionInput],
        duration: int | None,
        *,
        session_id: str | None = None,
        tz: tzinfo | None = None,
    ) -> AvailableSlots:
        """Filtra o cardápio diário de horários (`HH:MM`) para `day`.

        Descarta horários cuja janela conflita com o pool e, quando `day` é hoje,
        horários que já passaram. `candidate_times=None` usa o cardápio
        configurado. `session_id` exclui a própria sessão (reagendamento).
        """
        minutes = self._validate_duration(duration)
        if isinstance(day, datetime):
            day = day.date()
        menu = (
            list(candidate_times)
            if candidate_times is not None
            else list(self._settings.slot_menu)
        )
        return AvailableSlots(
            day=day,
            candidate_times=menu,
            pool=[_as_session(other) for other in pool],
            duration=minutes,
            now=self._clock(tz),
            tz=tz,
            session_id=session_id,
            default_duration=self._settings.default_session_duration,
        )

    def _validate_duration(self, duration: int | None) -> int:
        if duration is None:
            raise MalformedInputError("Duration is required")
        if isinstance(duration, bool) or not isinstance(duration, int):
            raise MalformedInputError(f"Duration must be an integer, got {duration!r}")
        if duration <= 0:
            raise MalformedInputError(f"Duration must be positive, got {duration}")
        low = self._settings.min_session_duration
        high = self._settings.max_session_duration
        if not low <= duration <= high:
            raise MalformedInputError(
                f"Duration must be between {low} and {high} minutes, got {duration}"
            )
        return duration

    @staticmethod
    def _reject(
        operation: str, session: Session, error: EngineError, **fields: object
    ) -> EngineResult:
        log_rejection(logger, operation, error.kind, session.id, **fields)
        return EngineResult.rejected(error)


def _as_session(value: SessionInput) -> Session:
    if isinstance(value, Session):
        return value
    if isinstance(value, Mapping):
        return Session.parse(value)
    raise MalformedInputError(f"Expected a session, got {type(value).__name__}")


def _as_status(value: SessionStatus | str) -> SessionStatus:
    try:
        return SessionStatus(value)
    except ValueError as exc:
        raise MalformedInputError(f"Unknown session status: {value!r}") from exc
