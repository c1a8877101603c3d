"""Modelos de domínio (contratos principais)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from therapy_engine.domain.errors import MalformedInputError
from therapy_engine.domain.session.states import ACTIVE_STATUSES, SessionStatus

MIN_DURATION_MINUTES = 15
MAX_DURATION_MINUTES = 240
MAX_OBJECTIVES = 10


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """Janela semiaberta [start, end)."""

    start: datetime
    end: datetime

    @classmethod
    def from_duration(cls, start: datetime, minutes: int) -> TimeWindow:
        return cls(start=start, end=start + timedelta(minutes=minutes))

    def overlaps(self, other: TimeWindow) -> bool:
        """Interseção semiaberta: fronteira compartilhada não conflita."""
        return self.start < other.end and self.end > other.start


class Session(BaseModel):
    """Sessão terapêutica planejada ou executada.

    Valor imutável: alterações produzem cópias via `model_copy(update=...)`.
    Aceita campos em camelCase (therapyId, sessionNumber...) ou snake_case.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(min_length=1)
    therapy_id: str = Field(min_length=1)
    therapist_id: str | None = None
    session_number: int = Field(gt=0)
    status: SessionStatus = SessionStatus.NEW
    scheduled_date: datetime | None = None
    duration: int | None = Field(
        default=None, ge=MIN_DURATION_MINUTES, le=MAX_DURATION_MINUTES
    )
    title: str = ""
    description: str | None = None
    notes: str | None = None
    objectives: list[str] = Field(default_factory=list, max_length=MAX_OBJECTIVES)
    version: int = Field(default=0, ge=0)

    @field_validator("objectives")
    @classmethod
    def _objectives_not_blank(cls, value: list[str]) -> list[str]:
        cleaned = [item.strip() for item in value]
        if any(not item for item in cleaned):
            raise ValueError("objectives must not contain blank entries")
        return cleaned

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> Session:
        """Constrói Session a partir de dados brutos do store.

        Raises:
            MalformedInputError: campos obrigatórios ausentes ou fora do domínio.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise MalformedInputError(
                f"Invalid session payload: {exc.error_count()} error(s)",
                details=[
                    ".".join(str(part) for part in error["loc"])
                    for error in exc.errors()
                ],
            ) from exc

    @property
    def is_active(self) -> bool:
        """True se a sessão ocupa a agenda (NEW, SCHEDULED, STARTED)."""
        return self.status in ACTIVE_STATUSES

    def window(self, default_duration: int = 60) -> TimeWindow | None:
        """Janela ocupada pela sessão, ou None se ainda não tem data."""
        if self.scheduled_date is None:
            return None
        return TimeWindow.from_duration(
            self.scheduled_date, self.duration or default_duration
        )
