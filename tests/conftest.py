from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, tzinfo

import pytest

from therapy_engine.application.lifecycle_engine import SessionLifecycleEngine
from therapy_engine.config.settings import Settings, get_settings
from therapy_engine.domain.models import Session
from therapy_engine.domain.session.states import SessionStatus

# Segunda-feira; "agora" fixo para os testes de horários
NOW = datetime(2030, 3, 4, 8, 0)

SessionFactory = Callable[..., Session]


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def settings() -> Settings:
    return Settings()


@pytest.fixture()
def clock() -> Callable[[tzinfo | None], datetime]:
    def _now(tz: tzinfo | None = None) -> datetime:
        return NOW.replace(tzinfo=tz)

    return _now


@pytest.fixture()
def engine(settings: Settings, clock) -> SessionLifecycleEngine:
    return SessionLifecycleEngine(settings=settings, clock=clock)


@pytest.fixture()
def make_session() -> SessionFactory:
    """Factory de Session com defaults válidos (terapia tx-1, terapeuta th-1)."""

    def _make(
        session_id: str = "s-1",
        *,
        number: int = 1,
        status: SessionStatus = SessionStatus.NEW,
        therapy_id: str = "tx-1",
        therapist_id: str | None = "th-1",
        start: datetime | None = None,
        duration: int | None = 60,
        objectives: list[str] | None = None,
        version: int = 0,
    ) -> Session:
        return Session(
            id=session_id,
            therapy_id=therapy_id,
            therapist_id=therapist_id,
            session_number=number,
            status=status,
            scheduled_date=start,
            duration=duration,
            title=f"Sessão {number}",
            objectives=["Estabelecer vínculo"] if objectives is None else objectives,
            version=version,
        )

    return _make
