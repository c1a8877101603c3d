"""Configurações do engine via variáveis de ambiente.

Apenas parâmetros de regra de negócio (limites de duração, cardápio de
horários) e de observabilidade. Persistência fica com o chamador.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# -----------------------------------------------------------------------------
# Cardápio diário padrão de horários (HH:MM, 24h), com pausa de almoço e
# intervalo 18h-19h.
# -----------------------------------------------------------------------------
DEFAULT_SLOT_MENU: tuple[str, ...] = (
    "08:00", "08:30", "09:00", "09:30", "10:00", "10:30",
    "11:00", "11:30", "13:00", "13:30", "14:00", "14:30",
    "15:00", "15:30", "16:00", "16:30", "17:00", "17:30",
    "19:00", "19:30", "20:00", "20:30",
)

_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class Settings(BaseSettings):
    """Configurações lidas do ambiente (prefixo THERAPY_ENGINE_)."""

    model_config = SettingsConfigDict(
        env_prefix="THERAPY_ENGINE_",
        case_sensitive=False,
    )

    # Aplicação
    service_name: str = "therapy_engine"
    log_level: str = "INFO"

    # Sessões
    default_session_duration: int = 60  # Minutos; usado quando a sessão não informa
    min_session_duration: int = 15
    max_session_duration: int = 240

    # Agendamento
    slot_menu: list[str] = Field(default_factory=lambda: list(DEFAULT_SLOT_MENU))
    schedule_retry_attempts: int = 1  # Re-detecções após conflito de versão no store

    def validate_engine_config(self) -> list[str]:
        """Valida coerência das configurações.

        Retorna lista de erros (vazia = tudo OK).
        """
        errors: list[str] = []

        if self.min_session_duration <= 0:
            errors.append("MIN_SESSION_DURATION deve ser > 0")
        if self.max_session_duration < self.min_session_duration:
            errors.append("MAX_SESSION_DURATION deve ser >= MIN_SESSION_DURATION")
        if not (
            self.min_session_duration
            <= self.default_session_duration
            <= self.max_session_duration
        ):
            errors.append("DEFAULT_SESSION_DURATION fora do intervalo min/max")
        if self.schedule_retry_attempts < 0:
            errors.append("SCHEDULE_RETRY_ATTEMPTS deve ser >= 0")

        invalid_slots = [slot for slot in self.slot_menu if not _HHMM.match(slot)]
        if invalid_slots:
            errors.append(f"SLOT_MENU contém horários inválidos: {invalid_slots}")

        return errors


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retorna uma instância cacheada de Settings.

    A cache garante que mesmo múltiplas injeções não criam novos objetos.
    """
    return Settings()
