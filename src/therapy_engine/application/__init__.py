"""Camada de aplicação: engine de decisão e serviços que o compõem."""

from therapy_engine.application.actions import ActionKind, SessionAction, available_actions
from therapy_engine.application.lifecycle_engine import (
    AvailableSlots,
    EngineResult,
    SessionLifecycleEngine,
)
from therapy_engine.application.scheduling_service import SchedulingService
from therapy_engine.application.statistics import TherapyProgress, summarize_therapy

__all__ = [
    "ActionKind",
    "AvailableSlots",
    "EngineResult",
    "SchedulingService",
    "SessionAction",
    "SessionLifecycleEngine",
    "TherapyProgress",
    "available_actions",
    "summarize_therapy",
]
