"""therapy_engine: ciclo de vida de sessões terapêuticas.

Regras de transição de status, continuidade do tratamento e detecção de
conflitos de horário. Decisão pura: persistência e apresentação ficam com o
chamador.
"""

from therapy_engine.application.lifecycle_engine import EngineResult, SessionLifecycleEngine
from therapy_engine.domain.models import Session
from therapy_engine.domain.session.states import SessionStatus

__version__ = "0.1.0"

__all__ = [
    "EngineResult",
    "Session",
    "SessionLifecycleEngine",
    "SessionStatus",
    "__version__",
]
