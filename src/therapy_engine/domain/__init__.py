"""Domínio puro do ciclo de vida de sessões terapêuticas."""

from therapy_engine.domain.conflicts import (
    ConflictReport,
    OverlapType,
    classify_overlap,
    detect_conflicts,
)
from therapy_engine.domain.continuity import ContinuityCheck, check_continuity
from therapy_engine.domain.errors import (
    ContinuityViolation,
    EngineError,
    ErrorKind,
    InvalidTransition,
    MalformedInputError,
    ObjectivesRequired,
    SchedulingConflict,
)
from therapy_engine.domain.models import Session, TimeWindow

__all__ = [
    "ConflictReport",
    "ContinuityCheck",
    "ContinuityViolation",
    "EngineError",
    "ErrorKind",
    "InvalidTransition",
    "MalformedInputError",
    "ObjectivesRequired",
    "OverlapType",
    "SchedulingConflict",
    "Session",
    "TimeWindow",
    "check_continuity",
    "classify_overlap",
    "detect_conflicts",
]
