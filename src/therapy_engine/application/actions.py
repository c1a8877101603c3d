"""Menu de ações por status da sessão.

Substitui a lógica de botões habilitados/desabilitados da camada de
apresentação: o chamador pede o menu e renderiza; o motivo de bloqueio vem
pronto para exibição.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from therapy_engine.domain.continuity import check_continuity
from therapy_engine.domain.models import Session
from therapy_engine.domain.session.states import SessionStatus


class ActionKind(StrEnum):
    SCHEDULE = "schedule"
    EDIT = "edit"
    START = "start"
    COMPLETE = "complete"
    CANCEL = "cancel"
    RESCHEDULE = "reschedule"
    EDIT_NOTES = "edit_notes"


@dataclass(frozen=True, slots=True)
class SessionAction:
    kind: ActionKind
    enabled: bool = True
    disabled_reason: str | None = None


_MENU: dict[SessionStatus, tuple[ActionKind, ...]] = {
    SessionStatus.NEW: (ActionKind.SCHEDULE, ActionKind.EDIT, ActionKind.START),
    SessionStatus.SCHEDULED: (
        ActionKind.START,
        ActionKind.RESCHEDULE,
        ActionKind.EDIT,
        ActionKind.CANCEL,
    ),
    SessionStatus.STARTED: (ActionKind.COMPLETE, ActionKind.CANCEL),
    SessionStatus.COMPLETED: (ActionKind.EDIT_NOTES,),
    SessionStatus.CANCELLED: (ActionKind.RESCHEDULE,),
    SessionStatus.NO_SHOW: (ActionKind.RESCHEDULE,),
}


def _start_action(session: Session, siblings: list[Session]) -> SessionAction:
    if not session.objectives:
        return SessionAction(
            kind=ActionKind.START,
            enabled=False,
            disabled_reason="At least one objective is required before starting",
        )
    continuity = check_continuity(session, siblings)
    if not continuity.allowed:
        return SessionAction(
            kind=ActionKind.START,
            enabled=False,
            disabled_reason=(
                f"Session {continuity.blocking_session_number} must be completed "
                "before starting this session"
            ),
        )
    return SessionAction(kind=ActionKind.START)


def available_actions(session: Session, siblings: Iterable[Session]) -> list[SessionAction]:
    """Ações oferecidas para `session`, na ordem de exibição.

    START aparece mesmo quando bloqueado (desabilitado, com motivo), para o
    usuário entender por que não pode iniciar.
    """
    sibling_list = list(siblings)
    actions: list[SessionAction] = []
    for kind in _MENU[session.status]:
        if kind == ActionKind.START:
            actions.append(_start_action(session, sibling_list))
        else:
            actions.append(SessionAction(kind=kind))
    return actions
