"""Testes do menu de ações por status."""

import pytest

from therapy_engine.application.actions import ActionKind, available_actions
from therapy_engine.domain.session.states import SessionStatus


def kinds(actions) -> list[ActionKind]:
    return [action.kind for action in actions]


class TestAvailableActions:
    @pytest.mark.parametrize(
        ("status", "expected"),
        [
            (SessionStatus.NEW, [ActionKind.SCHEDULE, ActionKind.EDIT, ActionKind.START]),
            (
                SessionStatus.SCHEDULED,
                [ActionKind.START, ActionKind.RESCHEDULE, ActionKind.EDIT, ActionKind.CANCEL],
            ),
            (SessionStatus.STARTED, [ActionKind.COMPLETE, ActionKind.CANCEL]),
            (SessionStatus.COMPLETED, [ActionKind.EDIT_NOTES]),
            (SessionStatus.CANCELLED, [ActionKind.RESCHEDULE]),
            (SessionStatus.NO_SHOW, [ActionKind.RESCHEDULE]),
        ],
    )
    def test_menu_per_status(self, make_session, status, expected) -> None:
        session = make_session(status=status)

        actions = available_actions(session, [session])

        assert kinds(actions) == expected
        assert all(action.enabled for action in actions)

    def test_start_disabled_by_continuity(self, make_session) -> None:
        s1 = make_session("a", number=1, status=SessionStatus.SCHEDULED)
        s2 = make_session("b", number=2, status=SessionStatus.SCHEDULED)

        start = available_actions(s2, [s1, s2])[0]

        assert start.kind is ActionKind.START
        assert start.enabled is False
        assert "Session 1" in start.disabled_reason

    def test_start_disabled_without_objectives(self, make_session) -> None:
        session = make_session(objectives=[])

        start = next(a for a in available_actions(session, [session]) if a.kind == ActionKind.START)

        assert start.enabled is False
        assert "objective" in start.disabled_reason

    def test_other_actions_unaffected_by_continuity(self, make_session) -> None:
        s1 = make_session("a", number=1, status=SessionStatus.NEW)
        s2 = make_session("b", number=2, status=SessionStatus.NEW)

        actions = {a.kind: a for a in available_actions(s2, [s1, s2])}

        assert actions[ActionKind.SCHEDULE].enabled is True
        assert actions[ActionKind.START].enabled is False
