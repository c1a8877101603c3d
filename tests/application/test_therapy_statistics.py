"""Testes do resumo de progresso da terapia."""

from therapy_engine.application.statistics import TherapyProgress, summarize_therapy
from therapy_engine.domain.session.states import SessionStatus


class TestSummarizeTherapy:
    def test_empty_therapy(self) -> None:
        progress = summarize_therapy([])

        assert progress == TherapyProgress()
        assert progress.next_session_number == 1

    def test_aggregates(self, make_session) -> None:
        sessions = [
            make_session("a", number=1, status=SessionStatus.COMPLETED, duration=60),
            make_session("b", number=2, status=SessionStatus.COMPLETED, duration=90),
            make_session("c", number=3, status=SessionStatus.SCHEDULED, duration=45),
            make_session("d", number=4, status=SessionStatus.NEW, duration=None),
            make_session("e", number=6, status=SessionStatus.CANCELLED, duration=30),
        ]

        progress = summarize_therapy(sessions)

        assert progress.total_sessions == 5
        assert progress.completed_sessions == 2
        assert progress.completion_rate == 40.0
        assert progress.upcoming_sessions == 2
        assert progress.average_duration == 56  # (60+90+45+30)/4 = 56.25
        assert progress.next_session_number == 7
        assert progress.sessions_by_status[SessionStatus.COMPLETED] == 2
        assert SessionStatus.STARTED not in progress.sessions_by_status
        assert progress.next_startable is not None
        assert progress.next_startable.id == "c"

    def test_no_startable_while_blocked(self, make_session) -> None:
        sessions = [
            make_session("a", number=1, status=SessionStatus.STARTED),
            make_session("b", number=2, status=SessionStatus.NEW),
        ]

        progress = summarize_therapy(sessions)

        assert progress.next_startable is None

    def test_completion_rate_rounding(self, make_session) -> None:
        sessions = [
            make_session("a", number=1, status=SessionStatus.COMPLETED),
            make_session("b", number=2),
            make_session("c", number=3),
        ]

        assert summarize_therapy(sessions).completion_rate == 33.33
