"""Testes para SessionStore em memória."""

from __future__ import annotations

import pytest

from therapy_engine.domain.protocols.session_store import (
    SessionNotFoundError,
    SessionStoreProtocol,
    VersionConflictError,
    therapist_scope,
    therapy_scope,
)
from therapy_engine.domain.session.states import SessionStatus
from therapy_engine.infra.session_store_memory import InMemorySessionStore


class TestInMemorySessionStoreSave:
    """Testes para método save."""

    def test_implements_protocol(self) -> None:
        assert isinstance(InMemorySessionStore(), SessionStoreProtocol)

    def test_save_increments_version(self, make_session):
        """Cada gravação avança a versão."""
        store = InMemorySessionStore()

        first = store.save(make_session("s-1"))
        second = store.save(first.model_copy(update={"status": SessionStatus.CANCELLED}))

        assert first.version == 1
        assert second.version == 2
        assert store.load("s-1").status is SessionStatus.CANCELLED

    def test_conditional_save_with_matching_version(self, make_session):
        store = InMemorySessionStore([make_session("s-1")])
        loaded = store.load("s-1")

        saved = store.save(loaded, expected_version=loaded.version)

        assert saved.version == loaded.version + 1

    def test_conditional_save_with_stale_version(self, make_session):
        """Versão desatualizada deve gerar VersionConflictError sem gravar."""
        store = InMemorySessionStore([make_session("s-1")])
        stale = store.load("s-1")
        store.save(stale.model_copy(update={"title": "outra escrita"}))

        with pytest.raises(VersionConflictError) as exc_info:
            store.save(stale.model_copy(update={"title": "perdida"}), expected_version=0)

        assert exc_info.value.expected == 0
        assert exc_info.value.actual == 1
        assert store.load("s-1").title == "outra escrita"

    def test_conditional_insert_expects_zero(self, make_session):
        store = InMemorySessionStore()

        assert store.save(make_session("novo"), expected_version=0).version == 1


class TestInMemorySessionStoreRevisions:
    """Revisões por escopo (agenda do terapeuta, terapia)."""

    def test_unknown_scope_starts_at_zero(self):
        assert InMemorySessionStore().revision(therapist_scope("th-1")) == 0

    def test_save_bumps_therapist_and_therapy_scopes(self, make_session):
        store = InMemorySessionStore()

        store.save(make_session("a", therapy_id="tx-1", therapist_id="th-1"))
        store.save(make_session("b", number=2, therapy_id="tx-2", therapist_id="th-1"))

        assert store.revision(therapist_scope("th-1")) == 2
        assert store.revision(therapy_scope("tx-1")) == 1
        assert store.revision(therapy_scope("tx-2")) == 1

    def test_stale_scope_revision_rejects_write(self, make_session):
        """Gravação de OUTRA sessão do terapeuta invalida a revisão lida."""
        store = InMemorySessionStore([make_session("a"), make_session("b", number=2)])
        scope = therapist_scope("th-1")
        seen = store.revision(scope)
        store.save(store.load("b").model_copy(update={"title": "agendada"}))

        with pytest.raises(VersionConflictError) as exc_info:
            store.save(
                store.load("a").model_copy(update={"title": "perdida"}),
                expected_version=0,
                expected_revisions={scope: seen},
            )

        assert exc_info.value.scope == scope
        assert exc_info.value.expected == seen
        assert exc_info.value.actual == seen + 1
        assert store.load("a").title == "Sessão 1"

    def test_matching_scope_revision_accepts_write(self, make_session):
        store = InMemorySessionStore([make_session("a")])
        scope = therapist_scope("th-1")

        saved = store.save(
            store.load("a"), expected_version=0, expected_revisions={scope: store.revision(scope)}
        )

        assert saved.version == 1
        assert store.revision(scope) == 1

    def test_moving_session_bumps_previous_therapist(self, make_session):
        store = InMemorySessionStore([make_session("a", therapist_id="th-1")])

        store.save(store.load("a").model_copy(update={"therapist_id": "th-2"}))

        assert store.revision(therapist_scope("th-1")) == 1
        assert store.revision(therapist_scope("th-2")) == 1


class TestInMemorySessionStoreQueries:
    """Testes para load e listagens."""

    def test_load_missing_raises(self):
        with pytest.raises(SessionNotFoundError) as exc_info:
            InMemorySessionStore().load("nao-existe")

        assert exc_info.value.session_id == "nao-existe"

    def test_list_by_therapy(self, make_session):
        store = InMemorySessionStore(
            [
                make_session("a", therapy_id="tx-1"),
                make_session("b", number=2, therapy_id="tx-1"),
                make_session("c", therapy_id="tx-2"),
            ]
        )

        assert {s.id for s in store.list_by_therapy("tx-1")} == {"a", "b"}
        assert store.list_by_therapy("tx-9") == []

    def test_list_by_therapist(self, make_session):
        store = InMemorySessionStore(
            [
                make_session("a", therapist_id="th-1"),
                make_session("b", therapist_id="th-2", therapy_id="tx-2"),
                make_session("c", therapist_id=None, therapy_id="tx-3"),
            ]
        )

        assert [s.id for s in store.list_by_therapist("th-1")] == ["a"]
