"""Infraestrutura de referência (store em memória para dev/testes)."""

from therapy_engine.infra.session_store_memory import InMemorySessionStore

__all__ = ["InMemorySessionStore"]
