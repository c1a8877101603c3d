"""Contexto de correlação para logs do engine."""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id corrente (ou vazio)."""

    return _correlation_id.get()


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Define correlation_id durante o bloco; gera um UUID quando ausente.

    O chamador (camada de apresentação ou worker) abre o escopo uma vez por
    requisição; todas as decisões logadas dentro dele compartilham o id.
    """
    value = correlation_id or str(uuid.uuid4())
    token = _correlation_id.set(value)
    try:
        yield value
    finally:
        _correlation_id.reset(token)


_operation: ContextVar[str] = ContextVar("operation", default="")


def get_operation() -> str:
    """Retorna a operação do engine em andamento (ou vazio)."""

    return _operation.get()


@contextmanager
def operation_scope(operation: str) -> Iterator[str]:
    """Marca os logs emitidos no bloco com a operação (ex: "schedule")."""
    token = _operation.set(operation)
    try:
        yield operation
    finally:
        _operation.reset(token)
