"""Configuração de logging estruturado (JSON)."""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

from therapy_engine.config.settings import get_settings
from therapy_engine.observability.context import get_correlation_id, get_operation

# Conteúdo clínico da sessão; só ids, status e contagens vão para os logs
CLINICAL_FIELDS: frozenset[str] = frozenset({"notes", "description", "objectives", "title"})
REDACTED = "[redacted]"


class EngineContextFilter(logging.Filter):
    """Completa o record com o contexto do engine e remove dados clínicos.

    Injeta `correlation_id`, `operation` e `service`; valores passados via
    `extra` têm precedência sobre o contexto. Campos com conteúdo clínico
    (notas, descrição, objetivos, título) nunca chegam ao handler.
    """

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.correlation_id = getattr(record, "correlation_id", None) or get_correlation_id()
        record.operation = getattr(record, "operation", None) or get_operation()
        record.service = self._service_name
        for field in CLINICAL_FIELDS:
            if field in record.__dict__:
                setattr(record, field, REDACTED)
        return True


def configure_logging(level: str | None = None, service_name: str | None = None) -> None:
    """Configura logging JSON com campos padrao do serviço.

    Sem argumentos, usa `log_level` e `service_name` de `get_settings()`.
    """
    if level is None or service_name is None:
        settings = get_settings()
        level = level or settings.log_level
        service_name = service_name or settings.service_name

    formatter = JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(correlation_id)s %(operation)s %(service)s",
        rename_fields={"levelname": "level", "name": "logger"},
    )

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(EngineContextFilter(service_name))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger simples; o filtro injeta service, operation e correlation_id."""

    return logging.getLogger(name)


def log_rejection(
    logger: logging.Logger,
    operation: str,
    kind: str,
    session_id: str,
    **fields: object,
) -> None:
    """Log observável de uma regra de negócio que recusou a operação.

    Args:
        logger: Logger instance
        operation: Nome da operação (ex: "request_transition", "request_schedule")
        kind: Tipo do erro (ex: "invalid_transition"), sem PII
        session_id: ID da sessão avaliada
        fields: Campos extras (estados, número bloqueante, contagem de conflitos)

    Exemplo:
        log_rejection(logger, "request_schedule", "scheduling_conflict", "s-1", conflicts=2)
    """
    extra: dict[str, object] = {
        "operation": operation,
        "error_kind": kind,
        "session_id": session_id,
    }
    extra.update(fields)

    logger.info(
        f"Operation {operation} rejected: {kind}",
        extra=extra,
    )
