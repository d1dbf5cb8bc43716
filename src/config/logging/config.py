"""Configuração centralizada de logging.

O motor nunca configura logging ao ser importado: apenas obtém loggers
via get_logger. Hosts chamam configure_logging uma vez no bootstrap.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="orders")
    logger = get_logger(__name__)
    logger.info("Transition applied", extra={"graph": "order", "transition": "ship"})
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from config.logging.filters import ContextFilter
from config.logging.formatters import create_json_formatter
from config.settings.machine import DEFAULT_SERVICE_NAME

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado no logger raiz.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função opcional que retorna o correlation_id
            do contexto atual.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(ContextFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substitui handlers existentes para evitar duplicação
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado (geralmente __name__)."""
    return logging.getLogger(name)


def log_rejection(
    logger: logging.Logger,
    graph: str,
    transition: str,
    reason: str,
    state: Any = None,
) -> None:
    """Log uniforme de transição vetada (listener, guard ou regra de conjunto).

    Args:
        logger: Logger instance.
        graph: Nome do grafo.
        transition: Nome da transição.
        reason: Motivo curto (ex: "listener_rejected", "guard_failed").
        state: Estado do ramo avaliado, quando houver.
    """
    extra: dict[str, object] = {
        "graph": graph,
        "transition": transition,
        "reason": reason,
    }
    if state is not None:
        extra["state"] = str(state)

    logger.debug("Transition %s rejected: %s", transition, reason, extra=extra)
