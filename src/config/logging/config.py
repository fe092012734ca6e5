"""Configuração centralizada de logging.

Um único handler de stdout com formatter JSON e filter de contexto.
Chamado uma vez pelo composition root (app/bootstrap).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# Abreviações de nível aceitas em LOG_LEVEL (DEBG, ERRO, ...)
LEVEL_ALIASES = {
    "DEBG": "DEBUG",
    "WARN": "WARNING",
    "ERRO": "ERROR",
    "FATL": "CRITICAL",
    "PANC": "CRITICAL",
}

DEFAULT_SERVICE_NAME = "apim_artifact_agent"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado para o serviço.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL ou alias).
        service_name: Nome do serviço injetado em cada record.
        correlation_id_getter: Função que retorna o correlation_id corrente.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    level_upper = LEVEL_ALIASES.get(level_upper, level_upper)
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substitui handlers existentes
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger do módulo (service e correlation_id vêm do filter)."""
    return logging.getLogger(name)
