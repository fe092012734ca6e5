"""Logging estruturado JSON do agente de artefatos.

Uso:
    from config.logging import configure_logging, get_logger

    # No bootstrap
    configure_logging(level="INFO", service_name="apim_artifact_agent")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("api_import_completed", extra={"api_name": "pets"})

Campos presentes em todo log: asctime, level, logger, message,
correlation_id e service. Nunca logar credenciais de endpoint.
"""

from config.logging.config import configure_logging, get_logger
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
]
