"""Formatter JSON com campos padronizados."""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON.

    Exemplo de output:
        {"asctime": "2026-10-19 10:30:00,120", "level": "INFO",
         "logger": "app.use_cases.apis.deploy_api",
         "message": "api_import_completed",
         "correlation_id": "abc-123", "service": "apim_artifact_agent"}
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)
