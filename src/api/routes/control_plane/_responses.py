"""Helpers de resposta compartilhados pelas rotas do control plane."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import status
from fastapi.responses import JSONResponse

if TYPE_CHECKING:
    from pydantic import ValidationError


def validation_message(exc: ValidationError) -> str:
    """Resumo legível dos erros de validação (`campo: mensagem; ...`)."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', '')}" if location else error.get("msg", ""))
    return "; ".join(parts) or str(exc)


def bad_request(message: str) -> JSONResponse:
    return JSONResponse(content={"error": message}, status_code=status.HTTP_400_BAD_REQUEST)
