"""correlation_id por requisição, propagado até os logs.

ContextVar mantém o valor isolado por task asyncio. O handler de
`/apis` abre um escopo com o header `x-correlation-id` recebido do
adapter (ou um UUID novo) e todos os logs do pipeline herdam o valor.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (ou string vazia)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id; gera UUID v4 quando ausente."""
    return _correlation_id.set(correlation_id or str(uuid.uuid4()))


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o valor anterior ao set correspondente."""
    _correlation_id.reset(token)


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Escopo de correlation_id para uma requisição.

    Uso:
        with correlation_scope(request.headers.get("x-correlation-id")) as cid:
            ...
    """
    token = set_correlation_id(correlation_id)
    try:
        yield _correlation_id.get()
    finally:
        reset_correlation_id(token)
