# api/domain/movimentacao/repository.py
from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Movimentacao


class MovimentacaoRepository(Protocol):
    """Livro de movimentacoes. Somente insercao; listar() e da mais nova para a mais antiga."""

    def registrar(self, movimentacao: Movimentacao) -> None: ...
    def registrar_lote(self, movimentacoes: Sequence[Movimentacao]) -> None: ...
    def listar(self) -> tuple[Movimentacao, ...]: ...
