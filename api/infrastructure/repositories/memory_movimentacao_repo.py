# api/infrastructure/repositories/memory_movimentacao_repo.py
from __future__ import annotations

from collections.abc import Iterable, Sequence

from api.domain.movimentacao.entities import Movimentacao


class MemoryMovimentacaoRepo:
    """Livro de movimentacoes em memoria. Somente insercao, mais nova primeiro."""

    def __init__(self, historico: Iterable[Movimentacao] = ()) -> None:
        self._movimentacoes: tuple[Movimentacao, ...] = tuple(historico)

    def registrar(self, movimentacao: Movimentacao) -> None:
        self._movimentacoes = (movimentacao, *self._movimentacoes)

    def registrar_lote(self, movimentacoes: Sequence[Movimentacao]) -> None:
        """Lote entra na frente do historico, mantendo a ordem interna do lote."""
        self._movimentacoes = (*movimentacoes, *self._movimentacoes)

    def listar(self) -> tuple[Movimentacao, ...]:
        return self._movimentacoes

    def __len__(self) -> int:
        return len(self._movimentacoes)

    def carregar(self, historico: Iterable[Movimentacao]) -> None:
        """Restauracao a partir do documento persistido. Nao faz parte do contrato do livro."""
        self._movimentacoes = tuple(historico)
