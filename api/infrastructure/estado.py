# api/infrastructure/estado.py
from __future__ import annotations

import threading
from collections.abc import Callable
from pathlib import Path

from api.infrastructure.repositories.memory_carteira_repo import MemoryCarteiraRepo
from api.infrastructure.repositories.memory_dimensionamento_repo import MemoryDimensionamentoRepo
from api.infrastructure.repositories.memory_movimentacao_repo import MemoryMovimentacaoRepo

from .config import get_settings

Observador = Callable[["EstadoAplicacao"], None]


class EstadoAplicacao:
    """Stores do processo e a trava unica que serializa toda mutacao.

    Leitores recebem tuplas imutaveis e nao precisam da trava.
    """

    def __init__(
        self,
        carteiras: MemoryCarteiraRepo | None = None,
        movimentacoes: MemoryMovimentacaoRepo | None = None,
        dimensionamento: MemoryDimensionamentoRepo | None = None,
    ) -> None:
        self.carteiras = carteiras if carteiras is not None else MemoryCarteiraRepo()
        self.movimentacoes = movimentacoes if movimentacoes is not None else MemoryMovimentacaoRepo()
        self.dimensionamento = dimensionamento if dimensionamento is not None else MemoryDimensionamentoRepo()
        self.trava = threading.RLock()
        self._observadores: list[Observador] = []

    def inscrever(self, observador: Observador) -> None:
        self._observadores.append(observador)

    def notificar(self) -> None:
        """Chamado pelos servicos apos cada mutacao, ainda com a trava."""
        for observador in self._observadores:
            observador(self)


_estado: EstadoAplicacao | None = None


def get_estado() -> EstadoAplicacao:
    global _estado  # noqa: PLW0603
    if _estado is None:
        _estado = _carregar_estado(get_settings().estado_path)
    return _estado


def set_estado(estado: EstadoAplicacao) -> None:
    """Usado em testes para injetar um estado montado a mao."""
    global _estado  # noqa: PLW0603
    _estado = estado


def _carregar_estado(path: str) -> EstadoAplicacao:
    from api.infrastructure.persistencia_json import SnapshotJson, ler_documento, restaurar_estado

    estado = EstadoAplicacao()
    if not path:
        return estado
    if Path(path).exists():
        restaurar_estado(estado, ler_documento(path))
    estado.inscrever(SnapshotJson(path))
    return estado
