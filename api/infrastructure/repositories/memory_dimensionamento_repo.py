# api/infrastructure/repositories/memory_dimensionamento_repo.py
from __future__ import annotations

from collections.abc import Iterable

from api.domain.segmentacao.dimensionamento import DIMENSIONAMENTO_PADRAO
from api.domain.segmentacao.value_objects import ParametroDimensionamento


class MemoryDimensionamentoRepo:
    """Tabela de limites ideais. Substituida inteira, nunca editada por entrada."""

    def __init__(self, parametros: Iterable[ParametroDimensionamento] = DIMENSIONAMENTO_PADRAO) -> None:
        self._parametros: tuple[ParametroDimensionamento, ...] = tuple(parametros)

    def obter(self) -> tuple[ParametroDimensionamento, ...]:
        return self._parametros

    def substituir(self, parametros: Iterable[ParametroDimensionamento]) -> None:
        self._parametros = tuple(parametros)
