# api/application/services/dimensionamento_service.py
from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from contextlib import AbstractContextManager

from api.domain.carteira.repository import DimensionamentoRepository
from api.domain.segmentacao.dimensionamento import validar_dimensionamento
from api.domain.segmentacao.value_objects import ParametroDimensionamento


class DimensionamentoService:
    def __init__(
        self,
        dimensionamento_repo: DimensionamentoRepository,
        trava: AbstractContextManager[object],
        ao_alterar: Callable[[], None] | None = None,
    ) -> None:
        self._repo = dimensionamento_repo
        self._trava = trava
        self._ao_alterar = ao_alterar

    def obter(self) -> list[ParametroDimensionamento]:
        return list(self._repo.obter())

    def substituir(self, entradas: Iterable[Mapping[str, object]]) -> list[ParametroDimensionamento]:
        """Valida a tabela inteira antes de trocar. Em erro a tabela anterior fica.

        Nao altera limite_ideal de gestores ja carregados.

        Raises:
            DimensionamentoInvalido
        """
        parametros = validar_dimensionamento(entradas)
        with self._trava:
            self._repo.substituir(parametros)
            if self._ao_alterar is not None:
                self._ao_alterar()
        return parametros
