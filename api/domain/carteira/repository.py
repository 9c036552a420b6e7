# api/domain/carteira/repository.py
from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from api.domain.segmentacao.value_objects import ParametroDimensionamento

from .entities import Agencia, Associado, Gestor


class CarteiraRepository(Protocol):
    def listar_gestores(self) -> tuple[Gestor, ...]: ...
    def buscar_gestor(self, gestor_id: str) -> Gestor | None: ...
    def listar_associados(self, gestor_id: str | None = None) -> tuple[Associado, ...]: ...
    def buscar_associado(self, associado_id: str) -> Associado | None: ...
    def listar_agencias(self) -> tuple[Agencia, ...]: ...
    def buscar_agencia(self, agencia_id: str) -> Agencia | None: ...

    # Unicos pontos de mutacao. Todos recalculam associados_atuais e agencias.
    def substituir(self, gestores: Iterable[Gestor], associados: Iterable[Associado]) -> None: ...
    def transferir(self, associado_ids: Iterable[str], destino: Gestor) -> None: ...
    def transferir_lotes(self, lotes: Iterable[tuple[Iterable[str], Gestor]]) -> None: ...


class DimensionamentoRepository(Protocol):
    def obter(self) -> tuple[ParametroDimensionamento, ...]: ...
    def substituir(self, parametros: Iterable[ParametroDimensionamento]) -> None: ...
