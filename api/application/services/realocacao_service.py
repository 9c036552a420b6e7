# api/application/services/realocacao_service.py
from __future__ import annotations

import uuid
from collections.abc import Callable, Iterable, Mapping
from contextlib import AbstractContextManager
from datetime import datetime

from api.domain.carteira.entities import Associado, Gestor
from api.domain.carteira.errors import AgenciaDesconhecida, GestorDesconhecido, RealocacaoDesbalanceada
from api.domain.carteira.repository import CarteiraRepository, DimensionamentoRepository
from api.domain.movimentacao.entities import GESTOR_DESCONHECIDO, Movimentacao, agora_utc
from api.domain.movimentacao.repository import MovimentacaoRepository
from api.domain.realocacao.services import (
    MatrizAgencia,
    MovimentoPlanejado,
    PlanoRealocacao,
    montar_matriz,
    planejar_movimentos,
    selecionar_associados,
)
from api.domain.segmentacao.enums import Subsegmento, ordem_canonica

MOTIVO_MATRIZ = "Realocação via matriz"

ContagensInformadas = Mapping[str, Mapping[Subsegmento | str, int]]


class RealocacaoService:
    """Imperative Shell: le o store, chama o planejamento puro e aplica sob a trava."""

    def __init__(
        self,
        carteira_repo: CarteiraRepository,
        movimentacao_repo: MovimentacaoRepository,
        dimensionamento_repo: DimensionamentoRepository,
        trava: AbstractContextManager[object],
        ao_alterar: Callable[[], None] | None = None,
        relogio: Callable[[], datetime] = agora_utc,
    ) -> None:
        self._carteira_repo = carteira_repo
        self._movimentacao_repo = movimentacao_repo
        self._dimensionamento_repo = dimensionamento_repo
        self._trava = trava
        self._ao_alterar = ao_alterar
        self._relogio = relogio

    def realocar(
        self,
        associado_ids: Iterable[str],
        gestor_destino_id: str,
        motivo: str | None = None,
    ) -> list[Movimentacao]:
        """Move associados para o gestor destino e registra uma movimentacao por associado.

        Ids desconhecidos sao ignorados; repetidos contam uma vez. Um associado
        que ja pertence ao destino tambem gera movimentacao.

        Raises:
            GestorDesconhecido: destino inexistente. Nada e alterado.
        """
        with self._trava:
            destino = self._carteira_repo.buscar_gestor(gestor_destino_id)
            if destino is None:
                raise GestorDesconhecido(gestor_destino_id)
            movimentacoes = self._planejar_transferencia(
                dict.fromkeys(associado_ids), destino, motivo, self._relogio()
            )
            if movimentacoes:
                self._carteira_repo.transferir((m.associado_id for m in movimentacoes), destino)
                self._movimentacao_repo.registrar_lote(movimentacoes)
                self._notificar()
            return movimentacoes

    def montar_matriz(self, agencia_id: str) -> MatrizAgencia:
        agencia = self._carteira_repo.buscar_agencia(agencia_id)
        if agencia is None:
            raise AgenciaDesconhecida(agencia_id)
        return montar_matriz(
            agencia,
            self._carteira_repo.listar_associados(),
            self._dimensionamento_repo.obter(),
        )

    def previsualizar_matriz(
        self,
        agencia_id: str,
        desejado: ContagensInformadas,
        original: ContagensInformadas | None = None,
    ) -> PlanoRealocacao:
        """Planeja sem aplicar. Subsegmentos desbalanceados vem em plano.desbalanceados."""
        return self._planejar(agencia_id, desejado, original)

    def reconciliar_matriz(
        self,
        agencia_id: str,
        desejado: ContagensInformadas,
        original: ContagensInformadas | None = None,
    ) -> list[MovimentoPlanejado]:
        """Leva a agencia da matriz original para a desejada. Tudo ou nada.

        `original` padrao: matriz atual do store. Celulas ausentes em `desejado`
        ficam como estao.

        Raises:
            AgenciaDesconhecida: agencia inexistente.
            GestorDesconhecido: celula para gestor fora da agencia.
            RealocacaoDesbalanceada: subsegmento cujo total muda.
            AssociadosInsuficientes: origem sem associados para materializar.
            ValueError: celula negativa ou subsegmento invalido.
        """
        with self._trava:
            plano = self._planejar(agencia_id, desejado, original)
            if not plano.balanceado:
                subsegmento, sobra = next(iter(plano.desbalanceados.items()))
                raise RealocacaoDesbalanceada(subsegmento.value, sobra)

            selecao = selecionar_associados(plano.movimentos, self._carteira_repo.listar_associados())

            por_destino: dict[str, list[str]] = {}
            for movimento, ids in selecao:
                por_destino.setdefault(movimento.destino, []).extend(ids)

            agora = self._relogio()
            lotes: list[tuple[list[str], Gestor]] = []
            registros: list[list[Movimentacao]] = []
            for destino_id, ids in por_destino.items():
                destino = self._carteira_repo.buscar_gestor(destino_id)
                if destino is None:
                    raise GestorDesconhecido(destino_id)
                lotes.append((ids, destino))
                registros.append(self._planejar_transferencia(ids, destino, MOTIVO_MATRIZ, agora))

            if lotes:
                self._carteira_repo.transferir_lotes(lotes)
                # Mesma ordem de registrar um lote por destino, um apos o outro.
                self._movimentacao_repo.registrar_lote([m for lote in reversed(registros) for m in lote])
                self._notificar()
            return list(plano.movimentos)

    def _planejar(
        self,
        agencia_id: str,
        desejado: ContagensInformadas,
        original: ContagensInformadas | None,
    ) -> PlanoRealocacao:
        matriz = self.montar_matriz(agencia_id)
        desejado_n = _normalizar(desejado, matriz)
        original_n = _normalizar(original, matriz) if original is not None else matriz.contagens

        subsegmentos = set(matriz.subsegmentos)
        for linha in (*desejado_n.values(), *original_n.values()):
            subsegmentos.update(linha)
        return planejar_movimentos(
            matriz.gestor_ids,
            sorted(subsegmentos, key=ordem_canonica),
            original_n,
            desejado_n,
        )

    def _planejar_transferencia(
        self,
        associado_ids: Iterable[str],
        destino: Gestor,
        motivo: str | None,
        data: datetime,
    ) -> list[Movimentacao]:
        """Uma movimentacao por associado encontrado, com os nomes de antes da troca."""
        encontrados = [
            a for a in (self._carteira_repo.buscar_associado(i) for i in associado_ids) if a is not None
        ]
        return [self._movimentacao(a, destino, motivo, data) for a in encontrados]

    def _movimentacao(
        self,
        associado: Associado,
        destino: Gestor,
        motivo: str | None,
        data: datetime,
    ) -> Movimentacao:
        antigo = self._carteira_repo.buscar_gestor(associado.gestor_id)
        return Movimentacao(
            id=str(uuid.uuid4()),
            associado_id=associado.id,
            associado_nome=associado.nome,
            gestor_antigo_id=associado.gestor_id,
            gestor_antigo_nome=antigo.nome if antigo is not None else GESTOR_DESCONHECIDO,
            gestor_novo_id=destino.id,
            gestor_novo_nome=destino.nome,
            agencia_antiga=associado.agencia,
            agencia_nova=destino.agencia,
            data=data,
            motivo=motivo,
        )

    def _notificar(self) -> None:
        if self._ao_alterar is not None:
            self._ao_alterar()


def _normalizar(contagens: ContagensInformadas, matriz: MatrizAgencia) -> dict[str, dict[Subsegmento, int]]:
    """Chaves de subsegmento viram enum; gestor fora da agencia e rejeitado."""
    normalizado: dict[str, dict[Subsegmento, int]] = {}
    for gestor_id, linha in contagens.items():
        if gestor_id not in matriz.gestor_ids:
            raise GestorDesconhecido(gestor_id)
        normalizado[gestor_id] = {Subsegmento(str(sub)): int(valor) for sub, valor in linha.items()}
    return normalizado
