# api/domain/realocacao/services.py
#
# Pure domain service for matrix reallocation (matriz de realocacao).
#
# Design decisions:
#   - Everything here is pure: no store access, no clock, no locks. The
#     application service (RealocacaoService) snapshots the store, calls these
#     functions, and applies the result under the store lock.
#   - The matrix is gestor x subsegmento. Gestores are ordered by id; that order
#     is the only tie-break used when pairing sources with sinks.
#   - planejar_movimentos is a greedy balanced-transportation match done
#     independently per subsegmento. Members never change subsegmento here.
#   - Materialization (selecionar_associados) is all-or-nothing: it either
#     returns concrete associado ids for every planned move or raises
#     AssociadosInsuficientes before anything is applied.
#
# Invariants:
#   - For a balanced subsegmento, applying the plan to `original` yields
#     exactly `desejado` for every gestor.
#   - No associado id is selected twice across the whole plan.
#   - Every MovimentoPlanejado has quantidade > 0 and origem != destino.
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from api.domain.carteira.entities import Agencia, Associado
from api.domain.carteira.errors import AssociadosInsuficientes
from api.domain.segmentacao.enums import SUBSEGMENTOS_POR_SEGMENTO, Subsegmento, ordem_canonica
from api.domain.segmentacao.value_objects import ParametroDimensionamento

Contagens = Mapping[str, Mapping[Subsegmento, int]]


@dataclass(frozen=True)
class MatrizAgencia:
    """Grade gestor x subsegmento com a contagem atual de associados."""

    agencia_id: str
    agencia_nome: str
    gestor_ids: tuple[str, ...]
    subsegmentos: tuple[Subsegmento, ...]
    contagens: dict[str, dict[Subsegmento, int]] = field(default_factory=dict)

    def valor(self, gestor_id: str, subsegmento: Subsegmento) -> int:
        return self.contagens.get(gestor_id, {}).get(subsegmento, 0)

    def total_subsegmento(self, subsegmento: Subsegmento) -> int:
        return sum(self.valor(g, subsegmento) for g in self.gestor_ids)

    def total_gestor(self, gestor_id: str) -> int:
        return sum(self.contagens.get(gestor_id, {}).values())


@dataclass(frozen=True)
class MovimentoPlanejado:
    origem: str
    destino: str
    subsegmento: Subsegmento
    quantidade: int


@dataclass(frozen=True)
class PlanoRealocacao:
    """Movimentos planejados + sobra por subsegmento que nao fechou.

    sobra > 0: associados que sairiam sem destino; sobra < 0: vagas sem origem.
    """

    movimentos: tuple[MovimentoPlanejado, ...]
    desbalanceados: dict[Subsegmento, int] = field(default_factory=dict)

    @property
    def balanceado(self) -> bool:
        return not self.desbalanceados


@dataclass
class _Saldo:
    gestor_id: str
    quantidade: int


def montar_matriz(
    agencia: Agencia,
    associados: Iterable[Associado],
    dimensionamento: Iterable[ParametroDimensionamento],
) -> MatrizAgencia:
    """Conta associados por gestor e subsegmento dentro da agencia.

    Linhas: todos os subsegmentos configurados para os segmentos atendidos pelos
    gestores da agencia, mais qualquer subsegmento efetivamente presente na
    carteira deles. Ordem canonica do enum.
    """
    gestores = sorted(agencia.gestores, key=lambda g: g.id)
    gestor_ids = tuple(g.id for g in gestores)

    segmentos = {g.segmento for g in gestores}
    subsegmentos: set[Subsegmento] = {
        p.subsegmento for p in dimensionamento if p.segmento in segmentos
    }
    # Sem dimensionamento configurado, cai na lista completa do segmento.
    if not subsegmentos:
        for segmento in segmentos:
            subsegmentos.update(SUBSEGMENTOS_POR_SEGMENTO[segmento])

    contagens: dict[str, dict[Subsegmento, int]] = {g: {} for g in gestor_ids}
    for associado in associados:
        if associado.gestor_id not in contagens:
            continue
        linha = contagens[associado.gestor_id]
        linha[associado.subsegmento] = linha.get(associado.subsegmento, 0) + 1
        subsegmentos.add(associado.subsegmento)

    ordenados = tuple(sorted(subsegmentos, key=ordem_canonica))
    for linha in contagens.values():
        for sub in ordenados:
            linha.setdefault(sub, 0)

    return MatrizAgencia(
        agencia_id=agencia.id,
        agencia_nome=agencia.nome,
        gestor_ids=gestor_ids,
        subsegmentos=ordenados,
        contagens=contagens,
    )


def planejar_movimentos(
    gestor_ids: Sequence[str],
    subsegmentos: Sequence[Subsegmento],
    original: Contagens,
    desejado: Contagens,
) -> PlanoRealocacao:
    """Casamento guloso origem -> destino, por subsegmento.

    Celula ausente em `desejado` vale o mesmo que em `original` (sem mudanca).

    Raises:
        ValueError: se alguma celula desejada for negativa.
    """
    movimentos: list[MovimentoPlanejado] = []
    desbalanceados: dict[Subsegmento, int] = {}

    for sub in subsegmentos:
        origens: list[_Saldo] = []
        destinos: list[_Saldo] = []
        saldo = 0
        for gestor_id in gestor_ids:
            antes = original.get(gestor_id, {}).get(sub, 0)
            depois = desejado.get(gestor_id, {}).get(sub, antes)
            if depois < 0:
                raise ValueError(f"Valor desejado negativo para {gestor_id} em {sub}: {depois}")
            delta = depois - antes
            saldo += delta
            if delta < 0:
                origens.append(_Saldo(gestor_id, -delta))
            elif delta > 0:
                destinos.append(_Saldo(gestor_id, delta))

        i = j = 0
        while i < len(origens) and j < len(destinos):
            origem, destino = origens[i], destinos[j]
            quantidade = min(origem.quantidade, destino.quantidade)
            movimentos.append(MovimentoPlanejado(origem.gestor_id, destino.gestor_id, sub, quantidade))
            origem.quantidade -= quantidade
            destino.quantidade -= quantidade
            if origem.quantidade == 0:
                i += 1
            if destino.quantidade == 0:
                j += 1

        if saldo != 0:
            desbalanceados[sub] = -saldo

    return PlanoRealocacao(movimentos=tuple(movimentos), desbalanceados=desbalanceados)


def selecionar_associados(
    movimentos: Iterable[MovimentoPlanejado],
    associados: Sequence[Associado],
) -> list[tuple[MovimentoPlanejado, list[str]]]:
    """Escolhe os primeiros N associados da origem no subsegmento, na ordem do store.

    Raises:
        AssociadosInsuficientes: se alguma origem nao tiver associados suficientes.
            Nada e devolvido parcialmente.
    """
    usados: set[str] = set()
    selecao: list[tuple[MovimentoPlanejado, list[str]]] = []
    for mov in movimentos:
        if mov.quantidade <= 0:
            continue
        ids: list[str] = []
        for associado in associados:
            if len(ids) == mov.quantidade:
                break
            if associado.id in usados:
                continue
            if associado.gestor_id == mov.origem and associado.subsegmento == mov.subsegmento:
                ids.append(associado.id)
        if len(ids) < mov.quantidade:
            raise AssociadosInsuficientes(mov.origem, mov.subsegmento.value, mov.quantidade - len(ids))
        usados.update(ids)
        selecao.append((mov, ids))
    return selecao
