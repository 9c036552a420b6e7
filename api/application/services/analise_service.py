"""Indicadores de ocupacao de carteiras. Funcoes puras, zero IO."""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from api.domain.carteira.entities import Agencia, Associado, Gestor
from api.domain.movimentacao.entities import Movimentacao, em_utc
from api.domain.segmentacao.enums import Segmento

from ..dtos.analise_dto import AnaliseGestorDTO, AnaliseSegmentoDTO, ResumoCooperativaDTO

LIMIAR_ATENCAO = 90.0
LIMIAR_SOBRECARGA = 100.0

STATUS_NORMAL = "normal"
STATUS_ATENCAO = "atencao"
STATUS_SOBRECARREGADO = "sobrecarregado"


def percentual_ocupacao(gestor: Gestor) -> float:
    """associados / limite * 100. Limite 0: 0 se a carteira esta vazia, 100 caso contrario."""
    if gestor.limite_ideal == 0:
        return 0.0 if gestor.associados_atuais == 0 else LIMIAR_SOBRECARGA
    return gestor.associados_atuais / gestor.limite_ideal * 100


def status_ocupacao(percentual: float) -> str:
    if percentual >= LIMIAR_SOBRECARGA:
        return STATUS_SOBRECARREGADO
    if percentual >= LIMIAR_ATENCAO:
        return STATUS_ATENCAO
    return STATUS_NORMAL


def analisar_gestores(
    gestores: Iterable[Gestor],
    movimentacoes: Iterable[Movimentacao],
    desde: datetime | None = None,
) -> list[AnaliseGestorDTO]:
    limite = em_utc(desde) if desde is not None else None
    ganhos: dict[str, int] = {}
    perdas: dict[str, int] = {}
    for mov in movimentacoes:
        if limite is not None and em_utc(mov.data) < limite:
            continue
        if mov.gestor_antigo_id == mov.gestor_novo_id:
            continue
        ganhos[mov.gestor_novo_id] = ganhos.get(mov.gestor_novo_id, 0) + 1
        perdas[mov.gestor_antigo_id] = perdas.get(mov.gestor_antigo_id, 0) + 1

    analise: list[AnaliseGestorDTO] = []
    for gestor in gestores:
        percentual = percentual_ocupacao(gestor)
        analise.append(AnaliseGestorDTO(
            gestor_id=gestor.id,
            nome=gestor.nome,
            agencia=gestor.agencia,
            segmento=gestor.segmento.value,
            subsegmento=gestor.subsegmento.value,
            associados_atuais=gestor.associados_atuais,
            limite_ideal=gestor.limite_ideal,
            percentual_ocupacao=round(percentual, 1),
            status=status_ocupacao(percentual),
            ganhos_periodo=ganhos.get(gestor.id, 0),
            perdas_periodo=perdas.get(gestor.id, 0),
        ))
    return analise


def carteiras_sobrecarregadas(gestores: Iterable[Gestor]) -> list[Gestor]:
    """Gestores com ocupacao >= 90%, do mais ocupado para o menos."""
    candidatos = [g for g in gestores if percentual_ocupacao(g) >= LIMIAR_ATENCAO]
    return sorted(candidatos, key=percentual_ocupacao, reverse=True)


def analisar_segmentos(gestores: Sequence[Gestor], associados: Sequence[Associado]) -> list[AnaliseSegmentoDTO]:
    analise: list[AnaliseSegmentoDTO] = []
    for segmento in Segmento:
        do_segmento = [g for g in gestores if g.segmento == segmento]
        capacidade = sum(g.limite_ideal for g in do_segmento)
        ocupacao = sum(g.associados_atuais for g in do_segmento)
        analise.append(AnaliseSegmentoDTO(
            segmento=segmento.value,
            gestores=len(do_segmento),
            associados=sum(1 for a in associados if a.segmento == segmento),
            capacidade_total=capacidade,
            ocupacao_atual=ocupacao,
            disponivel=capacidade - ocupacao,
            percentual=round(ocupacao / capacidade * 100, 1) if capacidade > 0 else 0.0,
        ))
    return analise


def resumir_cooperativa(
    gestores: Sequence[Gestor],
    associados: Sequence[Associado],
    agencias: Sequence[Agencia],
) -> ResumoCooperativaDTO:
    # "Problema" aqui e estritamente acima de 90%, diferente da lista de sobrecarregadas.
    problema = sum(1 for g in gestores if percentual_ocupacao(g) > LIMIAR_ATENCAO)
    return ResumoCooperativaDTO(
        total_associados=len(associados),
        total_gestores=len(gestores),
        total_agencias=len(agencias),
        carteiras_problema=problema,
    )
