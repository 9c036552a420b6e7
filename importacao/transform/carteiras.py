# importacao/transform/carteiras.py
#
# Build gestores, associados and agencias from the classified spreadsheet.
#
# Design decisions:
#   - A gestor is identified by (nome, agencia, carteira): the same person with
#     two carteiras is two gestores. id = "gestor-<nome>-<agencia>-<carteira>".
#   - The gestor takes segmento/subsegmento from its first associado in file
#     order; limite_ideal comes from the dimensionamento (default 100 when the
#     subsegmento is not configured).
#   - Associado ids are sequential in file order ("assoc-000001"), so a re-run
#     of the same file yields the same ids.
#   - Agencias are aggregated from gestores; segment counts use the gestor's
#     segmento, same as the dashboard.
#
# Invariants:
#   - gestor.associados_atuais == number of associados pointing at it.
#   - associado.agencia == its gestor's agencia.
from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass

import polars as pl

from api.domain.carteira.entities import Agencia, Associado, Gestor, id_agencia
from api.domain.segmentacao.dimensionamento import limite_para
from api.domain.segmentacao.enums import Segmento, Subsegmento
from api.domain.segmentacao.value_objects import ParametroDimensionamento


@dataclass(frozen=True)
class Carteiras:
    gestores: tuple[Gestor, ...]
    associados: tuple[Associado, ...]
    agencias: tuple[Agencia, ...]


def id_gestor(nome: str, agencia: str, carteira: str) -> str:
    return f"gestor-{nome}-{agencia}-{carteira}"


def id_associado(sequencia: int) -> str:
    return f"assoc-{sequencia:06d}"


def montar_carteiras(
    df: pl.DataFrame,
    dimensionamento: Iterable[ParametroDimensionamento],
    data_vinculo: str,
) -> Carteiras:
    """Turn classified rows into domain entities.

    Args:
        df: output of classificar_planilha (validated, classified).
        dimensionamento: table used to set each gestor's limite_ideal.
        data_vinculo: ISO timestamp stamped on every associado.
    """
    parametros = tuple(dimensionamento)
    gestores: dict[str, Gestor] = {}
    contagem: dict[str, int] = {}
    associados: list[Associado] = []

    for sequencia, row in enumerate(df.iter_rows(named=True), start=1):
        segmento = Segmento(row["segmento_classificado"])
        subsegmento = Subsegmento(row["subsegmento_classificado"])
        gestor_id = id_gestor(row["gestor"], row["agencia"], row["carteira"])

        if gestor_id not in gestores:
            gestores[gestor_id] = Gestor(
                id=gestor_id,
                nome=row["gestor"],
                agencia=row["agencia"],
                segmento=segmento,
                subsegmento=subsegmento,
                limite_ideal=limite_para(parametros, subsegmento),
            )
        contagem[gestor_id] = contagem.get(gestor_id, 0) + 1

        associados.append(Associado(
            id=id_associado(sequencia),
            nome=row["associado"],
            conta=row["conta"],
            segmento=segmento,
            subsegmento=subsegmento,
            gestor_id=gestor_id,
            agencia=row["agencia"],
            carteira=row["carteira"],
            renda=float(row["renda"]),
            investimentos=float(row["investimentos"]),
            idade=int(row["idade"]),
            data_vinculo=data_vinculo,
        ))

    gestores_finais = tuple(
        dataclasses.replace(g, associados_atuais=contagem[g.id]) for g in gestores.values()
    )

    por_agencia: dict[str, list[Gestor]] = {}
    for gestor in gestores_finais:
        por_agencia.setdefault(gestor.agencia, []).append(gestor)
    agencias = tuple(
        Agencia(id=id_agencia(nome), nome=nome, gestores=tuple(lista))
        for nome, lista in por_agencia.items()
    )

    return Carteiras(gestores=gestores_finais, associados=tuple(associados), agencias=agencias)
