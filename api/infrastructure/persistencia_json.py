# api/infrastructure/persistencia_json.py
"""Persistencia do estado em um unico documento JSON.

Leitura tolerante: qualquer chave ausente assume o padrao (listas vazias,
dimensionamento de referencia). Agencias gravadas sao informativas; na carga
sao sempre recalculadas a partir dos gestores.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel

from api.application.dtos.carteira_dto import AgenciaDTO, AssociadoDTO, GestorDTO
from api.application.dtos.dimensionamento_dto import ParametroDimensionamentoDTO
from api.application.dtos.movimentacao_dto import MovimentacaoDTO
from api.domain.segmentacao.dimensionamento import DIMENSIONAMENTO_PADRAO, validar_dimensionamento

if TYPE_CHECKING:
    from api.infrastructure.estado import EstadoAplicacao

logger = logging.getLogger(__name__)


class EstadoDocumento(BaseModel):
    gestores: list[GestorDTO] = []
    associados: list[AssociadoDTO] = []
    agencias: list[AgenciaDTO] = []
    movimentacoes: list[MovimentacaoDTO] = []
    dimensionamento: list[ParametroDimensionamentoDTO] | None = None


def ler_documento(path: str | Path) -> EstadoDocumento:
    """Raises FileNotFoundError se o arquivo nao existe, pydantic.ValidationError se invalido."""
    return EstadoDocumento.model_validate_json(Path(path).read_text(encoding="utf-8"))


def escrever_documento(documento: EstadoDocumento, path: str | Path) -> None:
    """Escrita atomica: grava em .tmp e renomeia."""
    destino = Path(path)
    destino.parent.mkdir(parents=True, exist_ok=True)
    tmp = destino.with_suffix(destino.suffix + ".tmp")
    try:
        tmp.write_text(documento.model_dump_json(indent=2), encoding="utf-8")
        os.replace(tmp, destino)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise


def documento_de(estado: EstadoAplicacao) -> EstadoDocumento:
    carteiras = estado.carteiras
    return EstadoDocumento(
        gestores=[GestorDTO.from_domain(g) for g in carteiras.listar_gestores()],
        associados=[AssociadoDTO.from_domain(a) for a in carteiras.listar_associados()],
        agencias=[AgenciaDTO.from_domain(a) for a in carteiras.listar_agencias()],
        movimentacoes=[MovimentacaoDTO.from_domain(m) for m in estado.movimentacoes.listar()],
        dimensionamento=[
            ParametroDimensionamentoDTO.from_domain(p) for p in estado.dimensionamento.obter()
        ],
    )


def restaurar_estado(estado: EstadoAplicacao, documento: EstadoDocumento) -> None:
    """Carrega o documento no estado, inclusive o historico.

    Mantem o limite_ideal gravado em cada gestor (nao re-deriva do dimensionamento).

    Raises:
        DimensionamentoInvalido: se a tabela gravada for invalida.
        ValueError: se algum associado referenciar gestor inexistente.
    """
    if documento.dimensionamento is None:
        parametros = list(DIMENSIONAMENTO_PADRAO)
    else:
        parametros = validar_dimensionamento(p.model_dump() for p in documento.dimensionamento)

    with estado.trava:
        estado.carteiras.substituir(
            (g.to_domain() for g in documento.gestores),
            (a.to_domain() for a in documento.associados),
        )
        estado.movimentacoes.carregar(m.to_domain() for m in documento.movimentacoes)
        estado.dimensionamento.substituir(parametros)


class SnapshotJson:
    """Observador: regrava o documento inteiro a cada alteracao de estado.

    A alteracao ja foi aplicada quando o observador roda; falha de disco e
    registrada no log e o documento anterior fica como esta ate a proxima
    gravacao bem-sucedida.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def __call__(self, estado: EstadoAplicacao) -> None:
        try:
            escrever_documento(documento_de(estado), self.path)
        except OSError:
            logger.exception("Falha ao gravar snapshot do estado em %s", self.path)
