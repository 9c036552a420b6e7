# api/interfaces/api/routes/analise_routes.py
from datetime import datetime

from fastapi import APIRouter, Depends, Query

from api.application.dtos.analise_dto import AnaliseGestorDTO, AnaliseSegmentoDTO, ResumoCooperativaDTO
from api.application.dtos.carteira_dto import GestorDTO
from api.application.services.analise_service import (
    analisar_gestores,
    analisar_segmentos,
    carteiras_sobrecarregadas,
    resumir_cooperativa,
)
from api.infrastructure.estado import EstadoAplicacao
from api.interfaces.api.dependencies import get_estado_aplicacao

router = APIRouter(prefix="/analise")


@router.get("/gestores", response_model=list[AnaliseGestorDTO])
def get_analise_gestores(
    desde: datetime | None = Query(default=None),
    estado: EstadoAplicacao = Depends(get_estado_aplicacao),  # noqa: B008
) -> list[AnaliseGestorDTO]:
    return analisar_gestores(estado.carteiras.listar_gestores(), estado.movimentacoes.listar(), desde)


@router.get("/sobrecarregadas", response_model=list[GestorDTO])
def get_sobrecarregadas(
    estado: EstadoAplicacao = Depends(get_estado_aplicacao),  # noqa: B008
) -> list[GestorDTO]:
    return [GestorDTO.from_domain(g) for g in carteiras_sobrecarregadas(estado.carteiras.listar_gestores())]


@router.get("/segmentos", response_model=list[AnaliseSegmentoDTO])
def get_segmentos(
    estado: EstadoAplicacao = Depends(get_estado_aplicacao),  # noqa: B008
) -> list[AnaliseSegmentoDTO]:
    return analisar_segmentos(estado.carteiras.listar_gestores(), estado.carteiras.listar_associados())


@router.get("/resumo", response_model=ResumoCooperativaDTO)
def get_resumo(
    estado: EstadoAplicacao = Depends(get_estado_aplicacao),  # noqa: B008
) -> ResumoCooperativaDTO:
    carteiras = estado.carteiras
    return resumir_cooperativa(
        carteiras.listar_gestores(), carteiras.listar_associados(), carteiras.listar_agencias()
    )
