# api/interfaces/api/routes/realocacao_routes.py
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query

from api.application.dtos.movimentacao_dto import MovimentacaoDTO, RealocacaoRequestDTO
from api.application.services.realocacao_service import RealocacaoService
from api.domain.carteira.errors import GestorDesconhecido
from api.domain.movimentacao.entities import em_utc
from api.infrastructure.estado import EstadoAplicacao
from api.interfaces.api.dependencies import get_estado_aplicacao, get_realocacao_service

router = APIRouter()


@router.post("/realocacoes", response_model=list[MovimentacaoDTO])
def realocar(
    body: RealocacaoRequestDTO,
    service: RealocacaoService = Depends(get_realocacao_service),  # noqa: B008
) -> list[MovimentacaoDTO]:
    try:
        movimentacoes = service.realocar(body.associado_ids, body.gestor_destino_id, body.motivo)
    except GestorDesconhecido as err:
        raise HTTPException(status_code=404, detail=str(err)) from err
    return [MovimentacaoDTO.from_domain(m) for m in movimentacoes]


@router.get("/movimentacoes", response_model=list[MovimentacaoDTO])
def listar_movimentacoes(
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    desde: datetime | None = Query(default=None),
    estado: EstadoAplicacao = Depends(get_estado_aplicacao),  # noqa: B008
) -> list[MovimentacaoDTO]:
    historico = estado.movimentacoes.listar()
    if desde is not None:
        limite = em_utc(desde)
        historico = tuple(m for m in historico if em_utc(m.data) >= limite)
    return [MovimentacaoDTO.from_domain(m) for m in historico[offset:offset + limit]]
