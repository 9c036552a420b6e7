# api/interfaces/api/routes/agencia_routes.py
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from api.application.dtos.carteira_dto import AgenciaDTO
from api.application.dtos.matriz_dto import MatrizDTO, MovimentoPlanejadoDTO, ReconciliacaoRequestDTO
from api.application.services.realocacao_service import RealocacaoService
from api.domain.carteira.errors import (
    AgenciaDesconhecida,
    AssociadosInsuficientes,
    GestorDesconhecido,
    RealocacaoDesbalanceada,
)
from api.domain.segmentacao.dimensionamento import limite_para
from api.infrastructure.estado import EstadoAplicacao
from api.interfaces.api.dependencies import get_estado_aplicacao, get_realocacao_service

router = APIRouter()


class PreviaDTO(BaseModel):
    movimentos: list[MovimentoPlanejadoDTO]
    desbalanceados: dict[str, int]


@router.get("/agencias", response_model=list[AgenciaDTO])
def listar_agencias(
    estado: EstadoAplicacao = Depends(get_estado_aplicacao),  # noqa: B008
) -> list[AgenciaDTO]:
    return [AgenciaDTO.from_domain(a) for a in estado.carteiras.listar_agencias()]


@router.get("/agencias/{agencia_id}/matriz", response_model=MatrizDTO)
def obter_matriz(
    agencia_id: str,
    estado: EstadoAplicacao = Depends(get_estado_aplicacao),  # noqa: B008
    service: RealocacaoService = Depends(get_realocacao_service),  # noqa: B008
) -> MatrizDTO:
    try:
        matriz = service.montar_matriz(agencia_id)
    except AgenciaDesconhecida as err:
        raise HTTPException(status_code=404, detail=str(err)) from err

    gestores = {g.id: g for g in estado.carteiras.listar_gestores()}
    parametros = estado.dimensionamento.obter()
    limites = {s: limite_para(parametros, s) for s in matriz.subsegmentos}
    return MatrizDTO.from_domain(matriz, gestores, limites)


@router.post("/agencias/{agencia_id}/matriz/previa", response_model=PreviaDTO)
def previsualizar_matriz(
    agencia_id: str,
    body: ReconciliacaoRequestDTO,
    service: RealocacaoService = Depends(get_realocacao_service),  # noqa: B008
) -> PreviaDTO:
    try:
        plano = service.previsualizar_matriz(agencia_id, body.desejado, body.original)
    except (AgenciaDesconhecida, GestorDesconhecido) as err:
        raise HTTPException(status_code=404, detail=str(err)) from err
    except ValueError as err:
        raise HTTPException(status_code=422, detail=str(err)) from err
    return PreviaDTO(
        movimentos=[MovimentoPlanejadoDTO.from_domain(m) for m in plano.movimentos],
        desbalanceados={s.value: sobra for s, sobra in plano.desbalanceados.items()},
    )


@router.post("/agencias/{agencia_id}/matriz", response_model=list[MovimentoPlanejadoDTO])
def reconciliar_matriz(
    agencia_id: str,
    body: ReconciliacaoRequestDTO,
    service: RealocacaoService = Depends(get_realocacao_service),  # noqa: B008
) -> list[MovimentoPlanejadoDTO]:
    try:
        movimentos = service.reconciliar_matriz(agencia_id, body.desejado, body.original)
    except (AgenciaDesconhecida, GestorDesconhecido) as err:
        raise HTTPException(status_code=404, detail=str(err)) from err
    except AssociadosInsuficientes as err:
        raise HTTPException(status_code=409, detail=str(err)) from err
    except (RealocacaoDesbalanceada, ValueError) as err:
        raise HTTPException(status_code=422, detail=str(err)) from err
    return [MovimentoPlanejadoDTO.from_domain(m) for m in movimentos]
