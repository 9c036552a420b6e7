# api/interfaces/api/routes/dimensionamento_routes.py
from fastapi import APIRouter, Depends, HTTPException

from api.application.dtos.dimensionamento_dto import ParametroDimensionamentoDTO
from api.application.services.dimensionamento_service import DimensionamentoService
from api.domain.carteira.errors import DimensionamentoInvalido
from api.interfaces.api.dependencies import get_dimensionamento_service

router = APIRouter()


@router.get("/dimensionamento", response_model=list[ParametroDimensionamentoDTO])
def obter_dimensionamento(
    service: DimensionamentoService = Depends(get_dimensionamento_service),  # noqa: B008
) -> list[ParametroDimensionamentoDTO]:
    return [ParametroDimensionamentoDTO.from_domain(p) for p in service.obter()]


@router.put("/dimensionamento", response_model=list[ParametroDimensionamentoDTO])
def substituir_dimensionamento(
    body: list[ParametroDimensionamentoDTO],
    service: DimensionamentoService = Depends(get_dimensionamento_service),  # noqa: B008
) -> list[ParametroDimensionamentoDTO]:
    try:
        parametros = service.substituir(p.model_dump() for p in body)
    except DimensionamentoInvalido as err:
        raise HTTPException(status_code=422, detail=str(err)) from err
    return [ParametroDimensionamentoDTO.from_domain(p) for p in parametros]
