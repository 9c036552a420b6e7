# api/interfaces/api/routes/gestor_routes.py
from fastapi import APIRouter, Depends, HTTPException, Query

from api.application.dtos.carteira_dto import AssociadoDTO, GestorDTO
from api.infrastructure.estado import EstadoAplicacao
from api.interfaces.api.dependencies import get_estado_aplicacao

router = APIRouter()


@router.get("/gestores", response_model=list[GestorDTO])
def listar_gestores(
    estado: EstadoAplicacao = Depends(get_estado_aplicacao),  # noqa: B008
) -> list[GestorDTO]:
    return [GestorDTO.from_domain(g) for g in estado.carteiras.listar_gestores()]


@router.get("/gestores/{gestor_id}", response_model=GestorDTO)
def buscar_gestor(
    gestor_id: str,
    estado: EstadoAplicacao = Depends(get_estado_aplicacao),  # noqa: B008
) -> GestorDTO:
    gestor = estado.carteiras.buscar_gestor(gestor_id)
    if gestor is None:
        raise HTTPException(status_code=404, detail="Gestor nao encontrado")
    return GestorDTO.from_domain(gestor)


@router.get("/gestores/{gestor_id}/associados", response_model=list[AssociadoDTO])
def listar_associados_do_gestor(
    gestor_id: str,
    estado: EstadoAplicacao = Depends(get_estado_aplicacao),  # noqa: B008
) -> list[AssociadoDTO]:
    if estado.carteiras.buscar_gestor(gestor_id) is None:
        raise HTTPException(status_code=404, detail="Gestor nao encontrado")
    return [AssociadoDTO.from_domain(a) for a in estado.carteiras.listar_associados(gestor_id)]


@router.get("/associados", response_model=list[AssociadoDTO])
def listar_associados(
    gestor_id: str | None = Query(default=None),
    estado: EstadoAplicacao = Depends(get_estado_aplicacao),  # noqa: B008
) -> list[AssociadoDTO]:
    return [AssociadoDTO.from_domain(a) for a in estado.carteiras.listar_associados(gestor_id)]
