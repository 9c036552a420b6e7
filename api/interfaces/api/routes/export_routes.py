# api/interfaces/api/routes/export_routes.py
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from api.application.services.analise_service import analisar_segmentos
from api.application.services.export_service import ExportService, Registro
from api.infrastructure.estado import EstadoAplicacao
from api.interfaces.api.dependencies import get_estado_aplicacao, get_export_service

router = APIRouter()

Recurso = Literal["gestores", "associados", "movimentacoes", "segmentos", "sobrecarregadas"]


@router.get("/export/{recurso}")
def exportar(
    recurso: Recurso,
    formato: Literal["csv", "json"] = Query(...),
    gestor_id: str | None = Query(default=None),
    estado: EstadoAplicacao = Depends(get_estado_aplicacao),  # noqa: B008
    export_service: ExportService = Depends(get_export_service),  # noqa: B008
) -> Response:
    if gestor_id is not None and recurso != "associados":
        raise HTTPException(status_code=422, detail="gestor_id so se aplica a associados")
    if gestor_id is not None and estado.carteiras.buscar_gestor(gestor_id) is None:
        raise HTTPException(status_code=404, detail="Gestor nao encontrado")

    registros = _registros(recurso, gestor_id, estado, export_service)
    if formato == "json":
        return Response(
            content=export_service.exportar_json(registros),
            media_type="application/json",
        )
    return Response(
        content=export_service.exportar_csv(registros),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={recurso}.csv"},
    )


def _registros(
    recurso: Recurso,
    gestor_id: str | None,
    estado: EstadoAplicacao,
    export_service: ExportService,
) -> list[Registro]:
    carteiras = estado.carteiras
    gestores = carteiras.listar_gestores()
    if recurso == "gestores":
        return export_service.gestores(gestores)
    if recurso == "associados":
        return export_service.associados(carteiras.listar_associados(gestor_id), gestores)
    if recurso == "movimentacoes":
        return export_service.movimentacoes(estado.movimentacoes.listar())
    if recurso == "segmentos":
        return export_service.segmentos(analisar_segmentos(gestores, carteiras.listar_associados()))
    return export_service.sobrecarregadas(gestores)
