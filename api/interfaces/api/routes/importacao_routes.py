# api/interfaces/api/routes/importacao_routes.py
from fastapi import APIRouter, Depends, HTTPException

from api.application.dtos.carteira_dto import AgenciaDTO
from api.application.dtos.importacao_dto import ImportacaoRequestDTO
from api.application.services.importacao_service import ImportacaoService
from api.interfaces.api.dependencies import get_importacao_service

router = APIRouter()


@router.post("/importacao", response_model=list[AgenciaDTO])
def importar(
    body: ImportacaoRequestDTO,
    service: ImportacaoService = Depends(get_importacao_service),  # noqa: B008
) -> list[AgenciaDTO]:
    # Respostas de erro nunca repetem o conteudo do arquivo lido.
    try:
        return service.carregar(body.path)
    except PermissionError as err:
        raise HTTPException(status_code=403, detail="Caminho fora do diretorio de importacao") from err
    except FileNotFoundError as err:
        raise HTTPException(status_code=404, detail="Documento de importacao nao encontrado") from err
    except (IsADirectoryError, ValueError) as err:  # ValueError inclui pydantic.ValidationError
        raise HTTPException(status_code=422, detail="Documento de importacao invalido") from err
