# api/interfaces/api/dependencies.py
from api.application.services.dimensionamento_service import DimensionamentoService
from api.application.services.export_service import ExportService
from api.application.services.importacao_service import ImportacaoService
from api.application.services.realocacao_service import RealocacaoService
from api.infrastructure.config import get_settings
from api.infrastructure.estado import EstadoAplicacao, get_estado


def get_realocacao_service() -> RealocacaoService:
    estado = get_estado()
    return RealocacaoService(
        carteira_repo=estado.carteiras,
        movimentacao_repo=estado.movimentacoes,
        dimensionamento_repo=estado.dimensionamento,
        trava=estado.trava,
        ao_alterar=estado.notificar,
    )


def get_dimensionamento_service() -> DimensionamentoService:
    estado = get_estado()
    return DimensionamentoService(
        dimensionamento_repo=estado.dimensionamento,
        trava=estado.trava,
        ao_alterar=estado.notificar,
    )


def get_importacao_service() -> ImportacaoService:
    estado = get_estado()
    return ImportacaoService(
        carteira_repo=estado.carteiras,
        dimensionamento_repo=estado.dimensionamento,
        trava=estado.trava,
        diretorio=get_settings().importacao_dir,
        ao_alterar=estado.notificar,
    )


def get_export_service() -> ExportService:
    return ExportService()


def get_estado_aplicacao() -> EstadoAplicacao:
    return get_estado()
