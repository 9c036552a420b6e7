# api/application/services/importacao_service.py
from __future__ import annotations

import dataclasses
from collections.abc import Callable
from contextlib import AbstractContextManager
from pathlib import Path

from api.domain.carteira.repository import CarteiraRepository, DimensionamentoRepository
from api.domain.segmentacao.dimensionamento import limite_para
from api.infrastructure.persistencia_json import ler_documento

from ..dtos.carteira_dto import AgenciaDTO


class ImportacaoService:
    """Carrega o documento gerado pelo pacote importacao no store.

    Substitui gestores e associados. Historico de movimentacoes e dimensionamento
    sao mantidos; o limite_ideal de cada gestor e recalculado com o dimensionamento
    vigente. So le arquivos dentro de `diretorio`.
    """

    def __init__(
        self,
        carteira_repo: CarteiraRepository,
        dimensionamento_repo: DimensionamentoRepository,
        trava: AbstractContextManager[object],
        diretorio: Path,
        ao_alterar: Callable[[], None] | None = None,
    ) -> None:
        self._carteira_repo = carteira_repo
        self._dimensionamento_repo = dimensionamento_repo
        self._trava = trava
        self._diretorio = diretorio
        self._ao_alterar = ao_alterar

    def resolver(self, path: str | Path) -> Path:
        """Caminho relativo e resolvido a partir do diretorio de importacao.

        Raises:
            PermissionError: caminho (inclusive via symlink ou "..") fora do diretorio.
        """
        base = self._diretorio.resolve()
        alvo = (base / path).resolve()
        if not alvo.is_relative_to(base):
            raise PermissionError(f"Caminho fora do diretorio de importacao: {path}")
        return alvo

    def carregar(self, path: str | Path) -> list[AgenciaDTO]:
        """Raises PermissionError, FileNotFoundError, pydantic.ValidationError ou ValueError."""
        documento = ler_documento(self.resolver(path))
        with self._trava:
            parametros = self._dimensionamento_repo.obter()
            gestores = [
                dataclasses.replace(g, limite_ideal=limite_para(parametros, g.subsegmento))
                for g in (dto.to_domain() for dto in documento.gestores)
            ]
            self._carteira_repo.substituir(gestores, (a.to_domain() for a in documento.associados))
            if self._ao_alterar is not None:
                self._ao_alterar()
            return [AgenciaDTO.from_domain(a) for a in self._carteira_repo.listar_agencias()]
