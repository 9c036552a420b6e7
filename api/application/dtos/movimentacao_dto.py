# api/application/dtos/movimentacao_dto.py
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from api.domain.movimentacao.entities import Movimentacao


class MovimentacaoDTO(BaseModel):
    id: str
    associado_id: str
    associado_nome: str
    gestor_antigo_id: str
    gestor_antigo_nome: str
    gestor_novo_id: str
    gestor_novo_nome: str
    agencia_antiga: str
    agencia_nova: str
    data: datetime
    motivo: str | None = None

    @classmethod
    def from_domain(cls, mov: Movimentacao) -> MovimentacaoDTO:
        return cls(
            id=mov.id,
            associado_id=mov.associado_id,
            associado_nome=mov.associado_nome,
            gestor_antigo_id=mov.gestor_antigo_id,
            gestor_antigo_nome=mov.gestor_antigo_nome,
            gestor_novo_id=mov.gestor_novo_id,
            gestor_novo_nome=mov.gestor_novo_nome,
            agencia_antiga=mov.agencia_antiga,
            agencia_nova=mov.agencia_nova,
            data=mov.data,
            motivo=mov.motivo,
        )

    def to_domain(self) -> Movimentacao:
        return Movimentacao(**self.model_dump())


class RealocacaoRequestDTO(BaseModel):
    associado_ids: list[str]
    gestor_destino_id: str
    motivo: str | None = None
