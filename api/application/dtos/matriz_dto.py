# api/application/dtos/matriz_dto.py
from __future__ import annotations

from pydantic import BaseModel

from api.domain.carteira.entities import Gestor
from api.domain.realocacao.services import MatrizAgencia, MovimentoPlanejado
from api.domain.segmentacao.enums import Subsegmento


class MatrizGestorDTO(BaseModel):
    id: str
    nome: str
    associados_atuais: int
    limite_ideal: int


class MatrizDTO(BaseModel):
    agencia_id: str
    agencia_nome: str
    gestores: list[MatrizGestorDTO]
    subsegmentos: list[str]
    celulas: dict[str, dict[str, int]]  # gestor_id -> subsegmento -> associados
    limites: dict[str, int]  # subsegmento -> limite ideal configurado

    @classmethod
    def from_domain(
        cls,
        matriz: MatrizAgencia,
        gestores: dict[str, Gestor],
        limites: dict[Subsegmento, int],
    ) -> MatrizDTO:
        return cls(
            agencia_id=matriz.agencia_id,
            agencia_nome=matriz.agencia_nome,
            gestores=[
                MatrizGestorDTO(
                    id=gid,
                    nome=gestores[gid].nome,
                    associados_atuais=gestores[gid].associados_atuais,
                    limite_ideal=gestores[gid].limite_ideal,
                )
                for gid in matriz.gestor_ids
            ],
            subsegmentos=[s.value for s in matriz.subsegmentos],
            celulas={
                gid: {s.value: matriz.valor(gid, s) for s in matriz.subsegmentos}
                for gid in matriz.gestor_ids
            },
            limites={s.value: limites[s] for s in matriz.subsegmentos if s in limites},
        )


class ReconciliacaoRequestDTO(BaseModel):
    desejado: dict[str, dict[Subsegmento, int]]
    original: dict[str, dict[Subsegmento, int]] | None = None


class MovimentoPlanejadoDTO(BaseModel):
    origem: str
    destino: str
    subsegmento: str
    quantidade: int

    @classmethod
    def from_domain(cls, mov: MovimentoPlanejado) -> MovimentoPlanejadoDTO:
        return cls(
            origem=mov.origem,
            destino=mov.destino,
            subsegmento=mov.subsegmento.value,
            quantidade=mov.quantidade,
        )
