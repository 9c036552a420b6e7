# api/application/dtos/dimensionamento_dto.py
from __future__ import annotations

from pydantic import BaseModel

from api.domain.segmentacao.value_objects import ParametroDimensionamento


class ParametroDimensionamentoDTO(BaseModel):
    # Tipos frouxos de proposito: a validacao do par e do limite e do dominio.
    segmento: str
    subsegmento: str
    limite_ideal: int

    @classmethod
    def from_domain(cls, parametro: ParametroDimensionamento) -> ParametroDimensionamentoDTO:
        return cls(
            segmento=parametro.segmento.value,
            subsegmento=parametro.subsegmento.value,
            limite_ideal=parametro.limite_ideal,
        )
