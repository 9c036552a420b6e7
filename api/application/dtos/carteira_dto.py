# api/application/dtos/carteira_dto.py
from __future__ import annotations

from pydantic import BaseModel

from api.domain.carteira.entities import Agencia, Associado, Gestor
from api.domain.segmentacao.enums import Segmento, Subsegmento


class GestorDTO(BaseModel):
    id: str
    nome: str
    agencia: str
    segmento: Segmento
    subsegmento: Subsegmento
    associados_atuais: int = 0
    limite_ideal: int = 0

    @classmethod
    def from_domain(cls, gestor: Gestor) -> GestorDTO:
        return cls(
            id=gestor.id,
            nome=gestor.nome,
            agencia=gestor.agencia,
            segmento=gestor.segmento,
            subsegmento=gestor.subsegmento,
            associados_atuais=gestor.associados_atuais,
            limite_ideal=gestor.limite_ideal,
        )

    def to_domain(self) -> Gestor:
        return Gestor(
            id=self.id,
            nome=self.nome,
            agencia=self.agencia,
            segmento=self.segmento,
            subsegmento=self.subsegmento,
            associados_atuais=self.associados_atuais,
            limite_ideal=self.limite_ideal,
        )


class AssociadoDTO(BaseModel):
    id: str
    nome: str = ""
    conta: str = ""
    segmento: Segmento
    subsegmento: Subsegmento
    gestor_id: str
    agencia: str = ""
    carteira: str = ""
    renda: float = 0.0
    investimentos: float = 0.0
    idade: int = 0
    data_vinculo: str = ""

    @classmethod
    def from_domain(cls, associado: Associado) -> AssociadoDTO:
        return cls(
            id=associado.id,
            nome=associado.nome,
            conta=associado.conta,
            segmento=associado.segmento,
            subsegmento=associado.subsegmento,
            gestor_id=associado.gestor_id,
            agencia=associado.agencia,
            carteira=associado.carteira,
            renda=associado.renda,
            investimentos=associado.investimentos,
            idade=associado.idade,
            data_vinculo=associado.data_vinculo,
        )

    def to_domain(self) -> Associado:
        return Associado(**self.model_dump())


class AgenciaDTO(BaseModel):
    id: str
    nome: str
    gestores: list[GestorDTO] = []
    total_associados: int = 0
    segmentos: dict[str, int] = {}

    @classmethod
    def from_domain(cls, agencia: Agencia) -> AgenciaDTO:
        return cls(
            id=agencia.id,
            nome=agencia.nome,
            gestores=[GestorDTO.from_domain(g) for g in agencia.gestores],
            total_associados=agencia.total_associados,
            segmentos={s.value: n for s, n in agencia.segmentos.items()},
        )
