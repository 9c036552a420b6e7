# api/domain/carteira/entities.py
from __future__ import annotations

from dataclasses import dataclass

from api.domain.segmentacao.enums import Segmento, Subsegmento, pertence_ao_segmento


@dataclass(frozen=True)
class Gestor:
    """Gestor de carteira. Imutavel: o store substitui a instancia a cada mudanca.

    associados_atuais e cache derivado, recalculado pelo store; limite_ideal e
    copiado do dimensionamento no momento da atribuicao (nao acompanha mudancas
    posteriores na configuracao).
    """
    id: str
    nome: str
    agencia: str
    segmento: Segmento
    subsegmento: Subsegmento
    associados_atuais: int = 0
    limite_ideal: int = 0

    def __post_init__(self) -> None:
        if not self.id.strip():
            raise ValueError("Gestor exige id nao-vazio")
        if not pertence_ao_segmento(self.segmento, self.subsegmento):
            raise ValueError(f"Gestor {self.id}: subsegmento {self.subsegmento} fora do segmento {self.segmento}")


@dataclass(frozen=True)
class Associado:
    """Associado vinculado a exatamente um gestor. agencia espelha a agencia do gestor."""
    id: str
    nome: str
    conta: str
    segmento: Segmento
    subsegmento: Subsegmento
    gestor_id: str
    agencia: str
    carteira: str = ""
    renda: float = 0.0
    investimentos: float = 0.0
    idade: int = 0
    data_vinculo: str = ""

    def __post_init__(self) -> None:
        if not self.id.strip():
            raise ValueError("Associado exige id nao-vazio")
        if not self.gestor_id.strip():
            raise ValueError(f"Associado {self.id} exige gestor_id")
        if not pertence_ao_segmento(self.segmento, self.subsegmento):
            raise ValueError(
                f"Associado {self.id}: subsegmento {self.subsegmento} fora do segmento {self.segmento}"
            )


@dataclass(frozen=True)
class Agencia:
    """Agregado derivado dos gestores da agencia. Nunca alterado diretamente."""
    id: str
    nome: str
    gestores: tuple[Gestor, ...] = ()

    @property
    def total_associados(self) -> int:
        return sum(g.associados_atuais for g in self.gestores)

    @property
    def segmentos(self) -> dict[Segmento, int]:
        """Associados por segmento do gestor (Agro, PF, PJ sempre presentes)."""
        contagem = {s: 0 for s in Segmento}
        for gestor in self.gestores:
            contagem[gestor.segmento] += gestor.associados_atuais
        return contagem


def id_agencia(nome: str) -> str:
    return f"agencia-{nome}"
