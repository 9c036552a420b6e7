# api/domain/segmentacao/value_objects.py
from __future__ import annotations

from dataclasses import dataclass

from .enums import Segmento, Subsegmento, pertence_ao_segmento


@dataclass(frozen=True)
class Classificacao:
    """Resultado do classificador. Par (segmento, subsegmento) sempre consistente."""

    segmento: Segmento
    subsegmento: Subsegmento

    def __post_init__(self) -> None:
        if not pertence_ao_segmento(self.segmento, self.subsegmento):
            raise ValueError(f"Subsegmento {self.subsegmento} nao pertence ao segmento {self.segmento}")


@dataclass(frozen=True)
class ParametroDimensionamento:
    """Limite ideal de associados por gestor para um subsegmento.

    Inteiro nao-negativo. Nunca float, nunca bool.
    """

    segmento: Segmento
    subsegmento: Subsegmento
    limite_ideal: int

    def __post_init__(self) -> None:
        if isinstance(self.limite_ideal, bool) or not isinstance(self.limite_ideal, int):
            raise ValueError(f"limite_ideal deve ser inteiro, recebido {self.limite_ideal!r}")
        if self.limite_ideal < 0:
            raise ValueError(f"limite_ideal nao pode ser negativo ({self.subsegmento}: {self.limite_ideal})")
        if not pertence_ao_segmento(self.segmento, self.subsegmento):
            raise ValueError(f"Subsegmento {self.subsegmento} nao pertence ao segmento {self.segmento}")
