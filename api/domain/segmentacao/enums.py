# api/domain/segmentacao/enums.py
from __future__ import annotations

from enum import StrEnum


class Segmento(StrEnum):
    AGRO = "Agro"
    PF = "PF"
    PJ = "PJ"


class Subsegmento(StrEnum):
    # Agro
    AG_I = "Ag I"
    AG_II = "Ag II"
    AG_III = "Ag III"
    # PF
    PF_I = "PF I"
    PF_II = "PF II"
    PF_III = "PF III"
    PF_IV = "PF IV"
    PF_V = "PF V"
    PF_VI = "PF VI"
    PF_MELHOR_IDADE = "PF Melhor Idade"
    # PJ
    MEI = "MEI"
    E1 = "E1"
    E2 = "E2"
    E3 = "E3"
    E4 = "E4"
    E5 = "E5"


SUBSEGMENTOS_POR_SEGMENTO: dict[Segmento, tuple[Subsegmento, ...]] = {
    Segmento.AGRO: (Subsegmento.AG_I, Subsegmento.AG_II, Subsegmento.AG_III),
    Segmento.PF: (
        Subsegmento.PF_I,
        Subsegmento.PF_II,
        Subsegmento.PF_III,
        Subsegmento.PF_IV,
        Subsegmento.PF_V,
        Subsegmento.PF_VI,
        Subsegmento.PF_MELHOR_IDADE,
    ),
    Segmento.PJ: (
        Subsegmento.MEI,
        Subsegmento.E1,
        Subsegmento.E2,
        Subsegmento.E3,
        Subsegmento.E4,
        Subsegmento.E5,
    ),
}


def pertence_ao_segmento(segmento: Segmento, subsegmento: Subsegmento) -> bool:
    return subsegmento in SUBSEGMENTOS_POR_SEGMENTO[segmento]


def segmento_de(subsegmento: Subsegmento) -> Segmento:
    """Segmento dono do subsegmento. Cada subsegmento pertence a exatamente um."""
    for segmento, subsegmentos in SUBSEGMENTOS_POR_SEGMENTO.items():
        if subsegmento in subsegmentos:
            return segmento
    raise ValueError(f"Subsegmento sem segmento: {subsegmento!r}")


def ordem_canonica(subsegmento: Subsegmento) -> int:
    """Posicao do subsegmento na declaracao do enum (Ag I, Ag II, ..., E5)."""
    return list(Subsegmento).index(subsegmento)
