# api/domain/segmentacao/classificacao.py
"""Classificacao de associados em segmento/subsegmento. Funcao pura, zero IO.

Regras em cascata (primeira que casa vence). Entradas invalidas (NaN, negativos)
nunca levantam erro: caem no ramo "senao" de cada cascata.
"""
from __future__ import annotations

import math

from .enums import Segmento, Subsegmento
from .value_objects import Classificacao

# PF: faixas de renda mensal (R$) e de investimentos (R$).
_PF_IDADE_MELHOR_IDADE = 64
_PF_RENDA_MAX_MELHOR_IDADE = 3999.99
_PF_INVEST_MAX_MELHOR_IDADE = 79999.99

_PF_VI_RENDA_MIN = 30000
_PF_VI_INVEST_ACIMA = 3_000_000
_PF_V_RENDA = (15000, 29999.99)
_PF_V_INVEST_ACIMA = 500_000
_PF_IV_RENDA = (10000, 14999.99)
_PF_IV_INVEST_ACIMA = 150_000
_PF_III_RENDA = (4000, 9999.99)
_PF_III_INVEST_ACIMA = 80_000
_PF_II_RENDA = (2000, 3999.99)
_PF_II_INVEST_MAX = 79999.99

# Agro: faturamento anual.
_AGRO_III_ACIMA = 2_400_000
_AGRO_II_MIN = 500_000

# PJ: faturamento anual.
_PJ_E5_ACIMA = 25_000_000
_PJ_E4_MIN = 10_000_000
_PJ_E3_MIN = 3_000_000
_PJ_E2_MIN = 500_000
_PJ_E1_MIN = 81_000


def classificar_associado(
    renda: float | None,
    investimentos: float | None,
    idade: int | None = None,
    segmento_informado: str | None = None,
    subsegmento_informado: str | None = None,
) -> Classificacao:
    """Classifica um associado. Funcao total: sempre retorna um par valido.

    Se a planilha informa o segmento, ele escolhe a regra por substring, nesta
    ordem: "AGRO"/"AG" -> Agro, "PJ"/"E"/"MEI" -> PJ, "PF" -> PF. Um segmento
    informado que nao casa com nenhuma cai na classificacao automatica.

    subsegmento_informado e aceito mas nao altera o resultado.
    Para Agro e PJ, investimentos e usado como proxy de faturamento.
    """
    renda_f = _numero(renda)
    invest_f = _numero(investimentos)
    idade_f = _numero(idade) if idade is not None else 0.0

    if segmento_informado and segmento_informado.strip():
        seg = segmento_informado.upper()
        # Casamento por substring: "AG" tambem casa com qualquer texto que contenha AG.
        if "AGRO" in seg or "AG" in seg:
            return classificar_agro(invest_f)
        if "PJ" in seg or "E" in seg or "MEI" in seg:
            return classificar_pj(invest_f)
        if "PF" in seg:
            return classificar_pf(renda_f, invest_f, idade_f)

    # Sem renda individual: trata como pessoa juridica.
    if renda is None or renda_f == 0 or math.isnan(renda_f):
        return classificar_pj(invest_f)

    return classificar_pf(renda_f, invest_f, idade_f)


def classificar_pf(renda: float, investimentos: float, idade: float) -> Classificacao:
    if idade > _PF_IDADE_MELHOR_IDADE and (
        _entre(renda, 0, _PF_RENDA_MAX_MELHOR_IDADE) or _entre(investimentos, 0, _PF_INVEST_MAX_MELHOR_IDADE)
    ):
        return Classificacao(Segmento.PF, Subsegmento.PF_MELHOR_IDADE)

    if renda >= _PF_VI_RENDA_MIN or investimentos > _PF_VI_INVEST_ACIMA:
        return Classificacao(Segmento.PF, Subsegmento.PF_VI)

    if _entre(renda, *_PF_V_RENDA) or investimentos > _PF_V_INVEST_ACIMA:
        return Classificacao(Segmento.PF, Subsegmento.PF_V)

    if _entre(renda, *_PF_IV_RENDA) or investimentos > _PF_IV_INVEST_ACIMA:
        return Classificacao(Segmento.PF, Subsegmento.PF_IV)

    if _entre(renda, *_PF_III_RENDA) or investimentos > _PF_III_INVEST_ACIMA:
        return Classificacao(Segmento.PF, Subsegmento.PF_III)

    if _entre(renda, *_PF_II_RENDA) or _entre(investimentos, 0, _PF_II_INVEST_MAX):
        return Classificacao(Segmento.PF, Subsegmento.PF_II)

    return Classificacao(Segmento.PF, Subsegmento.PF_I)


def classificar_agro(faturamento: float) -> Classificacao:
    if faturamento > _AGRO_III_ACIMA:
        return Classificacao(Segmento.AGRO, Subsegmento.AG_III)
    if _entre(faturamento, _AGRO_II_MIN, _AGRO_III_ACIMA):
        return Classificacao(Segmento.AGRO, Subsegmento.AG_II)
    return Classificacao(Segmento.AGRO, Subsegmento.AG_I)


def classificar_pj(faturamento: float) -> Classificacao:
    if faturamento > _PJ_E5_ACIMA:
        return Classificacao(Segmento.PJ, Subsegmento.E5)
    if _entre(faturamento, _PJ_E4_MIN, _PJ_E5_ACIMA):
        return Classificacao(Segmento.PJ, Subsegmento.E4)
    if _PJ_E3_MIN <= faturamento < _PJ_E4_MIN:
        return Classificacao(Segmento.PJ, Subsegmento.E3)
    if _PJ_E2_MIN <= faturamento < _PJ_E3_MIN:
        return Classificacao(Segmento.PJ, Subsegmento.E2)
    if _PJ_E1_MIN <= faturamento < _PJ_E2_MIN:
        return Classificacao(Segmento.PJ, Subsegmento.E1)
    return Classificacao(Segmento.PJ, Subsegmento.MEI)


def _entre(valor: float, minimo: float, maximo: float) -> bool:
    """Intervalo fechado. NaN nunca esta em intervalo algum."""
    return minimo <= valor <= maximo


def _numero(valor: float | int | None) -> float:
    if valor is None:
        return 0.0
    try:
        return float(valor)
    except (TypeError, ValueError):
        return math.nan
