# api/domain/segmentacao/dimensionamento.py
from __future__ import annotations

from collections.abc import Iterable, Mapping

from api.domain.carteira.errors import DimensionamentoInvalido

from .enums import Segmento, Subsegmento
from .value_objects import ParametroDimensionamento

# Limite usado quando o subsegmento nao esta no dimensionamento.
LIMITE_PADRAO_SEM_CONFIGURACAO = 100

# Tabela de referencia carregada no inicio do processo (16 subsegmentos).
DIMENSIONAMENTO_PADRAO: tuple[ParametroDimensionamento, ...] = (
    ParametroDimensionamento(Segmento.AGRO, Subsegmento.AG_I, 250),
    ParametroDimensionamento(Segmento.AGRO, Subsegmento.AG_II, 200),
    ParametroDimensionamento(Segmento.AGRO, Subsegmento.AG_III, 120),
    ParametroDimensionamento(Segmento.PF, Subsegmento.PF_I, 10000),
    ParametroDimensionamento(Segmento.PF, Subsegmento.PF_II, 2500),
    ParametroDimensionamento(Segmento.PF, Subsegmento.PF_III, 450),
    ParametroDimensionamento(Segmento.PF, Subsegmento.PF_IV, 300),
    ParametroDimensionamento(Segmento.PF, Subsegmento.PF_V, 150),
    ParametroDimensionamento(Segmento.PF, Subsegmento.PF_VI, 60),
    ParametroDimensionamento(Segmento.PF, Subsegmento.PF_MELHOR_IDADE, 2500),
    ParametroDimensionamento(Segmento.PJ, Subsegmento.MEI, 500),
    ParametroDimensionamento(Segmento.PJ, Subsegmento.E1, 500),
    ParametroDimensionamento(Segmento.PJ, Subsegmento.E2, 400),
    ParametroDimensionamento(Segmento.PJ, Subsegmento.E3, 300),
    ParametroDimensionamento(Segmento.PJ, Subsegmento.E4, 150),
    ParametroDimensionamento(Segmento.PJ, Subsegmento.E5, 90),
)


def validar_dimensionamento(entradas: Iterable[Mapping[str, object]]) -> list[ParametroDimensionamento]:
    """Converte entradas cruas em parametros validados, ou rejeita a tabela inteira.

    Cada entrada precisa de segmento, subsegmento e limite_ideal. Rejeita par
    invalido, limite negativo/nao inteiro e subsegmento repetido.

    Raises:
        DimensionamentoInvalido: na primeira entrada invalida, com o indice dela.
    """
    parametros: list[ParametroDimensionamento] = []
    vistos: set[Subsegmento] = set()
    for indice, entrada in enumerate(entradas):
        try:
            segmento = Segmento(str(entrada["segmento"]))
            subsegmento = Subsegmento(str(entrada["subsegmento"]))
            limite = entrada["limite_ideal"]
            if isinstance(limite, float) and limite.is_integer():
                limite = int(limite)
            parametro = ParametroDimensionamento(segmento, subsegmento, limite)  # type: ignore[arg-type]
        except KeyError as err:
            raise DimensionamentoInvalido(f"Entrada {indice}: campo ausente {err}") from err
        except ValueError as err:
            raise DimensionamentoInvalido(f"Entrada {indice}: {err}") from err

        if parametro.subsegmento in vistos:
            raise DimensionamentoInvalido(f"Entrada {indice}: subsegmento duplicado {parametro.subsegmento}")
        vistos.add(parametro.subsegmento)
        parametros.append(parametro)
    return parametros


def limite_para(
    dimensionamento: Iterable[ParametroDimensionamento],
    subsegmento: Subsegmento | str,
    padrao: int = LIMITE_PADRAO_SEM_CONFIGURACAO,
) -> int:
    for parametro in dimensionamento:
        if parametro.subsegmento == subsegmento:
            return parametro.limite_ideal
    return padrao
