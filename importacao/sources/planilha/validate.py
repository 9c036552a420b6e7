# importacao/sources/planilha/validate.py
#
# Validate and clean the DataFrame produced by parse_planilha.
#
# Design decisions:
#   - A row without gestor or agencia cannot be placed in any portfolio, so it
#     is dropped. Blank strings count as missing.
#   - Everything else is defaulted rather than rejected: text columns become "",
#     renda/investimentos 0.0, idade 0. The classifier is total, so defaulted
#     rows still classify deterministically.
#
# Invariants:
#   - gestor and agencia are non-empty in every surviving row.
#   - No column holds nulls after this step.
from __future__ import annotations

import polars as pl

from importacao.sources.planilha.parse import COLUNA_IDADE, COLUNAS_DECIMAIS, COLUNAS_TEXTO


def validate_planilha(df: pl.DataFrame) -> pl.DataFrame:
    """Validate and clean a spreadsheet DataFrame from parse_planilha.

    Steps applied:
        1. Drop rows where gestor or agencia is null or blank.
        2. Fill remaining nulls with defaults.

    Returns:
        Cleaned DataFrame, possibly empty.
    """
    if df.is_empty():
        return df

    df = df.filter(
        pl.col("gestor").is_not_null()
        & (pl.col("gestor").str.strip_chars() != "")
        & pl.col("agencia").is_not_null()
        & (pl.col("agencia").str.strip_chars() != "")
    )

    return df.with_columns(
        *[pl.col(c).fill_null("") for c in COLUNAS_TEXTO],
        *[pl.col(c).fill_null(0.0).fill_nan(0.0) for c in COLUNAS_DECIMAIS],
        pl.col(COLUNA_IDADE).fill_null(0),
    )
