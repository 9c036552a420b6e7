# importacao/transform/classificacao.py
#
# Batch classification of spreadsheet rows into segmento/subsegmento.
#
# Design decisions:
#   - The rules live in api.domain.segmentacao.classificacao (pure, no IO);
#     this module only feeds rows to it. The adapter never imports application
#     or infrastructure code from the API.
#   - Rows are processed in slices (DataFrame.iter_slices) so the per-row
#     Python call runs over bounded chunks and progress can be logged.
#   - The informed segmento is passed as a hint; the informed subsegmento is
#     carried along but does not change the result.
#
# Invariant: every yielded slice keeps its input rows in order and gains the
# columns segmento_classificado and subsegmento_classificado (Utf8).
from __future__ import annotations

from collections.abc import Iterator

import polars as pl

from api.domain.segmentacao.classificacao import classificar_associado


def classificar_em_lotes(df: pl.DataFrame, tamanho_lote: int) -> Iterator[pl.DataFrame]:
    """Yield classified slices of at most tamanho_lote rows."""
    for lote in df.iter_slices(n_rows=tamanho_lote):
        segmentos: list[str] = []
        subsegmentos: list[str] = []
        for row in lote.iter_rows(named=True):
            classificacao = classificar_associado(
                row["renda"],
                row["investimentos"],
                row["idade"],
                segmento_informado=row["segmento"] or None,
                subsegmento_informado=row["subsegmento"] or None,
            )
            segmentos.append(classificacao.segmento.value)
            subsegmentos.append(classificacao.subsegmento.value)
        yield lote.with_columns(
            pl.Series("segmento_classificado", segmentos, dtype=pl.Utf8),
            pl.Series("subsegmento_classificado", subsegmentos, dtype=pl.Utf8),
        )
