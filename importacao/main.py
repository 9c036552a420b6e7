# importacao/main.py
#
# Import orchestrator: spreadsheet -> classified portfolios -> JSON document.
#
# Design decisions:
#   - run_importacao is the single entry point. It takes an ImportacaoConfig and
#     the spreadsheet path, and returns the written document path.
#   - Strict order: parse -> validate -> classify (in slices) -> build
#     entities -> write atomically. Each step logs progress to stdout.
#   - The dimensionamento used for limite_ideal is the reference table; the
#     API re-derives limits from its current table when the document is loaded.
#
# Invariant: the output document is never replaced unless every step succeeded
# and at least one valid row was found.
from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import polars as pl

from api.domain.segmentacao.dimensionamento import DIMENSIONAMENTO_PADRAO
from importacao.config import ImportacaoConfig, load_config
from importacao.log import log, reiniciar_relogio
from importacao.output.build_estado import build_estado
from importacao.sources.planilha.parse import ImportacaoError, parse_planilha
from importacao.sources.planilha.validate import validate_planilha
from importacao.transform.carteiras import montar_carteiras
from importacao.transform.classificacao import classificar_em_lotes


def run_importacao(config: ImportacaoConfig, planilha: Path) -> Path:
    """Execute the full import and write the document to config.output_path.

    Raises:
        ImportacaoError: missing file, unsupported extension, or no valid rows.
    """
    reiniciar_relogio()
    log(f"Lendo planilha {planilha}...")
    bruto = parse_planilha(planilha)
    log(f"  {len(bruto):,} linhas lidas")

    df = validate_planilha(bruto)
    descartadas = len(bruto) - len(df)
    if descartadas:
        log(f"  {descartadas:,} linhas sem gestor ou agencia descartadas")
    if df.is_empty():
        raise ImportacaoError(f"Nenhuma linha valida em {planilha}")

    log("Classificando associados...")
    lotes: list[pl.DataFrame] = []
    for lote in classificar_em_lotes(df, config.tamanho_lote):
        lotes.append(lote)
        log(f"  {sum(len(x) for x in lotes):,}/{len(df):,} classificados")
    classificado = pl.concat(lotes)

    log("Montando carteiras...")
    carteiras = montar_carteiras(classificado, DIMENSIONAMENTO_PADRAO, datetime.now().isoformat())
    log(
        f"  {len(carteiras.gestores):,} gestores, {len(carteiras.associados):,} associados, "
        f"{len(carteiras.agencias):,} agencias"
    )

    log("Gravando documento...")
    output_path = build_estado(carteiras, config.output_path)
    log(f"Concluido. Documento gravado em: {output_path}")
    return output_path


if __name__ == "__main__":
    if len(sys.argv) != 2:
        sys.stderr.write("uso: python -m importacao.main <planilha>\n")
        sys.exit(2)
    cfg = load_config()
    run_importacao(cfg, Path(sys.argv[1]))
