# importacao/sources/planilha/parse.py
#
# Parse the portfolio spreadsheet (xlsx/xls/csv) into a typed staging DataFrame.
#
# Design decisions:
#   - Excel goes through pl.read_excel (fastexcel/calamine engine); only the
#     first sheet is read. CSV accepts ";" or "," and the separator is chosen
#     from the header line.
#   - Everything is read as text first and typed here, so a column that Excel
#     stored as number in some rows and text in others never breaks the read.
#   - Headers are normalised (accents stripped, lowercase, spaces and _-./
#     removed) before alias lookup, so "Agência", "AGENCIA" and "agencia_"
#     all land on the same canonical column. First matching alias wins.
#   - Numbers accept Brazilian format ("1.234,56") and plain ("1234.56").
#     Currency symbols and spaces are stripped. Unparseable values become null
#     and are defaulted by validate_planilha.
#
# Invariants:
#   - The result always has every column of COLUNAS, whatever the input had.
#   - renda/investimentos are Float64; idade is Int64; all others are Utf8.
from __future__ import annotations

import unicodedata
from pathlib import Path

import polars as pl

COLUNAS_TEXTO = ("agencia", "carteira", "gestor", "segmento", "subsegmento", "associado", "conta")
COLUNAS_CODIGO = ("agencia", "carteira", "conta")
COLUNAS_DECIMAIS = ("renda", "investimentos")
COLUNA_IDADE = "idade"
COLUNAS = (*COLUNAS_TEXTO, *COLUNAS_DECIMAIS, COLUNA_IDADE)

# Cabecalho normalizado -> coluna canonica.
ALIASES: dict[str, tuple[str, ...]] = {
    "agencia": ("agencia", "ag", "codagencia", "numeroagencia"),
    "carteira": ("carteira", "codcarteira", "numerocarteira"),
    "gestor": ("gestor", "gerente", "nomegestor"),
    "segmento": ("segmento", "seg"),
    "subsegmento": ("subsegmento", "subseg"),
    "associado": ("associado", "nomeassociado", "nome", "cliente"),
    "conta": ("conta", "contacorrente", "numeroconta"),
    "renda": ("renda", "rendamensal"),
    "investimentos": ("investimentos", "investimento", "totalinvestimentos"),
    "idade": ("idade",),
}

EXTENSOES_EXCEL = (".xlsx", ".xls")
EXTENSOES_CSV = (".csv",)


class ImportacaoError(Exception):
    """Planilha ausente, em formato nao suportado ou sem linhas validas."""


def parse_planilha(path: Path) -> pl.DataFrame:
    """Read a spreadsheet and map its columns to the canonical import schema.

    Args:
        path: xlsx, xls or csv file.

    Returns:
        DataFrame with the columns in COLUNAS, typed.

    Raises:
        ImportacaoError: if the file does not exist or the extension is not supported.
    """
    if not path.exists():
        raise ImportacaoError(f"Planilha nao encontrada: {path}")

    sufixo = path.suffix.lower()
    if sufixo in EXTENSOES_EXCEL:
        raw = pl.read_excel(path)
    elif sufixo in EXTENSOES_CSV:
        raw = pl.read_csv(
            path,
            separator=_detectar_separador(path),
            infer_schema_length=0,
            encoding="utf8-lossy",
            truncate_ragged_lines=True,
        )
    else:
        raise ImportacaoError(f"Formato nao suportado: {path.suffix or '(sem extensao)'}")

    raw = raw.select(pl.all().cast(pl.Utf8))
    return _canonizar(raw)


def normalizar_cabecalho(nome: str) -> str:
    sem_acento = unicodedata.normalize("NFKD", nome).encode("ascii", "ignore").decode("ascii")
    return "".join(c for c in sem_acento.lower() if c not in " _-./\t")


def _detectar_separador(path: Path) -> str:
    with path.open(encoding="utf-8", errors="replace") as f:
        cabecalho = f.readline()
    return ";" if cabecalho.count(";") > cabecalho.count(",") else ","


def _canonizar(raw: pl.DataFrame) -> pl.DataFrame:
    por_nome: dict[str, str] = {}
    for coluna in raw.columns:
        por_nome.setdefault(normalizar_cabecalho(coluna), coluna)

    n = len(raw)
    colunas: list[pl.Series] = []
    for canonica in COLUNAS:
        original = next((por_nome[a] for a in ALIASES[canonica] if a in por_nome), None)
        texto = raw[original] if original is not None else pl.Series([None] * n, dtype=pl.Utf8)
        texto = texto.str.strip_chars()
        if canonica in COLUNAS_DECIMAIS:
            serie = _para_decimal(texto)
        elif canonica == COLUNA_IDADE:
            serie = _para_decimal(texto).cast(pl.Int64, strict=False)
        elif canonica in COLUNAS_CODIGO:
            # Excel guarda codigo numerico como float ("12345.0").
            serie = texto.str.replace(r"\.0$", "")
        else:
            serie = texto
        colunas.append(serie.alias(canonica))
    return pl.DataFrame(colunas)


def _para_decimal(texto: pl.Series) -> pl.Series:
    """Converte "1.234,56" e "1234.56" em 1234.56. Invalido vira null."""
    limpo = texto.str.replace_all(r"[R$\s]", "")
    brasileiro = limpo.str.contains(",")
    return (
        pl.DataFrame({"v": limpo, "br": brasileiro})
        .select(
            pl.when(pl.col("br"))
            .then(pl.col("v").str.replace_all(r"\.", "").str.replace(",", ".", literal=True))
            .otherwise(pl.col("v"))
            .cast(pl.Float64, strict=False)
            .alias("v")
        )
        .to_series()
    )
