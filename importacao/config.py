# importacao/config.py
#
# Import adapter configuration loaded from environment variables.
#
# Design decisions:
#   - Frozen dataclass (not pydantic Settings): the adapter is a standalone
#     offline process and pydantic stays in the API layer.
#   - Paths default to importacao/data relative to this file so the adapter
#     works right after a fresh checkout.
#   - tamanho_lote controls how many rows are classified per slice; it bounds
#     memory of the per-row Python classification, not of the read itself.
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

_IMPORTACAO_DIR = Path(__file__).parent


@dataclass(frozen=True)
class ImportacaoConfig:
    """Immutable import configuration.

    Invariant: tamanho_lote is a positive integer (enforced by load_config).
    """

    data_dir: Path
    output_path: Path
    tamanho_lote: int = 5000


def load_config() -> ImportacaoConfig:
    """Build ImportacaoConfig from environment variables.

    Raises:
        ValueError: if IMPORTACAO_TAMANHO_LOTE is not a positive integer.
    """
    data_dir = Path(os.environ.get("IMPORTACAO_DATA_DIR", str(_IMPORTACAO_DIR / "data")))
    output_path = Path(
        os.environ.get("IMPORTACAO_OUTPUT_PATH", str(data_dir / "output" / "carteiras.json"))
    )
    tamanho_lote = int(os.environ.get("IMPORTACAO_TAMANHO_LOTE", "5000"))
    if tamanho_lote <= 0:
        raise ValueError(f"IMPORTACAO_TAMANHO_LOTE deve ser positivo, recebido {tamanho_lote}")

    return ImportacaoConfig(data_dir=data_dir, output_path=output_path, tamanho_lote=tamanho_lote)
