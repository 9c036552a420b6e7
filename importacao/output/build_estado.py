# importacao/output/build_estado.py
#
# Write the import document consumed by POST /api/importacao.
#
# Design decisions:
#   - Atomicity: the document is written to <name>.tmp first and only renamed
#     over output_path once fully written. On any failure the tmp file is
#     deleted and the previous output (if any) stays untouched.
#   - Plain json from the stdlib: the adapter does not depend on the API's
#     pydantic models. Field names match them one to one (snake_case) and
#     the reader tolerates missing keys.
#   - movimentacoes is written empty; dimensionamento is omitted so the API
#     keeps its current table on load.
from __future__ import annotations

import dataclasses
import json
import os
from pathlib import Path
from typing import Any

from api.domain.carteira.entities import Agencia

from importacao.transform.carteiras import Carteiras


def build_estado(carteiras: Carteiras, output_path: Path) -> Path:
    """Serialize carteiras to output_path atomically.

    Returns:
        output_path after the rename.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = output_path.with_suffix(output_path.suffix + ".tmp")
    if tmp_path.exists():
        tmp_path.unlink()

    try:
        documento = {
            "gestores": [dataclasses.asdict(g) for g in carteiras.gestores],
            "associados": [dataclasses.asdict(a) for a in carteiras.associados],
            "agencias": [_agencia(a) for a in carteiras.agencias],
            "movimentacoes": [],
        }
        tmp_path.write_text(json.dumps(documento, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp_path, output_path)
    except Exception:
        if tmp_path.exists():
            tmp_path.unlink()
        raise
    return output_path


def _agencia(agencia: Agencia) -> dict[str, Any]:
    return {
        "id": agencia.id,
        "nome": agencia.nome,
        "gestores": [dataclasses.asdict(g) for g in agencia.gestores],
        "total_associados": agencia.total_associados,
        "segmentos": {s.value: n for s, n in agencia.segmentos.items()},
    }
