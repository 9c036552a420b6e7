# api/infrastructure/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Mesmo destino padrao do pacote importacao (importacao/data/output).
_IMPORTACAO_DIR_PADRAO = Path(__file__).resolve().parents[2] / "importacao" / "data" / "output"


@dataclass(frozen=True)
class Settings:
    """Configuracao do processo da API, lida do ambiente (.env aceito).

    ESTADO_PATH: documento JSON persistido; vazio mantem o estado so em memoria.
    IMPORTACAO_DIR: unico diretorio de onde POST /importacao le documentos.
    CORS_ORIGINS: origens separadas por virgula.
    API_DEBUG: "true" liga o modo debug do FastAPI.
    """

    estado_path: str
    importacao_dir: Path
    cors_origins: tuple[str, ...]
    debug: bool


def _lista(valor: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in valor.split(",") if item.strip())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(
        estado_path=os.environ.get("ESTADO_PATH", "").strip(),
        importacao_dir=Path(os.environ.get("IMPORTACAO_DIR", str(_IMPORTACAO_DIR_PADRAO)).strip()),
        cors_origins=_lista(os.environ.get("CORS_ORIGINS", "http://localhost:5173")),
        debug=os.environ.get("API_DEBUG", "false").strip().lower() == "true",
    )
