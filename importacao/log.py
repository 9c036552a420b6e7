# importacao/log.py
#
# Step logger for the import adapter: "[importacao mm:ss] mensagem" on stdout.
#
# The clock starts at module import and is restarted by run_importacao, so a
# process that runs several imports (tests, the API host) gets per-run times.
from __future__ import annotations

import sys
import time

_inicio = time.monotonic()


def reiniciar_relogio() -> None:
    global _inicio  # noqa: PLW0603
    _inicio = time.monotonic()


def log(mensagem: str) -> None:
    decorrido = time.monotonic() - _inicio
    minutos, segundos = divmod(int(decorrido), 60)
    sys.stdout.write(f"[importacao {minutos:02d}:{segundos:02d}] {mensagem}\n")
    sys.stdout.flush()
