# api/domain/movimentacao/entities.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

# Nome exibido quando o gestor de origem nao existe mais no store.
GESTOR_DESCONHECIDO = "Desconhecido"


@dataclass(frozen=True)
class Movimentacao:
    """Registro de auditoria de uma transferencia. Criado uma vez, nunca editado."""
    id: str
    associado_id: str
    associado_nome: str
    gestor_antigo_id: str
    gestor_antigo_nome: str
    gestor_novo_id: str
    gestor_novo_nome: str
    agencia_antiga: str
    agencia_nova: str
    data: datetime
    motivo: str | None = None


def em_utc(data: datetime) -> datetime:
    """Data sem fuso e tratada como UTC; com fuso e convertida para UTC."""
    if data.tzinfo is None:
        return data.replace(tzinfo=UTC)
    return data.astimezone(UTC)


def agora_utc() -> datetime:
    return datetime.now(UTC)
