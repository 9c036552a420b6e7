# tests/domain/test_movimentacao_repo.py
from datetime import datetime

from api.domain.movimentacao.entities import Movimentacao
from api.infrastructure.repositories.memory_movimentacao_repo import MemoryMovimentacaoRepo


def _mov(mov_id: str) -> Movimentacao:
    return Movimentacao(
        id=mov_id,
        associado_id=f"assoc-{mov_id}",
        associado_nome="Fulano",
        gestor_antigo_id="a",
        gestor_antigo_nome="A",
        gestor_novo_id="b",
        gestor_novo_nome="B",
        agencia_antiga="Centro",
        agencia_nova="Centro",
        data=datetime(2025, 1, 1),
    )


def test_registrar_insere_na_frente():
    repo = MemoryMovimentacaoRepo()
    repo.registrar(_mov("1"))
    repo.registrar(_mov("2"))
    assert [m.id for m in repo.listar()] == ["2", "1"]


def test_registrar_lote_mantem_ordem_do_lote_na_frente():
    repo = MemoryMovimentacaoRepo([_mov("antigo")])
    repo.registrar_lote([_mov("x"), _mov("y")])
    assert [m.id for m in repo.listar()] == ["x", "y", "antigo"]
    assert len(repo) == 3


def test_listar_devolve_snapshot_imutavel():
    repo = MemoryMovimentacaoRepo()
    snapshot = repo.listar()
    repo.registrar(_mov("1"))
    assert snapshot == ()
    assert len(repo.listar()) == 1
