# tests/domain/test_realocacao_service.py
import pytest

from api.application.services.realocacao_service import MOTIVO_MATRIZ, RealocacaoService
from api.domain.carteira.errors import (
    AgenciaDesconhecida,
    AssociadosInsuficientes,
    GestorDesconhecido,
    RealocacaoDesbalanceada,
)
from api.domain.movimentacao.entities import GESTOR_DESCONHECIDO
from api.domain.realocacao.services import MovimentoPlanejado
from api.domain.segmentacao.enums import Subsegmento
from api.infrastructure.estado import EstadoAplicacao

PF_I = Subsegmento.PF_I


def _contagens(estado: EstadoAplicacao) -> dict[str, int]:
    return {g.id: g.associados_atuais for g in estado.carteiras.listar_gestores()}


def _gestor_de(estado: EstadoAplicacao) -> dict[str, str]:
    return {a.id: a.gestor_id for a in estado.carteiras.listar_associados()}


# ---------- realocar ----------


def test_realocar_move_e_registra(estado: EstadoAplicacao, servico: RealocacaoService):
    movs = servico.realocar(["a-PFI-001", "a-PFI-002"], "c", motivo="Ajuste")

    assert _contagens(estado) == {"a": 8, "b": 2, "c": 3}
    assert len(movs) == 2
    mov = movs[0]
    assert (mov.gestor_antigo_id, mov.gestor_antigo_nome) == ("a", "A")
    assert (mov.gestor_novo_id, mov.gestor_novo_nome) == ("c", "C")
    assert (mov.agencia_antiga, mov.agencia_nova) == ("Centro", "Norte")
    assert mov.motivo == "Ajuste"
    assert estado.movimentacoes.listar() == tuple(movs)
    assert len({m.data for m in movs}) == 1


def test_realocar_ignora_ids_desconhecidos_e_repetidos(estado: EstadoAplicacao, servico: RealocacaoService):
    movs = servico.realocar(["a-PFI-001", "nao-existe", "a-PFI-001"], "b")

    assert [m.associado_id for m in movs] == ["a-PFI-001"]
    assert _contagens(estado) == {"a": 9, "b": 3, "c": 1}
    assert len(estado.movimentacoes.listar()) == 1


def test_realocar_para_o_mesmo_gestor_ainda_registra(estado: EstadoAplicacao, servico: RealocacaoService):
    movs = servico.realocar(["b-PFI-001"], "b")
    assert len(movs) == 1
    assert movs[0].gestor_antigo_id == movs[0].gestor_novo_id == "b"
    assert _contagens(estado) == {"a": 10, "b": 2, "c": 1}


def test_realocar_destino_desconhecido_nao_altera_nada(estado: EstadoAplicacao, servico: RealocacaoService):
    antes = _gestor_de(estado)
    with pytest.raises(GestorDesconhecido):
        servico.realocar(["a-PFI-001"], "zzz")
    assert _gestor_de(estado) == antes
    assert estado.movimentacoes.listar() == ()


def test_lotes_sucessivos_entram_na_frente(estado: EstadoAplicacao, servico: RealocacaoService):
    primeiro = servico.realocar(["a-PFI-001"], "b")
    segundo = servico.realocar(["a-PFI-002", "a-PFI-003"], "b")
    assert estado.movimentacoes.listar() == (*segundo, *primeiro)


def test_invariante_de_contagem_apos_varias_realocacoes(estado: EstadoAplicacao, servico: RealocacaoService):
    servico.realocar(["a-PFI-001", "a-PFI-002"], "b")
    servico.realocar(["b-PFI-001", "c-E1-001"], "a")
    servico.realocar(["a-PFI-003"], "c")

    por_gestor: dict[str, int] = {}
    for associado in estado.carteiras.listar_associados():
        por_gestor[associado.gestor_id] = por_gestor.get(associado.gestor_id, 0) + 1
        assert associado.agencia == estado.carteiras.buscar_gestor(associado.gestor_id).agencia
    assert _contagens(estado) == {g: por_gestor.get(g, 0) for g in ("a", "b", "c")}


def test_nome_do_gestor_antigo_desconhecido(estado: EstadoAplicacao):
    # Repo em que o gestor de origem nao resolve.
    class _SemGestorA:
        def __init__(self, repo):
            self._repo = repo

        def __getattr__(self, nome):
            return getattr(self._repo, nome)

        def buscar_gestor(self, gestor_id):
            return None if gestor_id == "a" else self._repo.buscar_gestor(gestor_id)

    servico_parcial = RealocacaoService(
        carteira_repo=_SemGestorA(estado.carteiras),
        movimentacao_repo=estado.movimentacoes,
        dimensionamento_repo=estado.dimensionamento,
        trava=estado.trava,
    )
    [mov] = servico_parcial.realocar(["a-PFI-001"], "b")
    assert mov.gestor_antigo_nome == GESTOR_DESCONHECIDO


# ---------- reconciliar_matriz ----------


def test_reconciliar_cenario_a_b(estado: EstadoAplicacao, servico: RealocacaoService):
    movimentos = servico.reconciliar_matriz("agencia-Centro", {"a": {PF_I: 7}, "b": {PF_I: 5}})

    assert movimentos == [MovimentoPlanejado("a", "b", PF_I, 3)]
    assert _contagens(estado) == {"a": 7, "b": 5, "c": 1}
    ledger = estado.movimentacoes.listar()
    assert len(ledger) == 3
    assert all(m.motivo == MOTIVO_MATRIZ for m in ledger)
    assert [m.associado_id for m in ledger] == ["a-PFI-001", "a-PFI-002", "a-PFI-003"]


def test_reconciliar_matriz_igual_nao_faz_nada(estado: EstadoAplicacao, servico: RealocacaoService):
    matriz = servico.montar_matriz("agencia-Centro")
    assert servico.reconciliar_matriz("agencia-Centro", matriz.contagens) == []
    assert estado.movimentacoes.listar() == ()


def test_reconciliar_ida_e_volta_restaura_contagens(estado: EstadoAplicacao, servico: RealocacaoService):
    original = servico.montar_matriz("agencia-Centro").contagens
    servico.reconciliar_matriz("agencia-Centro", {"a": {PF_I: 4}, "b": {PF_I: 8}})
    servico.reconciliar_matriz("agencia-Centro", original)

    assert servico.montar_matriz("agencia-Centro").contagens == original
    assert len(estado.movimentacoes.listar()) == 12


def test_reconciliar_aceita_chaves_em_texto(estado: EstadoAplicacao, servico: RealocacaoService):
    servico.reconciliar_matriz("agencia-Centro", {"a": {"PF I": 9}, "b": {"PF I": 3}})
    assert _contagens(estado)["b"] == 3


def test_reconciliar_desbalanceado_nao_altera_nada(estado: EstadoAplicacao, servico: RealocacaoService):
    antes = _gestor_de(estado)
    with pytest.raises(RealocacaoDesbalanceada) as exc:
        servico.reconciliar_matriz("agencia-Centro", {"a": {PF_I: 5}, "b": {PF_I: 4}})
    assert exc.value.sobra == 3
    assert _gestor_de(estado) == antes
    assert estado.movimentacoes.listar() == ()


def test_reconciliar_com_original_defasado_e_atomico(estado: EstadoAplicacao, servico: RealocacaoService):
    # Tela editada a partir de um snapshot em que B tinha 6; hoje B tem 2.
    original = {"a": {PF_I: 6}, "b": {PF_I: 6}}
    desejado = {"a": {PF_I: 12}, "b": {PF_I: 0}}
    antes = _gestor_de(estado)

    with pytest.raises(AssociadosInsuficientes) as exc:
        servico.reconciliar_matriz("agencia-Centro", desejado, original)

    assert exc.value.gestor_id == "b"
    assert exc.value.faltantes == 4
    assert _gestor_de(estado) == antes
    assert _contagens(estado) == {"a": 10, "b": 2, "c": 1}
    assert estado.movimentacoes.listar() == ()


def test_reconciliar_agencia_desconhecida(servico: RealocacaoService):
    with pytest.raises(AgenciaDesconhecida):
        servico.reconciliar_matriz("agencia-Sul", {})


def test_reconciliar_gestor_fora_da_agencia(servico: RealocacaoService):
    with pytest.raises(GestorDesconhecido):
        servico.reconciliar_matriz("agencia-Centro", {"c": {Subsegmento.E1: 0}})


def test_reconciliar_valor_negativo(servico: RealocacaoService):
    with pytest.raises(ValueError):
        servico.reconciliar_matriz("agencia-Centro", {"a": {PF_I: -1}})


def test_previsualizar_nao_altera_estado(estado: EstadoAplicacao, servico: RealocacaoService):
    plano = servico.previsualizar_matriz("agencia-Centro", {"a": {PF_I: 5}, "b": {PF_I: 4}})

    assert plano.movimentos == (MovimentoPlanejado("a", "b", PF_I, 2),)
    assert plano.desbalanceados == {PF_I: 3}
    assert _contagens(estado) == {"a": 10, "b": 2, "c": 1}


def test_mutacoes_notificam_observadores(estado: EstadoAplicacao, servico: RealocacaoService):
    chamadas: list[int] = []
    estado.inscrever(lambda e: chamadas.append(len(e.movimentacoes)))

    servico.realocar(["a-PFI-001"], "b")
    servico.reconciliar_matriz("agencia-Centro", {"a": {PF_I: 8}, "b": {PF_I: 4}})
    servico.realocar(["nao-existe"], "b")

    assert chamadas == [1, 2]


def test_reconciliar_publica_store_e_historico_de_uma_vez(novo_gestor, novos_associados, monkeypatch):
    a, b, d = novo_gestor("a"), novo_gestor("b"), novo_gestor("d")
    estado = EstadoAplicacao()
    estado.carteiras.substituir([a, b, d], novos_associados(a, 10))
    servico = RealocacaoService(
        carteira_repo=estado.carteiras,
        movimentacao_repo=estado.movimentacoes,
        dimensionamento_repo=estado.dimensionamento,
        trava=estado.trava,
    )

    vistos: list[dict[str, int]] = []
    transferir_lotes = estado.carteiras.transferir_lotes
    registrar_lote = estado.movimentacoes.registrar_lote

    def _transferir_lotes(lotes):
        vistos.append(_contagens(estado))
        transferir_lotes(lotes)
        vistos.append(_contagens(estado))

    def _registrar_lote(movimentacoes):
        vistos.append(_contagens(estado))
        registrar_lote(movimentacoes)

    def _transferir(*_args):
        raise AssertionError("reconciliacao nao deve publicar um destino por vez")

    monkeypatch.setattr(estado.carteiras, "transferir_lotes", _transferir_lotes)
    monkeypatch.setattr(estado.carteiras, "transferir", _transferir)
    monkeypatch.setattr(estado.movimentacoes, "registrar_lote", _registrar_lote)

    servico.reconciliar_matriz("agencia-Centro", {"a": {PF_I: 4}, "b": {PF_I: 3}, "d": {PF_I: 3}})

    final = {"a": 4, "b": 3, "d": 3}
    assert vistos == [{"a": 10, "b": 0, "d": 0}, final, final]
    # Um lote por destino, o ultimo na frente.
    assert [m.associado_id for m in estado.movimentacoes.listar()] == [
        "a-PFI-004", "a-PFI-005", "a-PFI-006", "a-PFI-001", "a-PFI-002", "a-PFI-003",
    ]
