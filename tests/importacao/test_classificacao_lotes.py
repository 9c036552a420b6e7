# tests/importacao/test_classificacao_lotes.py
from pathlib import Path

import polars as pl

from api.domain.segmentacao.dimensionamento import DIMENSIONAMENTO_PADRAO
from api.domain.segmentacao.enums import Segmento, Subsegmento
from importacao.sources.planilha.parse import parse_planilha
from importacao.sources.planilha.validate import validate_planilha
from importacao.transform.carteiras import montar_carteiras
from importacao.transform.classificacao import classificar_em_lotes

FIXTURES = Path(__file__).parent.parent / "fixtures"


def _planilha() -> pl.DataFrame:
    return validate_planilha(parse_planilha(FIXTURES / "sample_planilha.csv"))


def _classificada(tamanho_lote: int = 2) -> pl.DataFrame:
    return pl.concat(list(classificar_em_lotes(_planilha(), tamanho_lote)))


def test_lotes_respeitam_tamanho_e_ordem():
    lotes = list(classificar_em_lotes(_planilha(), 2))

    assert [len(lote) for lote in lotes] == [2, 2, 1]
    assert pl.concat(lotes)["associado"].to_list() == _planilha()["associado"].to_list()


def test_classificacao_por_linha():
    df = _classificada()
    assert df["subsegmento_classificado"].to_list() == ["PF Melhor Idade", "PF IV", "E2", "PF VI", "Ag III"]
    assert df["segmento_classificado"].to_list() == ["PF", "PF", "PJ", "PF", "Agro"]


def test_tamanho_do_lote_nao_altera_resultado():
    assert _classificada(1).equals(_classificada(100))


def test_montar_carteiras():
    carteiras = montar_carteiras(_classificada(), DIMENSIONAMENTO_PADRAO, "2025-03-10T00:00:00")

    gestores = {g.id: g for g in carteiras.gestores}
    assert list(gestores) == ["gestor-Maria-Centro-C01", "gestor-Joao-Centro-C02", "gestor-Pedro-Norte-N01"]

    maria = gestores["gestor-Maria-Centro-C01"]
    assert (maria.segmento, maria.subsegmento) == (Segmento.PF, Subsegmento.PF_MELHOR_IDADE)
    assert (maria.associados_atuais, maria.limite_ideal) == (2, 2500)

    joao = gestores["gestor-Joao-Centro-C02"]
    # Segmento do gestor vem do primeiro associado da carteira.
    assert (joao.segmento, joao.subsegmento, joao.limite_ideal) == (Segmento.PJ, Subsegmento.E2, 400)
    assert joao.associados_atuais == 2

    assert [a.id for a in carteiras.associados] == [f"assoc-{i:06d}" for i in range(1, 6)]
    carla = carteiras.associados[3]
    assert (carla.nome, carla.subsegmento, carla.gestor_id) == ("Carla Dias", Subsegmento.PF_VI, joao.id)
    assert carla.data_vinculo == "2025-03-10T00:00:00"

    agencias = {a.nome: a for a in carteiras.agencias}
    assert agencias["Centro"].id == "agencia-Centro"
    assert agencias["Centro"].total_associados == 4
    assert agencias["Centro"].segmentos == {Segmento.AGRO: 0, Segmento.PF: 2, Segmento.PJ: 2}
    assert agencias["Norte"].segmentos[Segmento.AGRO] == 1


def test_subsegmento_sem_dimensionamento_usa_limite_100():
    carteiras = montar_carteiras(_classificada(), [], "2025-03-10T00:00:00")
    assert {g.limite_ideal for g in carteiras.gestores} == {100}
