# tests/importacao/test_orchestrator.py
#
# Smoke tests for the import orchestrator (main.py).
#
# Strategy: run run_importacao on the CSV fixture with an output path under
# tmp_path, then load the document through the API's reader. This exercises
# parse -> validate -> classify -> build -> write and the document contract.
from __future__ import annotations

import json
from pathlib import Path

import pytest

from api.infrastructure.persistencia_json import ler_documento
from importacao.config import ImportacaoConfig, load_config
from importacao.main import run_importacao
from importacao.output.build_estado import build_estado
from importacao.sources.planilha.parse import ImportacaoError
from importacao.transform.carteiras import Carteiras

FIXTURES = Path(__file__).parent.parent / "fixtures"


def _config(tmp_path: Path, tamanho_lote: int = 2) -> ImportacaoConfig:
    return ImportacaoConfig(
        data_dir=tmp_path,
        output_path=tmp_path / "output" / "carteiras.json",
        tamanho_lote=tamanho_lote,
    )


def test_run_importacao_gera_documento_legivel_pela_api(tmp_path: Path):
    output = run_importacao(_config(tmp_path), FIXTURES / "sample_planilha.csv")

    assert output == tmp_path / "output" / "carteiras.json"
    documento = ler_documento(output)
    assert len(documento.gestores) == 3
    assert len(documento.associados) == 5
    assert {a.nome for a in documento.agencias} == {"Centro", "Norte"}
    assert documento.movimentacoes == []
    assert documento.dimensionamento is None


def test_run_importacao_loga_passos(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    run_importacao(_config(tmp_path), FIXTURES / "sample_planilha.csv")
    saida = capsys.readouterr().out
    assert "[importacao " in saida
    assert "2 linhas sem gestor ou agencia descartadas" in saida
    assert "5/5 classificados" in saida


def test_run_importacao_sem_linhas_validas(tmp_path: Path):
    planilha = tmp_path / "vazia.csv"
    planilha.write_text("gestor;agencia;renda\n;;100\n", encoding="utf-8")
    config = _config(tmp_path)

    with pytest.raises(ImportacaoError, match="Nenhuma linha valida"):
        run_importacao(config, planilha)
    assert not config.output_path.exists()


def test_run_importacao_planilha_inexistente(tmp_path: Path):
    with pytest.raises(ImportacaoError):
        run_importacao(_config(tmp_path), tmp_path / "nao-existe.xlsx")


def test_falha_na_escrita_preserva_documento_anterior(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    output = tmp_path / "carteiras.json"
    output.write_text('{"gestores": []}', encoding="utf-8")

    def _falha(*args, **kwargs):
        raise OSError("disco cheio")

    monkeypatch.setattr("importacao.output.build_estado.os.replace", _falha)
    with pytest.raises(OSError):
        build_estado(Carteiras(gestores=(), associados=(), agencias=()), output)

    assert json.loads(output.read_text(encoding="utf-8")) == {"gestores": []}
    assert not (tmp_path / "carteiras.json.tmp").exists()


def test_load_config_le_variaveis(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("IMPORTACAO_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("IMPORTACAO_TAMANHO_LOTE", "10")
    monkeypatch.delenv("IMPORTACAO_OUTPUT_PATH", raising=False)

    config = load_config()

    assert config.tamanho_lote == 10
    assert config.output_path == tmp_path / "output" / "carteiras.json"


def test_load_config_rejeita_lote_invalido(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("IMPORTACAO_TAMANHO_LOTE", "0")
    with pytest.raises(ValueError):
        load_config()
