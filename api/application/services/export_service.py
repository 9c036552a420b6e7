# api/application/services/export_service.py
from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

import polars as pl

from api.domain.carteira.entities import Associado, Gestor
from api.domain.movimentacao.entities import Movimentacao

from ..dtos.analise_dto import AnaliseSegmentoDTO
from .analise_service import carteiras_sobrecarregadas, percentual_ocupacao

Registro = dict[str, Any]


class ExportService:
    """Monta tabelas planas (lista ordenada de registros) e serializa em CSV ou JSON.

    Cabecalhos iguais aos das planilhas exportadas pelo painel.
    """

    def gestores(self, gestores: Sequence[Gestor]) -> list[Registro]:
        return [
            {
                "Nome": g.nome,
                "Agencia": g.agencia,
                "Segmento": g.segmento.value,
                "Subsegmento": g.subsegmento.value,
                "AssociadosAtuais": g.associados_atuais,
                "LimiteIdeal": g.limite_ideal,
                "PercentualOcupacao": _percentual(percentual_ocupacao(g)),
            }
            for g in gestores
        ]

    def associados(self, associados: Sequence[Associado], gestores: Sequence[Gestor]) -> list[Registro]:
        nomes = {g.id: g.nome for g in gestores}
        return [
            {
                "Agencia": a.agencia,
                "Associado": a.nome,
                "Conta": a.conta,
                "Gestor": nomes.get(a.gestor_id, ""),
                "Carteira": a.carteira,
                "Segmento": a.segmento.value,
                "Subsegmento": a.subsegmento.value,
                "Renda": a.renda,
                "Investimentos": a.investimentos,
                "Idade": a.idade,
            }
            for a in associados
        ]

    def movimentacoes(self, movimentacoes: Sequence[Movimentacao]) -> list[Registro]:
        return [
            {
                "Data": m.data.strftime("%d/%m/%Y %H:%M"),
                "Associado": m.associado_nome,
                "GestorAntigo": m.gestor_antigo_nome,
                "GestorNovo": m.gestor_novo_nome,
                "AgenciaAntiga": m.agencia_antiga,
                "AgenciaNova": m.agencia_nova,
                "Motivo": m.motivo or "-",
            }
            for m in movimentacoes
        ]

    def segmentos(self, analise: Sequence[AnaliseSegmentoDTO]) -> list[Registro]:
        return [
            {
                "Segmento": s.segmento,
                "Gestores": s.gestores,
                "Associados": s.associados,
                "CapacidadeTotal": s.capacidade_total,
                "OcupacaoAtual": s.ocupacao_atual,
                "Disponivel": s.disponivel,
                "PercentualOcupacao": _percentual(s.percentual),
            }
            for s in analise
        ]

    def sobrecarregadas(self, gestores: Sequence[Gestor]) -> list[Registro]:
        return [
            {
                "Gestor": g.nome,
                "Agencia": g.agencia,
                "Segmento": g.segmento.value,
                "Subsegmento": g.subsegmento.value,
                "AssociadosAtuais": g.associados_atuais,
                "LimiteIdeal": g.limite_ideal,
                "Excedente": g.associados_atuais - g.limite_ideal,
                "PercentualOcupacao": _percentual(percentual_ocupacao(g)),
            }
            for g in carteiras_sobrecarregadas(gestores)
        ]

    def exportar_json(self, registros: list[Registro]) -> str:
        return json.dumps(registros, ensure_ascii=False, indent=2)

    def exportar_csv(self, registros: list[Registro]) -> str:
        """Tabela vazia vira string vazia (sem cabecalho)."""
        if not registros:
            return ""
        return pl.DataFrame(registros).write_csv()


def _percentual(valor: float) -> str:
    return f"{valor:.1f}%"
