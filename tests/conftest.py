# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import pytest

from api.application.services.realocacao_service import RealocacaoService
from api.domain.carteira.entities import Associado, Gestor
from api.domain.segmentacao.enums import Subsegmento, segmento_de
from api.infrastructure.estado import EstadoAplicacao

AGORA = datetime(2025, 3, 10, 14, 30)

NovoGestor = Callable[..., Gestor]
NovosAssociados = Callable[..., list[Associado]]


@pytest.fixture
def novo_gestor() -> NovoGestor:
    def _novo(
        gestor_id: str,
        nome: str | None = None,
        agencia: str = "Centro",
        subsegmento: Subsegmento = Subsegmento.PF_I,
        limite_ideal: int = 10,
    ) -> Gestor:
        return Gestor(
            id=gestor_id,
            nome=nome or gestor_id.upper(),
            agencia=agencia,
            segmento=segmento_de(subsegmento),
            subsegmento=subsegmento,
            limite_ideal=limite_ideal,
        )

    return _novo


@pytest.fixture
def novos_associados() -> NovosAssociados:
    def _novos(
        gestor: Gestor,
        quantidade: int,
        subsegmento: Subsegmento | None = None,
        prefixo: str | None = None,
    ) -> list[Associado]:
        sub = subsegmento or gestor.subsegmento
        base = prefixo or f"{gestor.id}-{sub.value.replace(' ', '')}"
        return [
            Associado(
                id=f"{base}-{i:03d}",
                nome=f"Associado {base} {i}",
                conta=f"{i:05d}",
                segmento=segmento_de(sub),
                subsegmento=sub,
                gestor_id=gestor.id,
                agencia=gestor.agencia,
            )
            for i in range(1, quantidade + 1)
        ]

    return _novos


@pytest.fixture
def estado(novo_gestor: NovoGestor, novos_associados: NovosAssociados) -> EstadoAplicacao:
    """Agencia Centro: A com 10 PF I, B com 2 PF I. Agencia Norte: C com 1 E1."""
    a = novo_gestor("a")
    b = novo_gestor("b")
    c = novo_gestor("c", agencia="Norte", subsegmento=Subsegmento.E1, limite_ideal=500)
    estado = EstadoAplicacao()
    estado.carteiras.substituir(
        [a, b, c],
        novos_associados(a, 10) + novos_associados(b, 2) + novos_associados(c, 1),
    )
    return estado


@pytest.fixture
def servico(estado: EstadoAplicacao) -> RealocacaoService:
    return RealocacaoService(
        carteira_repo=estado.carteiras,
        movimentacao_repo=estado.movimentacoes,
        dimensionamento_repo=estado.dimensionamento,
        trava=estado.trava,
        ao_alterar=estado.notificar,
        relogio=lambda: AGORA,
    )
