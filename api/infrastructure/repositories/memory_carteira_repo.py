# api/infrastructure/repositories/memory_carteira_repo.py
from __future__ import annotations

import dataclasses
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass

from api.domain.carteira.entities import Agencia, Associado, Gestor, id_agencia
from api.domain.carteira.errors import GestorDesconhecido


@dataclass(frozen=True)
class _Conteudo:
    gestores: dict[str, Gestor]
    associados: dict[str, Associado]
    agencias: dict[str, Agencia]


class MemoryCarteiraRepo:
    """Store em memoria de gestores, associados e agencias.

    Invariantes mantidas por toda mutacao:
      - gestor.associados_atuais == quantidade de associados com gestor_id == gestor.id
      - associado.agencia == agencia do gestor dono
      - agencias recalculadas a partir dos gestores

    Toda mutacao monta um _Conteudo novo e o publica com uma unica atribuicao;
    o conteudo publicado nunca e alterado. Um leitor sem trava ve o estado de
    antes ou o de depois, nunca um intermediario.

    Serializacao de escrita e responsabilidade de quem chama (ver EstadoAplicacao).
    """

    def __init__(self) -> None:
        self._conteudo = _Conteudo(gestores={}, associados={}, agencias={})

    # ---- leitura ----

    def listar_gestores(self) -> tuple[Gestor, ...]:
        return tuple(self._conteudo.gestores.values())

    def buscar_gestor(self, gestor_id: str) -> Gestor | None:
        return self._conteudo.gestores.get(gestor_id)

    def listar_associados(self, gestor_id: str | None = None) -> tuple[Associado, ...]:
        associados = self._conteudo.associados.values()
        if gestor_id is None:
            return tuple(associados)
        return tuple(a for a in associados if a.gestor_id == gestor_id)

    def buscar_associado(self, associado_id: str) -> Associado | None:
        return self._conteudo.associados.get(associado_id)

    def listar_agencias(self) -> tuple[Agencia, ...]:
        return tuple(self._conteudo.agencias.values())

    def buscar_agencia(self, agencia_id: str) -> Agencia | None:
        return self._conteudo.agencias.get(agencia_id)

    # ---- mutacao ----

    def substituir(self, gestores: Iterable[Gestor], associados: Iterable[Associado]) -> None:
        """Troca o conteudo inteiro do store (carga de importacao).

        Raises:
            ValueError: se algum associado referenciar gestor inexistente. O
                store anterior e mantido.
        """
        novos_gestores = {g.id: g for g in gestores}
        novos_associados: dict[str, Associado] = {}
        for associado in associados:
            gestor = novos_gestores.get(associado.gestor_id)
            if gestor is None:
                raise ValueError(f"Associado {associado.id} referencia gestor inexistente {associado.gestor_id}")
            if associado.agencia != gestor.agencia:
                associado = dataclasses.replace(associado, agencia=gestor.agencia)
            novos_associados[associado.id] = associado

        self._conteudo = _recalcular(novos_gestores, novos_associados)

    def transferir(self, associado_ids: Iterable[str], destino: Gestor) -> None:
        """Move os associados encontrados para `destino`. Ids desconhecidos sao ignorados."""
        self.transferir_lotes([(associado_ids, destino)])

    def transferir_lotes(self, lotes: Iterable[tuple[Iterable[str], Gestor]]) -> None:
        """Aplica varias transferencias de uma vez, publicadas numa unica troca.

        Raises:
            GestorDesconhecido: algum destino fora do store. Nada e alterado.
        """
        atual = self._conteudo
        associados = dict(atual.associados)
        for associado_ids, destino in lotes:
            if destino.id not in atual.gestores:
                raise GestorDesconhecido(destino.id)
            for associado_id in associado_ids:
                associado = associados.get(associado_id)
                if associado is None:
                    continue
                associados[associado_id] = dataclasses.replace(
                    associado, gestor_id=destino.id, agencia=destino.agencia
                )
        self._conteudo = _recalcular(atual.gestores, associados)


def _recalcular(gestores: dict[str, Gestor], associados: dict[str, Associado]) -> _Conteudo:
    """Passe completo: contagem de todos os gestores e reconstrucao das agencias."""
    contagem = Counter(a.gestor_id for a in associados.values())
    recontados = {
        gid: (g if g.associados_atuais == contagem[gid] else dataclasses.replace(g, associados_atuais=contagem[gid]))
        for gid, g in gestores.items()
    }

    por_agencia: dict[str, list[Gestor]] = {}
    for gestor in recontados.values():
        por_agencia.setdefault(gestor.agencia, []).append(gestor)
    agencias = {
        id_agencia(nome): Agencia(id=id_agencia(nome), nome=nome, gestores=tuple(lista))
        for nome, lista in por_agencia.items()
    }
    return _Conteudo(gestores=recontados, associados=associados, agencias=agencias)
