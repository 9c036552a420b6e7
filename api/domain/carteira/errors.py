# api/domain/carteira/errors.py
from __future__ import annotations


class CarteiraError(Exception):
    """Base para erros de dominio de carteiras. Nenhum estado e alterado quando levantado."""


class GestorDesconhecido(CarteiraError):
    def __init__(self, gestor_id: str) -> None:
        super().__init__(f"Gestor nao encontrado: {gestor_id}")
        self.gestor_id = gestor_id


class AgenciaDesconhecida(CarteiraError):
    def __init__(self, agencia_id: str) -> None:
        super().__init__(f"Agencia nao encontrada: {agencia_id}")
        self.agencia_id = agencia_id


class AssociadosInsuficientes(CarteiraError):
    """Movimento planejado nao pode ser materializado: origem sem associados suficientes."""

    def __init__(self, gestor_id: str, subsegmento: str, faltantes: int) -> None:
        super().__init__(
            f"Gestor {gestor_id} nao tem associados suficientes em {subsegmento} (faltam {faltantes})"
        )
        self.gestor_id = gestor_id
        self.subsegmento = subsegmento
        self.faltantes = faltantes


class RealocacaoDesbalanceada(CarteiraError):
    """Matriz desejada nao conserva o total de associados de um subsegmento.

    sobra > 0: associados a sair sem destino. sobra < 0: vagas sem origem.
    """

    def __init__(self, subsegmento: str, sobra: int) -> None:
        super().__init__(
            f"Matriz desbalanceada em {subsegmento}: total desejado difere do atual em {-sobra:+d}"
        )
        self.subsegmento = subsegmento
        self.sobra = sobra


class DimensionamentoInvalido(CarteiraError):
    pass
