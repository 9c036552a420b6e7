from pydantic import BaseModel


class AnaliseGestorDTO(BaseModel):
    gestor_id: str
    nome: str
    agencia: str
    segmento: str
    subsegmento: str
    associados_atuais: int
    limite_ideal: int
    percentual_ocupacao: float
    status: str
    ganhos_periodo: int
    perdas_periodo: int


class AnaliseSegmentoDTO(BaseModel):
    segmento: str
    gestores: int
    associados: int
    capacidade_total: int
    ocupacao_atual: int
    disponivel: int
    percentual: float


class ResumoCooperativaDTO(BaseModel):
    total_associados: int
    total_gestores: int
    total_agencias: int
    carteiras_problema: int
