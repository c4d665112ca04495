from pydantic import BaseModel


class DashboardMetrics(BaseModel):
    total_alunos: int
    total_professores: int
    total_turmas: int
    receita_mensal: float
