from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from escola_futebol.auth import get_current_active_user
from escola_futebol.database import get_db
from escola_futebol.models.aluno import Aluno
from escola_futebol.models.pagamento import Pagamento
from escola_futebol.models.professor import Professor
from escola_futebol.models.turma import Turma
from escola_futebol.schemas.dashboard import DashboardMetrics

router = APIRouter(
    tags=["Dashboard"],
    dependencies=[Depends(get_current_active_user)],
)


@router.get("/metrics", response_model=DashboardMetrics)
def get_metrics(db: Session = Depends(get_db)):
    """
    Totais ativos e a receita do mês corrente (pelo mês de referência).
    """
    mes_atual = date.today().strftime("%Y-%m")
    receita = db.query(func.sum(Pagamento.valor)).filter(Pagamento.mes_referencia == mes_atual).scalar()

    return {
        "total_alunos": db.query(Aluno).filter(Aluno.ativo == True).count(),
        "total_professores": db.query(Professor).filter(Professor.ativo == True).count(),
        "total_turmas": db.query(Turma).filter(Turma.ativo == True).count(),
        "receita_mensal": round(float(receita or 0), 2),
    }
