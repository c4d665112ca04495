# -*- coding: utf-8 -*-
"""
Rotas FastAPI dos relatórios e das exportações em CSV.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from escola_futebol import relatorios
from escola_futebol.auth import get_current_active_user
from escola_futebol.database import get_db
from escola_futebol.models.aluno import Aluno
from escola_futebol.models.pagamento import Pagamento
from escola_futebol.models.professor import Professor
from escola_futebol.models.turma import Turma
from escola_futebol.servicos import presencas_detalhadas

router = APIRouter(
    tags=["Relatórios"],
    dependencies=[Depends(get_current_active_user)],
)


def _linhas(db: Session, *colunas):
    return [dict(linha._mapping) for linha in db.query(*colunas).all()]


def _pagamentos(db: Session):
    return _linhas(
        db,
        Pagamento.aluno_id,
        Pagamento.valor,
        Pagamento.mes_referencia,
        Pagamento.data_pagamento,
        Pagamento.forma_pagamento,
    )


def _gerar_geral(db: Session, periodo: str) -> dict:
    inicio, fim = relatorios.periodo_intervalo(periodo)
    return relatorios.relatorio_geral(
        alunos=_linhas(db, Aluno.id, Aluno.ativo, Aluno.data_nascimento),
        professores=_linhas(db, Professor.id, Professor.ativo),
        turmas=_linhas(db, Turma.id, Turma.ativo),
        pagamentos=_pagamentos(db),
        inicio=inicio,
        fim=fim,
    )


def _gerar_financeiro(db: Session, periodo: str) -> dict:
    inicio, fim = relatorios.periodo_intervalo(periodo)
    return relatorios.relatorio_financeiro(_pagamentos(db), inicio, fim)


def _csv(conteudo: str, nome: str) -> Response:
    nome_arquivo = f"{nome}_{date.today().isoformat()}.csv"
    return Response(
        content=conteudo,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{nome_arquivo}"'},
    )


@router.get("/geral", response_model=dict)
def relatorio_geral(periodo: str = "current-month", db: Session = Depends(get_db)):
    return _gerar_geral(db, periodo)


@router.get("/geral.csv")
def relatorio_geral_csv(periodo: str = "current-month", db: Session = Depends(get_db)):
    return _csv(relatorios.csv_geral(_gerar_geral(db, periodo)), "relatorio_geral")


@router.get("/financeiro", response_model=dict)
def relatorio_financeiro(periodo: str = "current-month", db: Session = Depends(get_db)):
    return _gerar_financeiro(db, periodo)


@router.get("/financeiro.csv")
def relatorio_financeiro_csv(periodo: str = "current-month", db: Session = Depends(get_db)):
    return _csv(relatorios.csv_financeiro(_gerar_financeiro(db, periodo)), "relatorio_financeiro")


@router.get("/presencas", response_model=dict)
def relatorio_presencas(
    busca: Optional[str] = None,
    turma_id: Optional[int] = None,
    status_presenca: Optional[str] = Query(None, alias="status"),
    data_inicio: Optional[date] = None,
    data_fim: Optional[date] = None,
    db: Session = Depends(get_db)
):
    """
    Estatísticas sobre todas as presenças e a lista filtrada.
    """
    filtradas = presencas_detalhadas(
        db, busca=busca, turma_id=turma_id, status=status_presenca,
        data_inicio=data_inicio, data_fim=data_fim,
    )
    return {
        "estatisticas": relatorios.estatisticas_presenca(presencas_detalhadas(db)),
        "presencas": filtradas,
    }


@router.get("/presencas.csv")
def relatorio_presencas_csv(
    busca: Optional[str] = None,
    turma_id: Optional[int] = None,
    status_presenca: Optional[str] = Query(None, alias="status"),
    data_inicio: Optional[date] = None,
    data_fim: Optional[date] = None,
    db: Session = Depends(get_db)
):
    filtradas = presencas_detalhadas(
        db, busca=busca, turma_id=turma_id, status=status_presenca,
        data_inicio=data_inicio, data_fim=data_fim,
    )
    return _csv(relatorios.csv_presencas(filtradas), "relatorio_presencas")
