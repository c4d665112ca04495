# -*- coding: utf-8 -*-
"""
Regras de negócio compartilhadas entre as rotas da administração,
o portal da unidade e a fila de sincronização.
"""
from datetime import date
from typing import Iterable, List, Optional

from dateutil.relativedelta import relativedelta
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from escola_futebol.models.aluno import Aluno
from escola_futebol.models.presenca import Presenca
from escola_futebol.models.turma import Turma


def status_pagamento(pagamentos: Iterable, hoje: Optional[date] = None) -> dict:
    """
    Situação financeira do aluno a partir do mês de referência mais recente.

    Em dia quando o último mês pago é o mês corrente (ou posterior). Os dias
    de atraso contam a partir do primeiro dia do mês seguinte ao último pago.
    """
    hoje = hoje or date.today()
    meses = [p.mes_referencia for p in pagamentos if p.mes_referencia]
    if not meses:
        return {"em_dia": False, "ultimo_pagamento": None, "dias_atraso": None}

    ultimo = max(meses)
    if ultimo >= hoje.strftime("%Y-%m"):
        return {"em_dia": True, "ultimo_pagamento": ultimo, "dias_atraso": 0}

    ano, mes = (int(parte) for parte in ultimo.split("-"))
    vencimento = date(ano, mes, 1) + relativedelta(months=1)
    return {
        "em_dia": False,
        "ultimo_pagamento": ultimo,
        "dias_atraso": max((hoje - vencimento).days, 0),
    }


def registrar_chamada(db: Session, turma_id: int, data: date, itens) -> List[Presenca]:
    """
    Substitui a chamada da turma no dia informado. Não faz commit.
    """
    db.query(Presenca).filter(
        Presenca.turma_id == turma_id,
        Presenca.data == data,
    ).delete(synchronize_session="fetch")

    registros = []
    for item in itens:
        registro = Presenca(
            aluno_id=item.aluno_id,
            turma_id=turma_id,
            data=data,
            presente=item.presente,
            observacoes=item.observacoes,
        )
        db.add(registro)
        registros.append(registro)
    db.flush()
    return registros


def presencas_detalhadas(
    db: Session,
    busca: Optional[str] = None,
    turma_id: Optional[int] = None,
    status: Optional[str] = None,
    data_inicio: Optional[date] = None,
    data_fim: Optional[date] = None,
    filial_id: Optional[int] = None,
) -> List[dict]:
    """
    Presenças com os nomes de aluno, turma, professor e filial, já filtradas.
    ``status`` aceita "presente" ou "ausente"; qualquer outro valor não filtra.
    """
    query = (
        db.query(Presenca)
        .join(Aluno, Presenca.aluno_id == Aluno.id)
        .join(Turma, Presenca.turma_id == Turma.id)
        .options(
            joinedload(Presenca.aluno).joinedload(Aluno.filial),
            joinedload(Presenca.turma).joinedload(Turma.professor),
        )
    )
    if busca:
        search = f"%{busca}%"
        query = query.filter(or_(Aluno.nome.ilike(search), Turma.nome.ilike(search)))
    if turma_id:
        query = query.filter(Presenca.turma_id == turma_id)
    if status == "presente":
        query = query.filter(Presenca.presente == True)
    elif status == "ausente":
        query = query.filter(Presenca.presente == False)
    if data_inicio:
        query = query.filter(Presenca.data >= data_inicio)
    if data_fim:
        query = query.filter(Presenca.data <= data_fim)
    if filial_id:
        query = query.filter(Aluno.filial_id == filial_id)

    resultado = []
    for p in query.order_by(Presenca.data.desc(), Aluno.nome).all():
        resultado.append({
            "id": p.id,
            "aluno_id": p.aluno_id,
            "turma_id": p.turma_id,
            "data": p.data,
            "presente": bool(p.presente),
            "observacoes": p.observacoes,
            "created_at": p.created_at,
            "aluno_nome": p.aluno.nome,
            "turma_nome": p.turma.nome,
            "professor_nome": p.turma.professor.nome if p.turma.professor else None,
            "filial_nome": p.aluno.filial.nome if p.aluno.filial else None,
        })
    return resultado
