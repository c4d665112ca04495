# -*- coding: utf-8 -*-
"""
Rotas FastAPI para o CRUD de Filiais (unidades).
"""
from datetime import date
from typing import List, Optional
import logging

from dateutil.relativedelta import relativedelta

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from escola_futebol.auth import get_current_active_user, get_password_hash
from escola_futebol.database import get_db
from escola_futebol.models.aluno import Aluno
from escola_futebol.models.filial import Filial
from escola_futebol.models.pagamento import Pagamento
from escola_futebol.models.professor import Professor
from escola_futebol.models.turma import Turma
from escola_futebol.schemas.filial import FilialCreate, FilialDetalhada, FilialRead, FilialUpdate

router = APIRouter(
    tags=["Filiais"],
    responses={404: {"description": "Filial não encontrada"}},
    dependencies=[Depends(get_current_active_user)],
)


def _commit(db: Session):
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logging.error(f"Erro de integridade ao salvar filial: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Login do portal já está em uso por outra filial.")


@router.post("", response_model=FilialRead, status_code=status.HTTP_201_CREATED)
def create_filial(filial: FilialCreate, db: Session = Depends(get_db)):
    dados = filial.model_dump(exclude={"senha_portal"})
    db_filial = Filial(**dados)
    if filial.senha_portal:
        db_filial.senha_portal_hash = get_password_hash(filial.senha_portal)
    db.add(db_filial)
    _commit(db)
    db.refresh(db_filial)
    return db_filial


@router.get("", response_model=List[FilialRead])
def read_filiais(busca: Optional[str] = None, db: Session = Depends(get_db)):
    """
    Lista as filiais ativas, com busca por nome ou cidade.
    """
    query = db.query(Filial).filter(Filial.ativa == True)
    if busca:
        query = query.filter(or_(Filial.nome.ilike(f"%{busca}%"), Filial.cidade.ilike(f"%{busca}%")))
    return query.order_by(Filial.nome).all()


@router.get("/detalhadas", response_model=List[FilialDetalhada])
def read_filiais_detalhadas(db: Session = Depends(get_db)):
    """
    Filiais ativas com os totais usados no painel consolidado das unidades.
    A receita considera os pagamentos feitos no mês corrente.
    """
    inicio_mes = date.today().replace(day=1)
    fim_mes = inicio_mes + relativedelta(months=1)

    def contagem(modelo, coluna_ativo):
        linhas = (
            db.query(modelo.filial_id, func.count(modelo.id))
            .filter(coluna_ativo == True)
            .group_by(modelo.filial_id)
            .all()
        )
        return dict(linhas)

    alunos = contagem(Aluno, Aluno.ativo)
    professores = contagem(Professor, Professor.ativo)
    turmas = contagem(Turma, Turma.ativo)
    receitas = dict(
        db.query(Aluno.filial_id, func.sum(Pagamento.valor))
        .join(Pagamento, Pagamento.aluno_id == Aluno.id)
        .filter(Pagamento.data_pagamento >= inicio_mes, Pagamento.data_pagamento < fim_mes)
        .group_by(Aluno.filial_id)
        .all()
    )

    resultado = []
    for filial in db.query(Filial).filter(Filial.ativa == True).order_by(Filial.nome).all():
        item = FilialDetalhada.model_validate(filial)
        item.total_alunos = alunos.get(filial.id, 0)
        item.total_professores = professores.get(filial.id, 0)
        item.total_turmas = turmas.get(filial.id, 0)
        item.receita_mensal = round(float(receitas.get(filial.id) or 0), 2)
        resultado.append(item)
    return resultado


@router.get("/{filial_id}", response_model=FilialRead)
def read_filial(filial_id: int, db: Session = Depends(get_db)):
    db_filial = db.query(Filial).filter(Filial.id == filial_id).first()
    if db_filial is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Filial não encontrada")
    return db_filial


@router.put("/{filial_id}", response_model=FilialRead)
def update_filial(filial_id: int, filial_update: FilialUpdate, db: Session = Depends(get_db)):
    db_filial = db.query(Filial).filter(Filial.id == filial_id).first()
    if db_filial is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Filial não encontrada")

    update_data = filial_update.model_dump(exclude_unset=True)
    senha = update_data.pop("senha_portal", None)
    if senha:
        db_filial.senha_portal_hash = get_password_hash(senha)

    for key, value in update_data.items():
        setattr(db_filial, key, value)

    _commit(db)
    db.refresh(db_filial)
    return db_filial


@router.delete("/{filial_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_filial(filial_id: int, db: Session = Depends(get_db)):
    """
    Desativa a filial. Alunos, turmas e pagamentos continuam no histórico.
    """
    db_filial = db.query(Filial).filter(Filial.id == filial_id).first()
    if db_filial is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Filial não encontrada")

    db_filial.ativa = False
    db.commit()
    logging.info(f"Filial {filial_id} desativada")
    return None
