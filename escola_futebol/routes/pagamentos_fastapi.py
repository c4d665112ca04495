# -*- coding: utf-8 -*-
"""
Rotas FastAPI para os pagamentos de mensalidade.
"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, joinedload

from escola_futebol.auth import get_current_active_user
from escola_futebol.database import get_db
from escola_futebol.models.aluno import Aluno
from escola_futebol.models.pagamento import Pagamento
from escola_futebol.schemas.pagamento import PagamentoCreate, PagamentoRead, PagamentoUpdate

router = APIRouter(
    tags=["Pagamentos"],
    responses={404: {"description": "Pagamento não encontrado"}},
    dependencies=[Depends(get_current_active_user)],
)


@router.post("", response_model=PagamentoRead, status_code=status.HTTP_201_CREATED)
def create_pagamento(pagamento: PagamentoCreate, db: Session = Depends(get_db)):
    if not db.query(Aluno).filter(Aluno.id == pagamento.aluno_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Aluno não encontrado")

    db_pagamento = Pagamento(**pagamento.model_dump())
    db.add(db_pagamento)
    db.commit()
    db.refresh(db_pagamento)
    return db_pagamento


@router.get("", response_model=List[PagamentoRead])
def read_pagamentos(
    aluno_id: Optional[int] = None,
    mes_referencia: Optional[str] = None,
    forma_pagamento: Optional[str] = None,
    data_inicio: Optional[date] = None,
    data_fim: Optional[date] = None,
    skip: int = 0,
    limit: int = 1000,
    db: Session = Depends(get_db)
):
    """
    Lista pagamentos, do mais recente para o mais antigo.
    """
    query = db.query(Pagamento).options(joinedload(Pagamento.aluno))
    if aluno_id:
        query = query.filter(Pagamento.aluno_id == aluno_id)
    if mes_referencia:
        query = query.filter(Pagamento.mes_referencia == mes_referencia)
    if forma_pagamento:
        query = query.filter(Pagamento.forma_pagamento == forma_pagamento)
    if data_inicio:
        query = query.filter(Pagamento.data_pagamento >= data_inicio)
    if data_fim:
        query = query.filter(Pagamento.data_pagamento <= data_fim)

    return query.order_by(Pagamento.data_pagamento.desc(), Pagamento.id.desc()).offset(skip).limit(limit).all()


@router.get("/{pagamento_id}", response_model=PagamentoRead)
def read_pagamento(pagamento_id: int, db: Session = Depends(get_db)):
    db_pagamento = db.query(Pagamento).filter(Pagamento.id == pagamento_id).first()
    if db_pagamento is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pagamento não encontrado")
    return db_pagamento


@router.put("/{pagamento_id}", response_model=PagamentoRead)
def update_pagamento(pagamento_id: int, pagamento_update: PagamentoUpdate, db: Session = Depends(get_db)):
    db_pagamento = db.query(Pagamento).filter(Pagamento.id == pagamento_id).first()
    if db_pagamento is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pagamento não encontrado")

    for key, value in pagamento_update.model_dump(exclude_unset=True).items():
        # Apenas as observações podem ser apagadas
        if value is None and key != "observacoes":
            continue
        setattr(db_pagamento, key, value)

    db.commit()
    db.refresh(db_pagamento)
    return db_pagamento


@router.delete("/{pagamento_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_pagamento(pagamento_id: int, db: Session = Depends(get_db)):
    db_pagamento = db.query(Pagamento).filter(Pagamento.id == pagamento_id).first()
    if db_pagamento is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pagamento não encontrado")

    db.delete(db_pagamento)
    db.commit()
    logging.info(f"Pagamento {pagamento_id} excluído")
    return None
