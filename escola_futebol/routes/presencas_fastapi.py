# -*- coding: utf-8 -*-
"""
Rotas FastAPI para a chamada (presenças) das turmas.
"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from escola_futebol.auth import get_current_active_user
from escola_futebol.database import get_db
from escola_futebol.models.aluno import Aluno
from escola_futebol.models.presenca import Presenca
from escola_futebol.models.turma import Turma
from escola_futebol.schemas.presenca import PresencaDetalhada, PresencaLote, PresencaRead
from escola_futebol.servicos import presencas_detalhadas, registrar_chamada

router = APIRouter(
    tags=["Presenças"],
    responses={404: {"description": "Presença não encontrada"}},
    dependencies=[Depends(get_current_active_user)],
)


@router.get("", response_model=List[PresencaRead])
def read_presencas(turma_id: int, data: date, db: Session = Depends(get_db)):
    """
    Chamada de uma turma em um dia.
    """
    return db.query(Presenca).filter(
        Presenca.turma_id == turma_id,
        Presenca.data == data,
    ).order_by(Presenca.aluno_id).all()


@router.post("/lote", response_model=List[PresencaRead], status_code=status.HTTP_201_CREATED)
def registrar_lote(lote: PresencaLote, db: Session = Depends(get_db)):
    """
    Registra a chamada completa, substituindo a já existente para o mesmo dia.
    """
    if not db.query(Turma).filter(Turma.id == lote.turma_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Turma não encontrada")

    aluno_ids = {item.aluno_id for item in lote.presencas}
    encontrados = {a.id for a in db.query(Aluno.id).filter(Aluno.id.in_(aluno_ids)).all()}
    faltando = sorted(aluno_ids - encontrados)
    if faltando:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Aluno(s) não encontrado(s): {', '.join(str(i) for i in faltando)}"
        )

    registros = registrar_chamada(db, lote.turma_id, lote.data, lote.presencas)
    db.commit()
    for registro in registros:
        db.refresh(registro)
    return registros


@router.get("/detalhadas", response_model=List[PresencaDetalhada])
def read_presencas_detalhadas(
    busca: Optional[str] = None,
    turma_id: Optional[int] = None,
    status_presenca: Optional[str] = Query(None, alias="status"),
    data_inicio: Optional[date] = None,
    data_fim: Optional[date] = None,
    filial_id: Optional[int] = None,
    db: Session = Depends(get_db)
):
    return presencas_detalhadas(
        db,
        busca=busca,
        turma_id=turma_id,
        status=status_presenca,
        data_inicio=data_inicio,
        data_fim=data_fim,
        filial_id=filial_id,
    )


@router.delete("/{presenca_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_presenca(presenca_id: int, db: Session = Depends(get_db)):
    db_presenca = db.query(Presenca).filter(Presenca.id == presenca_id).first()
    if db_presenca is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Presença não encontrada")

    db.delete(db_presenca)
    db.commit()
    logging.info(f"Presença {presenca_id} excluída")
    return None
