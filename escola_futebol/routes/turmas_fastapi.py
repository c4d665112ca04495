# -*- coding: utf-8 -*-
"""
Rotas FastAPI para o CRUD de Turmas.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, joinedload

from escola_futebol.auth import get_current_active_user
from escola_futebol.constantes import CATEGORIAS_TURMA, DIAS_SEMANA
from escola_futebol.database import get_db
from escola_futebol.models.filial import Filial
from escola_futebol.models.professor import Professor
from escola_futebol.models.turma import Turma
from escola_futebol.schemas.turma import TurmaCreate, TurmaRead, TurmaUpdate

router = APIRouter(
    tags=["Turmas"],
    responses={404: {"description": "Não encontrado"}},
    dependencies=[Depends(get_current_active_user)],
)


def _validar_referencias(db: Session, professor_id: Optional[int], filial_id: Optional[int]):
    if professor_id and not db.query(Professor).filter(Professor.id == professor_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Professor com ID {professor_id} não encontrado")
    if filial_id and not db.query(Filial).filter(Filial.id == filial_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Filial com ID {filial_id} não encontrada")


def _com_total(turma: Turma) -> Turma:
    turma.total_alunos = sum(1 for m in turma.matriculas if m.ativo)
    return turma


# Endpoints auxiliares declarados antes de /{turma_id}
@router.get("/utils/categorias", response_model=List[str])
def list_categorias():
    return CATEGORIAS_TURMA


@router.get("/utils/dias-semana", response_model=List[str])
def list_dias_semana():
    return DIAS_SEMANA


@router.post("", response_model=TurmaRead, status_code=status.HTTP_201_CREATED)
def create_turma(turma: TurmaCreate, db: Session = Depends(get_db)):
    _validar_referencias(db, turma.professor_id, turma.filial_id)

    dados = turma.model_dump()
    dados["dias_semana"] = ",".join(dados["dias_semana"])
    db_turma = Turma(**dados)
    db.add(db_turma)
    db.commit()
    db.refresh(db_turma)
    return _com_total(db_turma)


@router.get("", response_model=List[TurmaRead])
def read_turmas(
    busca: Optional[str] = None,
    categoria: Optional[str] = None,
    filial_id: Optional[int] = None,
    professor_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 500,
    db: Session = Depends(get_db)
):
    """
    Lista turmas com filtros e contagem de alunos ativos.
    """
    query = db.query(Turma).options(
        joinedload(Turma.matriculas),
        joinedload(Turma.professor),
        joinedload(Turma.filial),
    )
    if busca:
        query = query.filter(Turma.nome.ilike(f"%{busca}%"))
    if categoria:
        query = query.filter(Turma.categoria == categoria)
    if filial_id:
        query = query.filter(Turma.filial_id == filial_id)
    if professor_id:
        query = query.filter(Turma.professor_id == professor_id)

    turmas = query.order_by(Turma.categoria, Turma.nome).offset(skip).limit(limit).all()
    return [_com_total(t) for t in turmas]


@router.get("/{turma_id}", response_model=TurmaRead)
def read_turma(turma_id: int, db: Session = Depends(get_db)):
    db_turma = db.query(Turma).options(
        joinedload(Turma.matriculas),
        joinedload(Turma.professor),
        joinedload(Turma.filial),
    ).filter(Turma.id == turma_id).first()
    if db_turma is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Turma não encontrada")
    return _com_total(db_turma)


@router.put("/{turma_id}", response_model=TurmaRead)
def update_turma(turma_id: int, turma_update: TurmaUpdate, db: Session = Depends(get_db)):
    db_turma = db.query(Turma).filter(Turma.id == turma_id).first()
    if db_turma is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Turma não encontrada")

    update_data = turma_update.model_dump(exclude_unset=True)
    _validar_referencias(db, update_data.get("professor_id"), update_data.get("filial_id"))
    if "dias_semana" in update_data:
        update_data["dias_semana"] = ",".join(update_data["dias_semana"] or [])

    for key, value in update_data.items():
        setattr(db_turma, key, value)

    db.commit()
    db.refresh(db_turma)
    return _com_total(db_turma)


@router.delete("/{turma_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_turma(turma_id: int, db: Session = Depends(get_db)):
    """
    Exclui uma turma com suas matrículas e presenças.
    """
    db_turma = db.query(Turma).filter(Turma.id == turma_id).first()
    if db_turma is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Turma não encontrada")

    db.delete(db_turma)
    db.commit()
    logging.info(f"Turma {turma_id} excluída")
    return None
