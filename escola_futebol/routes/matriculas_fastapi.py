# -*- coding: utf-8 -*-
"""
Rotas FastAPI para matrículas de alunos em turmas.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, joinedload

from escola_futebol.auth import get_current_active_user
from escola_futebol.database import get_db
from escola_futebol.models.aluno import Aluno
from escola_futebol.models.matricula import Matricula
from escola_futebol.models.turma import Turma
from escola_futebol.schemas.matricula import MatriculaCreate, MatriculaRead, MatriculaUpdate

router = APIRouter(
    tags=["Matrículas"],
    responses={404: {"description": "Matrícula não encontrada"}},
    dependencies=[Depends(get_current_active_user)],
)


def _checar_vaga(db: Session, turma: Turma, ignorar_id: Optional[int] = None):
    query = db.query(Matricula).filter(Matricula.turma_id == turma.id, Matricula.ativo == True)
    if ignorar_id:
        query = query.filter(Matricula.id != ignorar_id)
    if turma.capacidade_maxima and query.count() >= turma.capacidade_maxima:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="A turma atingiu a capacidade máxima")


def _checar_duplicada(db: Session, aluno_id: int, turma_id: int, ignorar_id: Optional[int] = None):
    query = db.query(Matricula).filter(
        Matricula.aluno_id == aluno_id,
        Matricula.turma_id == turma_id,
        Matricula.ativo == True,
    )
    if ignorar_id:
        query = query.filter(Matricula.id != ignorar_id)
    if query.first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="O aluno já possui matrícula ativa nesta turma")


@router.post("", response_model=MatriculaRead, status_code=status.HTTP_201_CREATED)
def create_matricula(matricula: MatriculaCreate, db: Session = Depends(get_db)):
    if not db.query(Aluno).filter(Aluno.id == matricula.aluno_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Aluno não encontrado")
    turma = db.query(Turma).filter(Turma.id == matricula.turma_id).first()
    if not turma:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Turma não encontrada")

    if matricula.ativo is not False:
        _checar_duplicada(db, matricula.aluno_id, matricula.turma_id)
        _checar_vaga(db, turma)

    dados = matricula.model_dump(exclude_none=True)
    db_matricula = Matricula(**dados)
    db.add(db_matricula)
    db.commit()
    db.refresh(db_matricula)
    return db_matricula


@router.get("", response_model=List[MatriculaRead])
def read_matriculas(
    aluno_id: Optional[int] = None,
    turma_id: Optional[int] = None,
    ativo: Optional[bool] = None,
    db: Session = Depends(get_db)
):
    query = db.query(Matricula).options(joinedload(Matricula.aluno), joinedload(Matricula.turma))
    if aluno_id:
        query = query.filter(Matricula.aluno_id == aluno_id)
    if turma_id:
        query = query.filter(Matricula.turma_id == turma_id)
    if ativo is not None:
        query = query.filter(Matricula.ativo == ativo)
    return query.order_by(Matricula.data_matricula.desc(), Matricula.id.desc()).all()


@router.get("/{matricula_id}", response_model=MatriculaRead)
def read_matricula(matricula_id: int, db: Session = Depends(get_db)):
    db_matricula = db.query(Matricula).filter(Matricula.id == matricula_id).first()
    if db_matricula is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Matrícula não encontrada")
    return db_matricula


@router.put("/{matricula_id}", response_model=MatriculaRead)
def update_matricula(matricula_id: int, matricula_update: MatriculaUpdate, db: Session = Depends(get_db)):
    db_matricula = db.query(Matricula).filter(Matricula.id == matricula_id).first()
    if db_matricula is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Matrícula não encontrada")

    update_data = matricula_update.model_dump(exclude_unset=True)
    turma_id = update_data.get("turma_id") or db_matricula.turma_id
    ativa_depois = update_data.get("ativo", db_matricula.ativo)

    # Reativar ou trocar de turma ocupa uma vaga nova
    if ativa_depois and (turma_id != db_matricula.turma_id or not db_matricula.ativo):
        turma = db.query(Turma).filter(Turma.id == turma_id).first()
        if not turma:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Turma não encontrada")
        _checar_duplicada(db, db_matricula.aluno_id, turma_id, ignorar_id=matricula_id)
        _checar_vaga(db, turma, ignorar_id=matricula_id)

    for key, value in update_data.items():
        setattr(db_matricula, key, value)

    db.commit()
    db.refresh(db_matricula)
    return db_matricula


@router.delete("/{matricula_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_matricula(matricula_id: int, db: Session = Depends(get_db)):
    db_matricula = db.query(Matricula).filter(Matricula.id == matricula_id).first()
    if db_matricula is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Matrícula não encontrada")

    db.delete(db_matricula)
    db.commit()
    logging.info(f"Matrícula {matricula_id} excluída")
    return None
