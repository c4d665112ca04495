# -*- coding: utf-8 -*-
"""
Rotas FastAPI para o CRUD de Professores.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from escola_futebol.auth import get_current_active_user
from escola_futebol.database import get_db
from escola_futebol.models.filial import Filial
from escola_futebol.models.professor import Professor
from escola_futebol.schemas.professor import ProfessorCreate, ProfessorRead, ProfessorUpdate

router = APIRouter(
    tags=["Professores"],
    responses={404: {"description": "Professor não encontrado"}},
    dependencies=[Depends(get_current_active_user)],
)


def _checar_email(db: Session, email: Optional[str], professor_id: Optional[int] = None):
    if not email:
        return
    query = db.query(Professor).filter(Professor.email == email)
    if professor_id:
        query = query.filter(Professor.id != professor_id)
    if query.first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email já cadastrado para outro professor")


def _checar_filial(db: Session, filial_id: Optional[int]):
    if filial_id and not db.query(Filial).filter(Filial.id == filial_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Filial com ID {filial_id} não encontrada")


@router.post("", response_model=ProfessorRead, status_code=status.HTTP_201_CREATED)
def create_professor(professor: ProfessorCreate, db: Session = Depends(get_db)):
    _checar_email(db, professor.email)
    _checar_filial(db, professor.filial_id)

    db_professor = Professor(**professor.model_dump())
    db.add(db_professor)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logging.error(f"Erro de integridade ao salvar professor: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email já cadastrado para outro professor")
    db.refresh(db_professor)
    return db_professor


@router.get("", response_model=List[ProfessorRead])
def read_professores(
    busca: Optional[str] = None,
    filial_id: Optional[int] = None,
    ativo: Optional[bool] = None,
    skip: int = 0,
    limit: int = 500,
    db: Session = Depends(get_db)
):
    query = db.query(Professor).options(joinedload(Professor.filial))
    if busca:
        search = f"%{busca}%"
        query = query.filter(or_(
            Professor.nome.ilike(search),
            Professor.email.ilike(search),
            Professor.especialidade.ilike(search),
        ))
    if filial_id:
        query = query.filter(Professor.filial_id == filial_id)
    if ativo is not None:
        query = query.filter(Professor.ativo == ativo)
    return query.order_by(Professor.nome).offset(skip).limit(limit).all()


@router.get("/{professor_id}", response_model=ProfessorRead)
def read_professor(professor_id: int, db: Session = Depends(get_db)):
    db_professor = db.query(Professor).filter(Professor.id == professor_id).first()
    if db_professor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Professor não encontrado")
    return db_professor


@router.put("/{professor_id}", response_model=ProfessorRead)
def update_professor(professor_id: int, professor_update: ProfessorUpdate, db: Session = Depends(get_db)):
    db_professor = db.query(Professor).filter(Professor.id == professor_id).first()
    if db_professor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Professor não encontrado")

    update_data = professor_update.model_dump(exclude_unset=True)
    if "email" in update_data:
        _checar_email(db, update_data["email"], professor_id)
    if "filial_id" in update_data:
        _checar_filial(db, update_data["filial_id"])

    for key, value in update_data.items():
        setattr(db_professor, key, value)

    db.commit()
    db.refresh(db_professor)
    return db_professor


@router.delete("/{professor_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_professor(professor_id: int, db: Session = Depends(get_db)):
    """
    Exclui o professor. As turmas dele ficam sem professor.
    """
    db_professor = db.query(Professor).filter(Professor.id == professor_id).first()
    if db_professor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Professor não encontrado")

    for turma in db_professor.turmas:
        turma.professor_id = None
    db.delete(db_professor)
    db.commit()
    logging.info(f"Professor {professor_id} excluído")
    return None
