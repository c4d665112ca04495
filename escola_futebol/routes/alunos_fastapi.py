# -*- coding: utf-8 -*-
"""
Rotas FastAPI para o CRUD de Alunos.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload
from botocore.exceptions import BotoCoreError, ClientError

from escola_futebol import storage
from escola_futebol.auth import get_current_active_user
from escola_futebol.database import get_db
from escola_futebol.image_utils import process_avatar_image
from escola_futebol.models.aluno import Aluno
from escola_futebol.models.filial import Filial
from escola_futebol.models.matricula import Matricula
from escola_futebol.models.turma import Turma
from escola_futebol.schemas.aluno import AlunoCreate, AlunoDetalhe, AlunoRead, AlunoUpdate
from escola_futebol.servicos import status_pagamento


router = APIRouter(
    tags=["Alunos"],
    responses={404: {"description": "Aluno não encontrado"}},
    dependencies=[Depends(get_current_active_user)],
)


def _com_status(aluno: Aluno, schema=AlunoRead):
    item = schema.model_validate(aluno)
    item.status_pagamento = status_pagamento(aluno.pagamentos)
    return item


def _checar_filial(db: Session, filial_id: Optional[int]):
    if filial_id and not db.query(Filial).filter(Filial.id == filial_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Filial com ID {filial_id} não encontrada")


def _get_aluno_or_404(db: Session, aluno_id: int) -> Aluno:
    db_aluno = db.query(Aluno).filter(Aluno.id == aluno_id).first()
    if db_aluno is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Aluno não encontrado")
    return db_aluno


def _commit(db: Session):
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logging.error(f"Erro de integridade ao salvar aluno: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Não foi possível salvar o aluno. Verifique os dados informados.")


@router.post("", response_model=AlunoRead, status_code=status.HTTP_201_CREATED)
def create_aluno(aluno: AlunoCreate, db: Session = Depends(get_db)):
    _checar_filial(db, aluno.filial_id)
    db_aluno = Aluno(**aluno.model_dump())
    db.add(db_aluno)
    _commit(db)
    db.refresh(db_aluno)
    return _com_status(db_aluno)


@router.get("", response_model=List[AlunoRead])
def read_alunos(
    busca: Optional[str] = None,
    filial_id: Optional[int] = None,
    ativo: Optional[bool] = None,
    skip: int = 0,
    limit: int = 500,
    db: Session = Depends(get_db)
):
    """
    Lista alunos com a situação de pagamento de cada um.
    A busca procura por nome, email ou CPF.
    """
    query = db.query(Aluno).options(joinedload(Aluno.filial), joinedload(Aluno.pagamentos))
    if busca:
        search = f"%{busca}%"
        query = query.filter(or_(Aluno.nome.ilike(search), Aluno.email.ilike(search), Aluno.cpf.ilike(search)))
    if filial_id:
        query = query.filter(Aluno.filial_id == filial_id)
    if ativo is not None:
        query = query.filter(Aluno.ativo == ativo)

    alunos = query.order_by(Aluno.nome).offset(skip).limit(limit).all()
    return [_com_status(a) for a in alunos]


@router.get("/{aluno_id}", response_model=AlunoDetalhe)
def read_aluno(aluno_id: int, db: Session = Depends(get_db)):
    """
    Detalhes do aluno com as matrículas ativas (turma e professor).
    """
    db_aluno = db.query(Aluno).options(
        joinedload(Aluno.filial),
        joinedload(Aluno.pagamentos),
        joinedload(Aluno.matriculas).joinedload(Matricula.turma).joinedload(Turma.professor),
    ).filter(Aluno.id == aluno_id).first()
    if db_aluno is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Aluno não encontrado")

    detalhe = AlunoDetalhe.model_validate(
        {
            **AlunoRead.model_validate(db_aluno).model_dump(),
            "status_pagamento": status_pagamento(db_aluno.pagamentos),
            "matriculas": [
                {
                    "id": m.id,
                    "data_matricula": m.data_matricula,
                    "ativo": m.ativo,
                    "turma": {
                        "id": m.turma.id,
                        "nome": m.turma.nome,
                        "categoria": m.turma.categoria,
                        "horario": m.turma.horario,
                        "professor_nome": m.turma.professor.nome if m.turma.professor else None,
                    },
                }
                for m in db_aluno.matriculas if m.ativo
            ],
        }
    )
    return detalhe


@router.put("/{aluno_id}", response_model=AlunoRead)
def update_aluno(aluno_id: int, aluno_update: AlunoUpdate, db: Session = Depends(get_db)):
    db_aluno = _get_aluno_or_404(db, aluno_id)

    update_data = aluno_update.model_dump(exclude_unset=True)
    if "filial_id" in update_data:
        _checar_filial(db, update_data["filial_id"])

    for key, value in update_data.items():
        setattr(db_aluno, key, value)

    _commit(db)
    db.refresh(db_aluno)
    return _com_status(db_aluno)


@router.delete("/{aluno_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_aluno(aluno_id: int, db: Session = Depends(get_db)):
    """
    Exclui o aluno junto com matrículas, pagamentos e presenças.
    """
    db_aluno = _get_aluno_or_404(db, aluno_id)
    foto = db_aluno.foto

    db.delete(db_aluno)
    db.commit()
    logging.info(f"Aluno {aluno_id} excluído")

    if foto:
        storage.remover_arquivo(foto)
    return None


@router.post("/{aluno_id}/foto", response_model=AlunoRead)
def upload_foto(aluno_id: int, foto: UploadFile = File(...), db: Session = Depends(get_db)):
    """
    Redimensiona a foto do aluno e envia para o armazenamento.
    """
    db_aluno = _get_aluno_or_404(db, aluno_id)

    processed_image, mime_type = process_avatar_image(foto.file)
    if not processed_image:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Arquivo enviado não é uma imagem válida.")

    nome = storage.nome_seguro(f"aluno_{db_aluno.id}", foto.filename, ".jpg")
    try:
        url = storage.salvar_arquivo(processed_image, nome, mime_type)
    except (BotoCoreError, ClientError, OSError) as e:
        logging.error(f"Erro no upload da foto (aluno {aluno_id}): {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erro ao enviar a foto.")

    foto_antiga = db_aluno.foto
    db_aluno.foto = url
    db.commit()
    db.refresh(db_aluno)

    if foto_antiga:
        storage.remover_arquivo(foto_antiga)
    return _com_status(db_aluno)
