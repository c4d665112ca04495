# -*- coding: utf-8 -*-
"""
Rotas FastAPI para os documentos (comunicados, contratos, regulamentos).
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form
from sqlalchemy.orm import Session
from botocore.exceptions import BotoCoreError, ClientError

from escola_futebol import storage
from escola_futebol.auth import get_current_active_user
from escola_futebol.constantes import CATEGORIAS_DOCUMENTO, VISIBILIDADES_DOCUMENTO
from escola_futebol.database import get_db
from escola_futebol.models.documento import Documento
from escola_futebol.models.usuario import Usuario
from escola_futebol.schemas.documento import DocumentoRead

router = APIRouter(
    tags=["Documentos"],
    responses={404: {"description": "Documento não encontrado"}},
)


@router.get("", response_model=List[DocumentoRead])
def read_documentos(
    categoria: Optional[str] = None,
    filial_id: Optional[int] = None,
    aluno_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_active_user)
):
    query = db.query(Documento).filter(Documento.ativo == True)
    if categoria:
        query = query.filter(Documento.categoria == categoria)
    if filial_id:
        query = query.filter(Documento.filial_id == filial_id)
    if aluno_id:
        query = query.filter(Documento.aluno_id == aluno_id)
    return query.order_by(Documento.created_at.desc()).all()


@router.post("", response_model=DocumentoRead, status_code=status.HTTP_201_CREATED)
def upload_documento(
    titulo: str = Form(...),
    categoria: str = Form("comunicado"),
    visibilidade: str = Form("todos"),
    descricao: Optional[str] = Form(None),
    filial_id: Optional[int] = Form(None),
    aluno_id: Optional[int] = Form(None),
    arquivo: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_active_user)
):
    """
    Envia o arquivo para o armazenamento e registra o documento.
    """
    if not titulo.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="O título é obrigatório.")
    if categoria not in CATEGORIAS_DOCUMENTO:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Categoria de documento inválida.")
    if visibilidade not in VISIBILIDADES_DOCUMENTO:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Visibilidade inválida.")
    if visibilidade == "filial" and not filial_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Informe a filial do documento.")
    if visibilidade == "aluno" and not aluno_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Informe o aluno do documento.")

    conteudo = arquivo.file
    conteudo.seek(0, 2)
    tamanho = conteudo.tell()
    conteudo.seek(0)

    nome = storage.nome_seguro("documento", arquivo.filename)
    try:
        url = storage.salvar_arquivo(conteudo, nome, arquivo.content_type)
    except (BotoCoreError, ClientError, OSError) as e:
        logging.error(f"Erro no upload do documento: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erro ao enviar o documento.")

    db_documento = Documento(
        titulo=titulo.strip(),
        descricao=descricao,
        categoria=categoria,
        arquivo_url=url,
        tipo_arquivo=arquivo.content_type,
        tamanho_bytes=tamanho,
        nome_arquivo_original=arquivo.filename,
        visibilidade=visibilidade,
        filial_id=filial_id,
        aluno_id=aluno_id,
        upload_por_nome=current_user.nome or current_user.username,
    )
    db.add(db_documento)
    db.commit()
    db.refresh(db_documento)
    return db_documento


@router.get("/{documento_id}", response_model=DocumentoRead)
def read_documento(
    documento_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_active_user)
):
    db_documento = db.query(Documento).filter(Documento.id == documento_id).first()
    if db_documento is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Documento não encontrado")
    return db_documento


@router.delete("/{documento_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_documento(
    documento_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_active_user)
):
    db_documento = db.query(Documento).filter(Documento.id == documento_id).first()
    if db_documento is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Documento não encontrado")

    storage.remover_arquivo(db_documento.arquivo_url)
    db.delete(db_documento)
    db.commit()
    logging.info(f"Documento {documento_id} excluído por {current_user.email}")
    return None
