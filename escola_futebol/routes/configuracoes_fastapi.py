# -*- coding: utf-8 -*-
"""
Rotas FastAPI para as configurações visuais (nome, logo e cores).
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File
from sqlalchemy.orm import Session
from botocore.exceptions import BotoCoreError, ClientError

from escola_futebol import storage
from escola_futebol.auth import get_current_active_user
from escola_futebol.database import get_db
from escola_futebol.image_utils import process_logo_image
from escola_futebol.models.configuracoes import Configuracoes
from escola_futebol.schemas.configuracoes import ConfiguracoesRead, ConfiguracoesUpdate

router = APIRouter(
    tags=["Configurações"],
    dependencies=[Depends(get_current_active_user)],
)


def obter_configuracoes(db: Session) -> Configuracoes:
    """
    Devolve a linha única de configurações, criando-a com os valores
    padrão na primeira leitura.
    """
    config = db.query(Configuracoes).order_by(Configuracoes.id).first()
    if config is None:
        config = Configuracoes()
        db.add(config)
        db.commit()
        db.refresh(config)
    return config


@router.get("", response_model=ConfiguracoesRead)
def read_configuracoes(db: Session = Depends(get_db)):
    return obter_configuracoes(db)


@router.put("", response_model=ConfiguracoesRead)
def update_configuracoes(config_update: ConfiguracoesUpdate, db: Session = Depends(get_db)):
    config = obter_configuracoes(db)
    for key, value in config_update.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(config, key, value)
    db.commit()
    db.refresh(config)
    return config


@router.post("/logo", response_model=ConfiguracoesRead)
def upload_logo(logo: UploadFile = File(...), db: Session = Depends(get_db)):
    processed_image, mime_type = process_logo_image(logo.file)
    if not processed_image:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Arquivo enviado não é uma imagem válida.")

    nome = storage.nome_seguro("logo", logo.filename, ".png")
    try:
        url = storage.salvar_arquivo(processed_image, nome, mime_type)
    except (BotoCoreError, ClientError, OSError) as e:
        logging.error(f"Erro no upload do logo: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erro ao enviar o logo.")

    config = obter_configuracoes(db)
    logo_antigo = config.logo_url
    config.logo_url = url
    db.commit()
    db.refresh(config)

    if logo_antigo:
        storage.remover_arquivo(logo_antigo)
    return config
