# -*- coding: utf-8 -*-
"""
Armazenamento de arquivos enviados (fotos, logo, documentos).

Com as variáveis do bucket configuradas, os arquivos vão para um
armazenamento compatível com S3 (Cloudflare R2); sem elas, ficam no
diretório local UPLOAD_DIR, servido pela API em /uploads.
"""
import os
import re
import shutil
import logging
from datetime import datetime
from pathlib import Path

import boto3
from botocore.exceptions import BotoCoreError, ClientError

URL_LOCAL = "/uploads"


def _config_s3():
    config = {
        "endpoint_url": os.getenv("S3_ENDPOINT_URL"),
        "access_key": os.getenv("AWS_ACCESS_KEY_ID"),
        "secret_key": os.getenv("AWS_SECRET_ACCESS_KEY"),
        "bucket": os.getenv("S3_BUCKET_NAME"),
        "public_url": os.getenv("PUBLIC_BUCKET_URL"),
    }
    if all(config.values()):
        return config
    return None


def _s3_client(config):
    return boto3.client(
        's3',
        endpoint_url=config["endpoint_url"],
        aws_access_key_id=config["access_key"],
        aws_secret_access_key=config["secret_key"],
        region_name="auto",
    )


def upload_dir() -> Path:
    return Path(os.getenv("UPLOAD_DIR", "uploads"))


def nome_seguro(prefixo: str, nome_original: str, extensao: str = None) -> str:
    """
    Gera um nome único para o arquivo, ex.: aluno_3_1718000000.0_foto.jpg
    """
    base, ext = os.path.splitext(os.path.basename(nome_original or "arquivo"))
    base = re.sub(r"[^A-Za-z0-9_.-]", "_", base) or "arquivo"
    return f"{prefixo}_{datetime.utcnow().timestamp()}_{base}{extensao or ext}"


def salvar_arquivo(fileobj, nome: str, content_type: str = None) -> str:
    """
    Grava o arquivo e devolve a URL pública.
    Erros de armazenamento propagam para quem chamou.
    """
    config = _config_s3()
    if config:
        extra_args = {'ContentType': content_type} if content_type else None
        _s3_client(config).upload_fileobj(fileobj, config["bucket"], nome, ExtraArgs=extra_args)
        return f"{config['public_url'].rstrip('/')}/{nome}"

    destino_dir = upload_dir()
    destino_dir.mkdir(parents=True, exist_ok=True)
    with open(destino_dir / nome, "wb") as buffer:
        shutil.copyfileobj(fileobj, buffer)
    return f"{URL_LOCAL}/{nome}"


def remover_arquivo(url: str) -> bool:
    """
    Remove o arquivo apontado pela URL. Falhas são apenas registradas
    para não impedir a exclusão do registro no banco.
    """
    if not url:
        return False

    config = _config_s3()
    if config and url.startswith(config["public_url"].rstrip('/')):
        chave = url[len(config["public_url"].rstrip('/')) + 1:]
        try:
            _s3_client(config).delete_object(Bucket=config["bucket"], Key=chave)
            return True
        except (BotoCoreError, ClientError) as e:
            logging.error(f"Erro ao remover arquivo do bucket ({chave}): {e}")
            return False

    if url.startswith(URL_LOCAL + "/"):
        caminho = upload_dir() / url[len(URL_LOCAL) + 1:]
        try:
            caminho.unlink()
            return True
        except OSError as e:
            logging.error(f"Erro ao remover arquivo local ({caminho}): {e}")
            return False

    logging.warning(f"URL de arquivo desconhecida, nada removido: {url}")
    return False
