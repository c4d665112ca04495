# -*- coding: utf-8 -*-
"""
Arquivo principal da aplicação FastAPI para o sistema de gestão da escola de futebol.
"""

import os
import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

load_dotenv()

from escola_futebol.auth import SECRET_KEY
from escola_futebol.database import criar_tabelas
from escola_futebol import storage

from escola_futebol.routes import (auth_fastapi, usuarios_fastapi, filiais_fastapi, alunos_fastapi,
                                   professores_fastapi, turmas_fastapi, matriculas_fastapi,
                                   pagamentos_fastapi, presencas_fastapi, documentos_fastapi,
                                   combos_aulas_fastapi, configuracoes_fastapi, gestores_unidade_fastapi,
                                   unidade_fastapi, dashboard_fastapi, relatorios_fastapi, sync_fastapi)

import create_first_user

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Cria as tabelas no banco de dados com tratamento de erros
try:
    criar_tabelas()
    logger.info("Tabelas criadas com sucesso!")
except Exception as e:
    logger.error(f"Erro ao criar tabelas: {e}")


env = os.getenv("ENVIRONMENT", "development")

# Inicializa a aplicação FastAPI
app = FastAPI(
    title="API Escola de Futebol",
    description="API para gestão de uma escola de futebol com várias unidades",
    version="1.0.0",
    docs_url="/docs" if env != "production" else None,
    redoc_url="/redoc" if env != "production" else None,
    openapi_url="/openapi.json" if env != "production" else None
)

frontend_url = os.getenv("FRONTEND_URL", "http://localhost:5700")

origins = [
    frontend_url,
    "http://localhost:5700",
    "http://localhost",
    "http://127.0.0.1",
]

app.add_middleware(SessionMiddleware, secret_key=SECRET_KEY, https_only=env == "production")

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Devolve os erros de validação por campo, para o formulário exibir
    a mensagem ao lado de cada campo.
    """
    erros = []
    for erro in exc.errors():
        campo = ".".join(str(parte) for parte in erro.get("loc", []) if parte not in ("body", "query", "path"))
        mensagem = erro.get("msg", "Valor inválido")
        # Mensagens de ValueError chegam como "Value error, <mensagem>"
        if mensagem.startswith("Value error, "):
            mensagem = mensagem[len("Value error, "):]
        erros.append({"campo": campo, "mensagem": mensagem})
    return JSONResponse(
        status_code=422,
        content={"detail": "Dados inválidos", "erros": erros},
    )


# Montagem dos routers
app.include_router(auth_fastapi.router)
app.include_router(usuarios_fastapi.router)
app.include_router(unidade_fastapi.router)
app.include_router(filiais_fastapi.router, prefix="/api/filiais")
app.include_router(alunos_fastapi.router, prefix="/api/alunos")
app.include_router(professores_fastapi.router, prefix="/api/professores")
app.include_router(turmas_fastapi.router, prefix="/api/turmas")
app.include_router(matriculas_fastapi.router, prefix="/api/matriculas")
app.include_router(pagamentos_fastapi.router, prefix="/api/pagamentos")
app.include_router(presencas_fastapi.router, prefix="/api/presencas")
app.include_router(documentos_fastapi.router, prefix="/api/documentos")
app.include_router(combos_aulas_fastapi.router, prefix="/api/combos-aulas")
app.include_router(configuracoes_fastapi.router, prefix="/api/configuracoes")
app.include_router(gestores_unidade_fastapi.router, prefix="/api/gestores-unidade")
app.include_router(dashboard_fastapi.router, prefix="/api/dashboard")
app.include_router(relatorios_fastapi.router, prefix="/api/relatorios")
app.include_router(sync_fastapi.router, prefix="/api/sync")


create_first_user.create_first_user()


# Arquivos enviados quando não há bucket configurado
upload_dir = storage.upload_dir()
try:
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(storage.URL_LOCAL, StaticFiles(directory=upload_dir), name="uploads")
except OSError as e:
    logger.error(f"Erro ao configurar o diretório de uploads: {e}")


@app.get("/", tags=["Root"])
async def root():
    return {
        "mensagem": "API Escola de Futebol - Sistema de Gestão",
        "documentacao": "/docs",
        "endpoints": [
            {"alunos": "/api/alunos"},
            {"professores": "/api/professores"},
            {"turmas": "/api/turmas"},
            {"filiais": "/api/filiais"},
            {"pagamentos": "/api/pagamentos"},
            {"presencas": "/api/presencas"},
            {"relatorios": "/api/relatorios/geral"},
            {"unidade": "/api/unidade/me"},
        ]
    }
