# -*- coding: utf-8 -*-
"""
Banco de dados da API da escola de futebol (SQLAlchemy).
"""

import importlib
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./escola_futebol.db")

# Provedores como o Render ainda entregam o prefixo antigo
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL,
    connect_args=connect_args,
    pool_pre_ping=True,
    pool_recycle=3600
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# Módulos de escola_futebol.models, na ordem das chaves estrangeiras
MODELOS = (
    "usuario", "filial", "aluno", "professor", "turma", "matricula", "pagamento", "presenca",
    "documento", "combo_aulas", "configuracoes", "gestor_unidade", "sincronizacao",
)


def criar_tabelas(bind=None):
    """Registra todos os modelos no ``Base`` e cria as tabelas que faltam."""
    for nome in MODELOS:
        importlib.import_module(f"escola_futebol.models.{nome}")
    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
