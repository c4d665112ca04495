# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para documentos enviados (comunicados, contratos, ...).
O arquivo em si fica no armazenamento externo; aqui guardamos a URL.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from escola_futebol.database import Base


class Documento(Base):
    __tablename__ = "documentos"

    id = Column(Integer, primary_key=True, index=True)
    titulo = Column(String(255), nullable=False)
    descricao = Column(Text, nullable=True)
    categoria = Column(String(50), nullable=False, default="comunicado")
    arquivo_url = Column(String(500), nullable=False)
    tipo_arquivo = Column(String(100), nullable=True)
    tamanho_bytes = Column(Integer, nullable=True)
    nome_arquivo_original = Column(String(255), nullable=True)
    visibilidade = Column(String(20), nullable=False, default="todos")  # todos, filial, aluno
    filial_id = Column(Integer, ForeignKey("filiais.id"), nullable=True)
    aluno_id = Column(Integer, ForeignKey("alunos.id", ondelete="SET NULL"), nullable=True)
    upload_por_nome = Column(String(255), nullable=True)
    ativo = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
