# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para a entidade Filial (unidade da franquia).
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime
from sqlalchemy.orm import relationship
from escola_futebol.database import Base


class Filial(Base):
    __tablename__ = "filiais"

    id = Column(Integer, primary_key=True, index=True)
    nome = Column(String(100), nullable=False)
    endereco = Column(Text, nullable=False)
    cidade = Column(String(100), nullable=True)
    telefone = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True)
    responsavel = Column(String(100), nullable=True)

    # Credenciais do portal da unidade
    login_portal = Column(String(100), unique=True, index=True, nullable=True)
    senha_portal_hash = Column(String(255), nullable=True)

    ativa = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    alunos = relationship("Aluno", back_populates="filial")
    professores = relationship("Professor", back_populates="filial")
    turmas = relationship("Turma", back_populates="filial")
    gestores = relationship("GestorUnidade", back_populates="filial")
