# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para a entidade Professor.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from escola_futebol.database import Base


class Professor(Base):
    __tablename__ = "professores"

    id = Column(Integer, primary_key=True, index=True)
    nome = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=True)
    telefone = Column(String(20), nullable=True)
    especialidade = Column(String(100), nullable=True)
    salario = Column(Float, nullable=True)
    filial_id = Column(Integer, ForeignKey("filiais.id"), nullable=True)
    ativo = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    filial = relationship("Filial", back_populates="professores")
    turmas = relationship("Turma", back_populates="professor")
