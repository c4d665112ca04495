# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para a entidade Turma.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from escola_futebol.database import Base


class Turma(Base):
    __tablename__ = "turmas"

    id = Column(Integer, primary_key=True, index=True)
    nome = Column(String(255), nullable=False)
    categoria = Column(String(100), nullable=False)  # Baby fut, Sub 07/08, ...
    horario = Column(String(100), nullable=True)
    dias_semana = Column(String(100), nullable=True)  # "Segunda,Quarta,Sexta"
    capacidade_maxima = Column(Integer, default=20)
    valor_mensalidade = Column(Float, nullable=True)
    professor_id = Column(Integer, ForeignKey("professores.id"), nullable=True)
    filial_id = Column(Integer, ForeignKey("filiais.id"), nullable=True)
    ativo = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    professor = relationship("Professor", back_populates="turmas")
    filial = relationship("Filial", back_populates="turmas")
    matriculas = relationship("Matricula", back_populates="turma", cascade="all, delete-orphan")
    presencas = relationship("Presenca", back_populates="turma", cascade="all, delete-orphan")
