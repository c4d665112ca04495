# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para a entidade Pagamento.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, Date, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from escola_futebol.database import Base


class Pagamento(Base):
    __tablename__ = "pagamentos"

    id = Column(Integer, primary_key=True, index=True)
    aluno_id = Column(Integer, ForeignKey("alunos.id"), nullable=False)
    valor = Column(Float, nullable=False)
    mes_referencia = Column(String(7), nullable=False, index=True)  # "2024-01"
    data_pagamento = Column(Date, nullable=False)
    forma_pagamento = Column(String(50), nullable=False)  # PIX, Dinheiro, Cartão, Transferência
    observacoes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    aluno = relationship("Aluno", back_populates="pagamentos")
