# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para as configurações visuais do sistema.
Existe apenas uma linha nesta tabela.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from escola_futebol.database import Base


class Configuracoes(Base):
    __tablename__ = "configuracoes"

    id = Column(Integer, primary_key=True, index=True)
    nome_escola = Column(String(255), nullable=False, default="Escola de Futebol")
    logo_url = Column(String(500), nullable=True)
    cor_primaria = Column(String(7), nullable=False, default="#16a34a")
    cor_secundaria = Column(String(7), nullable=False, default="#15803d")
    cor_acento = Column(String(7), nullable=False, default="#facc15")
    cor_fundo = Column(String(7), nullable=False, default="#ffffff")
    cor_texto = Column(String(7), nullable=False, default="#111827")
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
