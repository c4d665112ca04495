# -*- coding: utf-8 -*-
"""
Fila persistente de operações feitas no portal das unidades
que ainda precisam ser aplicadas na base central.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, ForeignKey
from escola_futebol.database import Base


class Sincronizacao(Base):
    __tablename__ = "sincronizacoes"

    id = Column(Integer, primary_key=True, index=True)
    filial_id = Column(Integer, ForeignKey("filiais.id"), nullable=False, index=True)
    tipo = Column(String(20), nullable=False)  # aluno, professor, pagamento, presenca
    acao = Column(String(10), nullable=False)  # create, update, delete
    dados = Column(JSON, nullable=False)
    status = Column(String(20), nullable=False, default="pendente", index=True)
    tentativas = Column(Integer, default=0)
    erro = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    processado_em = Column(DateTime, nullable=True)
