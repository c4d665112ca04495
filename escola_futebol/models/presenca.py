from datetime import datetime
from sqlalchemy import Column, Integer, Boolean, Date, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from escola_futebol.database import Base


class Presenca(Base):
    __tablename__ = "presencas"

    id = Column(Integer, primary_key=True, index=True)
    aluno_id = Column(Integer, ForeignKey("alunos.id"), nullable=False)
    turma_id = Column(Integer, ForeignKey("turmas.id"), nullable=False)
    data = Column(Date, nullable=False, index=True)
    presente = Column(Boolean, default=False)
    observacoes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    aluno = relationship("Aluno", back_populates="presencas")
    turma = relationship("Turma", back_populates="presencas")
