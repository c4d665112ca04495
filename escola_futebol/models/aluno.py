from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from escola_futebol.database import Base


class Aluno(Base):
    __tablename__ = "alunos"

    id = Column(Integer, primary_key=True, index=True)
    nome = Column(String(255), nullable=False, index=True)
    cpf = Column(String(14), nullable=True, index=True)
    rg = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True)
    telefone = Column(String(20), nullable=True)
    data_nascimento = Column(Date, nullable=True)
    data_matricula = Column(Date, nullable=True)
    foto = Column(String(255), nullable=True)

    endereco = Column(Text, nullable=True)
    bairro = Column(String(100), nullable=True)
    cep = Column(String(10), nullable=True)
    cidade = Column(String(100), nullable=True)
    estado = Column(String(2), nullable=True)

    nome_responsavel = Column(String(255), nullable=True)
    telefone_responsavel = Column(String(20), nullable=True)
    email_responsavel = Column(String(255), nullable=True)

    filial_id = Column(Integer, ForeignKey("filiais.id"), nullable=True)
    ativo = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    filial = relationship("Filial", back_populates="alunos")
    # Os dependentes saem junto com o aluno
    matriculas = relationship("Matricula", back_populates="aluno", cascade="all, delete-orphan")
    pagamentos = relationship("Pagamento", back_populates="aluno", cascade="all, delete-orphan")
    presencas = relationship("Presenca", back_populates="aluno", cascade="all, delete-orphan")
