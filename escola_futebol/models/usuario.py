from sqlalchemy import Column, Integer, String
from escola_futebol.database import Base


class Usuario(Base):
    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    nome = Column(String(255))
    hashed_password = Column(String(255), nullable=True)
    # 'administrador', 'atendente' ou 'pendente'
    role = Column(String(30), nullable=False, default="pendente")
