from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SyncStatus(BaseModel):
    status: str  # sincronizado, pendente ou erro
    pendentes: int
    erros: int
    ultima_sincronizacao: Optional[datetime] = None


class SyncResultado(BaseModel):
    processadas: int
    falhas: int


class SincronizacaoRead(BaseModel):
    id: int
    filial_id: int
    tipo: str
    acao: str
    status: str
    tentativas: int = 0
    erro: Optional[str] = None
    created_at: Optional[datetime] = None
    processado_em: Optional[datetime] = None

    class Config:
        from_attributes = True
