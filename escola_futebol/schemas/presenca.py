from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class PresencaItem(BaseModel):
    aluno_id: int
    presente: bool = False
    observacoes: Optional[str] = None


class PresencaLote(BaseModel):
    """Chamada completa de uma aula: substitui a chamada anterior do mesmo dia."""
    turma_id: int
    data: date
    presencas: List[PresencaItem] = Field(..., min_length=1)


class PresencaRead(BaseModel):
    id: int
    aluno_id: int
    turma_id: int
    data: date
    presente: bool
    observacoes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PresencaDetalhada(PresencaRead):
    aluno_nome: Optional[str] = None
    turma_nome: Optional[str] = None
    professor_nome: Optional[str] = None
    filial_nome: Optional[str] = None
