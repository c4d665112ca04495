from typing import Optional

from pydantic import BaseModel, Field


class ComboAulasBase(BaseModel):
    nome: str = Field(..., min_length=1, max_length=100)
    descricao: Optional[str] = None
    preco: float = Field(..., ge=0)
    aulas_por_semana: int = Field(1, ge=1, le=7)
    duracao_meses: int = Field(1, ge=1)
    ativo: Optional[bool] = True


class ComboAulasCreate(ComboAulasBase):
    pass


class ComboAulasUpdate(BaseModel):
    nome: Optional[str] = Field(None, min_length=1, max_length=100)
    descricao: Optional[str] = None
    preco: Optional[float] = Field(None, ge=0)
    aulas_por_semana: Optional[int] = Field(None, ge=1, le=7)
    duracao_meses: Optional[int] = Field(None, ge=1)
    ativo: Optional[bool] = None


class ComboAulasRead(ComboAulasBase):
    id: int

    class Config:
        from_attributes = True
