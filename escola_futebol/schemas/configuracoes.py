from typing import Optional

from pydantic import BaseModel, Field, field_validator

from escola_futebol.schemas.validadores import validar_cor


class ConfiguracoesRead(BaseModel):
    id: int
    nome_escola: str
    logo_url: Optional[str] = None
    cor_primaria: str
    cor_secundaria: str
    cor_acento: str
    cor_fundo: str
    cor_texto: str

    class Config:
        from_attributes = True


class ConfiguracoesUpdate(BaseModel):
    nome_escola: Optional[str] = Field(None, min_length=1, max_length=255)
    cor_primaria: Optional[str] = None
    cor_secundaria: Optional[str] = None
    cor_acento: Optional[str] = None
    cor_fundo: Optional[str] = None
    cor_texto: Optional[str] = None

    @field_validator("cor_primaria", "cor_secundaria", "cor_acento", "cor_fundo", "cor_texto")
    @classmethod
    def cor_valida(cls, v):
        return validar_cor(v)
