# -*- coding: utf-8 -*-
"""
Schemas Pydantic para a entidade Filial.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from escola_futebol.schemas.validadores import vazio_para_none


class FilialResumo(BaseModel):
    id: int
    nome: str

    class Config:
        from_attributes = True


class FilialBase(BaseModel):
    nome: str = Field(..., min_length=1, max_length=100)
    endereco: str = Field(..., min_length=1)
    cidade: Optional[str] = Field(None, max_length=100)
    telefone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    responsavel: Optional[str] = Field(None, max_length=100)
    login_portal: Optional[str] = Field(None, max_length=100)
    ativa: Optional[bool] = True

    @field_validator("email", "login_portal", "cidade", "telefone", "responsavel", mode="before")
    @classmethod
    def empty_str_to_none(cls, v):
        return vazio_para_none(v)


class FilialCreate(FilialBase):
    # Senha do portal da unidade (gravada apenas como hash)
    senha_portal: Optional[str] = Field(None, min_length=6)


class FilialUpdate(BaseModel):
    nome: Optional[str] = Field(None, min_length=1, max_length=100)
    endereco: Optional[str] = Field(None, min_length=1)
    cidade: Optional[str] = Field(None, max_length=100)
    telefone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    responsavel: Optional[str] = Field(None, max_length=100)
    login_portal: Optional[str] = Field(None, max_length=100)
    senha_portal: Optional[str] = Field(None, min_length=6)
    ativa: Optional[bool] = None

    @field_validator("email", "login_portal", mode="before")
    @classmethod
    def empty_str_to_none_update(cls, v):
        return vazio_para_none(v)


class FilialRead(FilialBase):
    id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FilialDetalhada(FilialRead):
    total_alunos: int = 0
    total_professores: int = 0
    total_turmas: int = 0
    receita_mensal: float = 0.0
