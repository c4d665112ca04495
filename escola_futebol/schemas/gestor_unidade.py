# -*- coding: utf-8 -*-
"""
Schemas Pydantic para gestores de unidade e para o portal da unidade.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, model_validator

from escola_futebol.schemas.filial import FilialResumo


class GestorUnidadeCreate(BaseModel):
    nome: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    senha: str = Field(..., min_length=6)
    telefone: Optional[str] = Field(None, max_length=20)
    filial_id: int
    ativo: Optional[bool] = True


class GestorUnidadeUpdate(BaseModel):
    nome: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    senha: Optional[str] = Field(None, min_length=6)
    telefone: Optional[str] = Field(None, max_length=20)
    filial_id: Optional[int] = None
    ativo: Optional[bool] = None


class GestorUnidadeRead(BaseModel):
    id: int
    nome: str
    email: str
    telefone: Optional[str] = None
    filial_id: int
    ativo: bool
    ultimo_login: Optional[datetime] = None

    class Config:
        from_attributes = True


class CadastroCompleto(BaseModel):
    """Cadastro de uma nova unidade junto com o seu primeiro gestor."""
    nome: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    senha: str = Field(..., min_length=6)
    confirmar_senha: str = Field(..., min_length=6)
    telefone: Optional[str] = Field(None, max_length=20)
    nome_unidade: str = Field(..., min_length=1, max_length=100)
    endereco_unidade: str = Field(..., min_length=1)
    telefone_unidade: Optional[str] = Field(None, max_length=20)
    responsavel_unidade: Optional[str] = Field(None, max_length=100)

    @model_validator(mode="after")
    def senhas_conferem(self):
        if self.senha != self.confirmar_senha:
            raise ValueError("As senhas não coincidem")
        return self


class SessaoUnidadeRead(BaseModel):
    gestor: Optional[GestorUnidadeRead] = None
    filial: FilialResumo
    access_token: Optional[str] = None
