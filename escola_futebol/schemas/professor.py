# -*- coding: utf-8 -*-
"""
Schemas Pydantic para a entidade Professor.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from escola_futebol.schemas.filial import FilialResumo
from escola_futebol.schemas.validadores import vazio_para_none


class ProfessorResumo(BaseModel):
    id: int
    nome: str
    especialidade: Optional[str] = None

    class Config:
        from_attributes = True


class ProfessorBase(BaseModel):
    nome: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    telefone: Optional[str] = Field(None, max_length=20)
    especialidade: Optional[str] = Field(None, max_length=100)
    salario: Optional[float] = Field(None, ge=0)
    filial_id: Optional[int] = None
    ativo: Optional[bool] = True

    @field_validator("email", "salario", mode="before")
    @classmethod
    def empty_str_to_none(cls, v):
        return vazio_para_none(v)


class ProfessorCreate(ProfessorBase):
    pass


class ProfessorUpdate(BaseModel):
    nome: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    telefone: Optional[str] = Field(None, max_length=20)
    especialidade: Optional[str] = Field(None, max_length=100)
    salario: Optional[float] = Field(None, ge=0)
    filial_id: Optional[int] = None
    ativo: Optional[bool] = None

    @field_validator("email", "salario", mode="before")
    @classmethod
    def empty_str_to_none_update(cls, v):
        return vazio_para_none(v)


class ProfessorRead(ProfessorBase):
    id: int
    created_at: Optional[datetime] = None
    filial: Optional[FilialResumo] = None

    class Config:
        from_attributes = True
