# -*- coding: utf-8 -*-
"""
Schemas Pydantic para a entidade Aluno.
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from escola_futebol.schemas.filial import FilialResumo
from escola_futebol.schemas.validadores import normalizar_cpf, vazio_para_none


class AlunoResumo(BaseModel):
    id: int
    nome: str
    filial_id: Optional[int] = None

    class Config:
        from_attributes = True


class StatusPagamento(BaseModel):
    em_dia: bool = False
    ultimo_pagamento: Optional[str] = None  # mês de referência "AAAA-MM"
    dias_atraso: Optional[int] = None


class AlunoBase(BaseModel):
    nome: str = Field(..., min_length=1, max_length=255)
    cpf: Optional[str] = Field(None, max_length=14)
    rg: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    telefone: Optional[str] = Field(None, max_length=20)
    data_nascimento: Optional[date] = None
    data_matricula: Optional[date] = None
    endereco: Optional[str] = None
    bairro: Optional[str] = Field(None, max_length=100)
    cep: Optional[str] = Field(None, max_length=10)
    cidade: Optional[str] = Field(None, max_length=100)
    estado: Optional[str] = Field(None, max_length=2)
    nome_responsavel: Optional[str] = Field(None, max_length=255)
    telefone_responsavel: Optional[str] = Field(None, max_length=20)
    email_responsavel: Optional[EmailStr] = None
    filial_id: Optional[int] = None
    ativo: Optional[bool] = True

    @field_validator("email", "email_responsavel", "data_nascimento", "data_matricula", mode="before")
    @classmethod
    def empty_str_to_none(cls, v):
        return vazio_para_none(v)

    @field_validator("cpf", mode="before")
    @classmethod
    def cpf_valido(cls, v):
        return normalizar_cpf(v)


class AlunoCreate(AlunoBase):
    pass


class AlunoUpdate(BaseModel):
    nome: Optional[str] = Field(None, min_length=1, max_length=255)
    cpf: Optional[str] = Field(None, max_length=14)
    rg: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    telefone: Optional[str] = Field(None, max_length=20)
    data_nascimento: Optional[date] = None
    data_matricula: Optional[date] = None
    endereco: Optional[str] = None
    bairro: Optional[str] = Field(None, max_length=100)
    cep: Optional[str] = Field(None, max_length=10)
    cidade: Optional[str] = Field(None, max_length=100)
    estado: Optional[str] = Field(None, max_length=2)
    nome_responsavel: Optional[str] = Field(None, max_length=255)
    telefone_responsavel: Optional[str] = Field(None, max_length=20)
    email_responsavel: Optional[EmailStr] = None
    filial_id: Optional[int] = None
    ativo: Optional[bool] = None

    @field_validator("email", "email_responsavel", "data_nascimento", "data_matricula", mode="before")
    @classmethod
    def empty_str_to_none_update(cls, v):
        return vazio_para_none(v)

    @field_validator("cpf", mode="before")
    @classmethod
    def cpf_valido_update(cls, v):
        return normalizar_cpf(v)


class AlunoRead(AlunoBase):
    id: int
    foto: Optional[str] = None
    created_at: Optional[datetime] = None
    filial: Optional[FilialResumo] = None
    status_pagamento: Optional[StatusPagamento] = None

    class Config:
        from_attributes = True


class TurmaDoAluno(BaseModel):
    id: int
    nome: str
    categoria: str
    horario: Optional[str] = None
    professor_nome: Optional[str] = None


class MatriculaDoAluno(BaseModel):
    id: int
    data_matricula: Optional[date] = None
    ativo: bool
    turma: TurmaDoAluno


class AlunoDetalhe(AlunoRead):
    matriculas: List[MatriculaDoAluno] = []
