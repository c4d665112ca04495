# -*- coding: utf-8 -*-
"""
Schemas Pydantic para a entidade Turma.
"""
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from escola_futebol.constantes import CATEGORIAS_TURMA
from escola_futebol.schemas.filial import FilialResumo
from escola_futebol.schemas.professor import ProfessorResumo
from escola_futebol.schemas.validadores import normalizar_dias_semana


def _validar_categoria(v):
    if v is not None and v not in CATEGORIAS_TURMA:
        raise ValueError(f"Categoria inválida. Use uma de: {', '.join(CATEGORIAS_TURMA)}")
    return v


class TurmaResumo(BaseModel):
    id: int
    nome: str
    categoria: str

    class Config:
        from_attributes = True


class TurmaBase(BaseModel):
    nome: str = Field(..., min_length=1, max_length=255)
    categoria: str = Field(..., max_length=100)
    horario: Optional[str] = Field(None, max_length=100)
    dias_semana: List[str] = []
    capacidade_maxima: Optional[int] = Field(20, gt=0)
    valor_mensalidade: Optional[float] = Field(None, ge=0)
    professor_id: Optional[int] = None
    filial_id: Optional[int] = None
    ativo: Optional[bool] = True

    @field_validator("dias_semana", mode="before")
    @classmethod
    def dias_validos(cls, v):
        return normalizar_dias_semana(v) or []

    @field_validator("categoria")
    @classmethod
    def categoria_valida(cls, v):
        return _validar_categoria(v)


class TurmaCreate(TurmaBase):
    pass


class TurmaUpdate(BaseModel):
    # Todos os campos são opcionais para permitir atualizações parciais
    nome: Optional[str] = Field(None, min_length=1, max_length=255)
    categoria: Optional[str] = Field(None, max_length=100)
    horario: Optional[str] = Field(None, max_length=100)
    dias_semana: Optional[List[str]] = None
    capacidade_maxima: Optional[int] = Field(None, gt=0)
    valor_mensalidade: Optional[float] = Field(None, ge=0)
    professor_id: Optional[int] = None
    filial_id: Optional[int] = None
    ativo: Optional[bool] = None

    @field_validator("dias_semana", mode="before")
    @classmethod
    def dias_validos_update(cls, v):
        return normalizar_dias_semana(v)

    @field_validator("categoria")
    @classmethod
    def categoria_valida_update(cls, v):
        return _validar_categoria(v)


class TurmaRead(BaseModel):
    id: int
    nome: str
    categoria: str
    horario: Optional[str] = None
    dias_semana: List[str] = []
    capacidade_maxima: Optional[int] = None
    valor_mensalidade: Optional[float] = None
    professor_id: Optional[int] = None
    filial_id: Optional[int] = None
    ativo: Optional[bool] = None
    professor: Optional[ProfessorResumo] = None
    filial: Optional[FilialResumo] = None
    total_alunos: int = 0

    @field_validator("dias_semana", mode="before")
    @classmethod
    def dias_do_banco(cls, v):
        if isinstance(v, str):
            return [d for d in v.split(",") if d]
        return v or []

    class Config:
        from_attributes = True
