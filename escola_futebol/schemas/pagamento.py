# -*- coding: utf-8 -*-
"""
Schemas Pydantic para a entidade Pagamento.
"""
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from escola_futebol.constantes import FORMAS_PAGAMENTO
from escola_futebol.schemas.aluno import AlunoResumo
from escola_futebol.schemas.validadores import validar_mes_referencia


def _validar_forma(v):
    if v is not None and v not in FORMAS_PAGAMENTO:
        raise ValueError(f"Forma de pagamento inválida. Use uma de: {', '.join(FORMAS_PAGAMENTO)}")
    return v


class PagamentoBase(BaseModel):
    aluno_id: int
    valor: float = Field(..., gt=0)
    mes_referencia: str
    data_pagamento: date
    forma_pagamento: str
    observacoes: Optional[str] = None

    @field_validator("mes_referencia")
    @classmethod
    def mes_valido(cls, v):
        return validar_mes_referencia(v)

    @field_validator("forma_pagamento")
    @classmethod
    def forma_valida(cls, v):
        return _validar_forma(v)


class PagamentoCreate(PagamentoBase):
    pass


class PagamentoUpdate(BaseModel):
    valor: Optional[float] = Field(None, gt=0)
    mes_referencia: Optional[str] = None
    data_pagamento: Optional[date] = None
    forma_pagamento: Optional[str] = None
    observacoes: Optional[str] = None

    @field_validator("mes_referencia")
    @classmethod
    def mes_valido_update(cls, v):
        return validar_mes_referencia(v)

    @field_validator("forma_pagamento")
    @classmethod
    def forma_valida_update(cls, v):
        return _validar_forma(v)


class PagamentoRead(PagamentoBase):
    id: int
    created_at: Optional[datetime] = None
    aluno: Optional[AlunoResumo] = None

    class Config:
        from_attributes = True
