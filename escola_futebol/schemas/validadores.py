# -*- coding: utf-8 -*-
"""
Funções de validação compartilhadas pelos schemas Pydantic.
"""
import re

from escola_futebol.constantes import DIAS_SEMANA

MES_REFERENCIA_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")
COR_HEX_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


def vazio_para_none(v):
    """Converte strings vazias para None antes da validação principal."""
    if isinstance(v, str) and v.strip() == "":
        return None
    return v


def normalizar_cpf(v):
    v = vazio_para_none(v)
    if v is None:
        return None
    digitos = re.sub(r"[^0-9]", "", v)
    if len(digitos) != 11:
        raise ValueError("CPF deve ter 11 dígitos")
    return digitos


def normalizar_dias_semana(v):
    """Aceita lista ou string separada por vírgulas; devolve lista."""
    v = vazio_para_none(v)
    if v is None:
        return None
    if isinstance(v, str):
        v = [d.strip() for d in v.split(",") if d.strip()]
    invalidos = [d for d in v if d not in DIAS_SEMANA]
    if invalidos:
        raise ValueError(f"Dia(s) da semana inválido(s): {', '.join(invalidos)}")
    # Mantém a ordem da semana e remove repetidos
    return [d for d in DIAS_SEMANA if d in v]


def validar_mes_referencia(v):
    if v is not None and not MES_REFERENCIA_RE.match(v):
        raise ValueError("Mês de referência deve estar no formato AAAA-MM")
    return v


def validar_cor(v):
    if v is not None and not COR_HEX_RE.match(v):
        raise ValueError("Cor deve estar no formato #RRGGBB")
    return v
