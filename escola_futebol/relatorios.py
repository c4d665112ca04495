# -*- coding: utf-8 -*-
"""
Geração dos relatórios (geral, financeiro e de presenças) e das
respectivas exportações em CSV.

As funções recebem listas de dicionários já buscadas no banco, o que
permite testá-las sem sessão do SQLAlchemy.
"""
import io
import math
from datetime import date
from typing import Iterable, List, Optional, Tuple

import pandas as pd
from dateutil.relativedelta import relativedelta

from escola_futebol.constantes import FAIXAS_ETARIAS

# periodo -> (meses para trás do início, meses para trás do fim)
PERIODOS = {
    "current-month": (0, 0),
    "last-month": (1, 1),
    "last-3-months": (2, 0),
    "last-6-months": (5, 0),
}

COLUNAS_PAGAMENTO = ["aluno_id", "valor", "mes_referencia", "data_pagamento", "forma_pagamento"]


def periodo_intervalo(periodo: str, hoje: Optional[date] = None) -> Tuple[date, date]:
    """
    Converte o período escolhido na tela em (primeiro dia, último dia).
    Períodos desconhecidos valem como o mês atual.
    """
    hoje = hoje or date.today()
    meses_inicio, meses_fim = PERIODOS.get(periodo, PERIODOS["current-month"])
    primeiro_dia = hoje.replace(day=1)
    inicio = primeiro_dia - relativedelta(months=meses_inicio)
    fim = primeiro_dia - relativedelta(months=meses_fim) + relativedelta(months=1, days=-1)
    return inicio, fim


def _como_data(valor):
    if valor is None or isinstance(valor, date):
        return valor
    return date.fromisoformat(str(valor)[:10])


def calcular_idade(nascimento, hoje: Optional[date] = None) -> Optional[int]:
    nascimento = _como_data(nascimento)
    if nascimento is None:
        return None
    hoje = hoje or date.today()
    idade = hoje.year - nascimento.year
    if (hoje.month, hoje.day) < (nascimento.month, nascimento.day):
        idade -= 1
    return idade


def _pagamentos_no_periodo(pagamentos: Iterable[dict], inicio: date, fim: date) -> pd.DataFrame:
    df = pd.DataFrame(list(pagamentos), columns=COLUNAS_PAGAMENTO)
    if df.empty:
        return df
    df["data_pagamento"] = df["data_pagamento"].map(_como_data)
    df["valor"] = df["valor"].astype(float)
    return df[(df["data_pagamento"] >= inicio) & (df["data_pagamento"] <= fim)]


def formatar_moeda(valor: Optional[float]) -> str:
    """1234.5 -> 'R$ 1.234,50'; None -> ''"""
    if valor is None:
        return ""
    texto = f"{float(valor):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    return f"R$ {texto}"


def relatorio_geral(alunos, professores, turmas, pagamentos, inicio: date, fim: date,
                    hoje: Optional[date] = None) -> dict:
    df = _pagamentos_no_periodo(pagamentos, inicio, fim)
    total_receita = round(float(df["valor"].sum()), 2) if not df.empty else 0.0
    total_pagamentos = len(df)

    faixas = {rotulo: 0 for rotulo, _, _ in FAIXAS_ETARIAS}
    for aluno in alunos:
        idade = calcular_idade(aluno.get("data_nascimento"), hoje)
        if idade is None:
            continue
        for rotulo, minima, maxima in FAIXAS_ETARIAS:
            if idade >= minima and (maxima is None or idade <= maxima):
                faixas[rotulo] += 1
                break

    formas = {}
    if not df.empty:
        formas = {forma: int(qtd) for forma, qtd in df["forma_pagamento"].value_counts().items()}

    return {
        "periodo": {"inicio": inicio.isoformat(), "fim": fim.isoformat()},
        "visao_geral": {
            "total_alunos": sum(1 for a in alunos if a.get("ativo")),
            "total_professores": sum(1 for p in professores if p.get("ativo")),
            "total_turmas": sum(1 for t in turmas if t.get("ativo")),
            "total_receita": total_receita,
            "total_pagamentos": total_pagamentos,
            "ticket_medio": round(total_receita / total_pagamentos, 2) if total_pagamentos else 0.0,
        },
        "faixas_etarias": faixas,
        "formas_pagamento": formas,
    }


def relatorio_financeiro(pagamentos, inicio: date, fim: date) -> dict:
    df = _pagamentos_no_periodo(pagamentos, inicio, fim)
    resultado = {
        "periodo": {"inicio": inicio.isoformat(), "fim": fim.isoformat()},
        "receita_mensal": {},
        "receita_diaria": {},
        "receita_total": 0.0,
    }
    if df.empty:
        return resultado

    mensal = df.groupby("mes_referencia")["valor"].sum()
    diaria = df.groupby(df["data_pagamento"].map(lambda d: d.isoformat()))["valor"].sum()
    resultado["receita_mensal"] = {mes: round(float(v), 2) for mes, v in mensal.items()}
    resultado["receita_diaria"] = {dia: round(float(v), 2) for dia, v in diaria.items()}
    resultado["receita_total"] = round(float(df["valor"].sum()), 2)
    return resultado


def estatisticas_presenca(presencas: List[dict]) -> dict:
    total = len(presencas)
    presentes = sum(1 for p in presencas if p.get("presente"))
    # Arredondamento "meio para cima", como na tela
    percentual = math.floor(presentes * 100 / total + 0.5) if total else 0
    return {
        "total": total,
        "presentes": presentes,
        "ausentes": total - presentes,
        "percentual": percentual,
    }


# --- Exportação CSV ---
# O pandas cuida das aspas quando o campo tem vírgula, aspas ou quebra de linha.

def csv_geral(relatorio: dict) -> str:
    visao = relatorio["visao_geral"]
    metricas = pd.DataFrame(
        [
            ("Total de Alunos", visao["total_alunos"]),
            ("Total de Professores", visao["total_professores"]),
            ("Total de Turmas", visao["total_turmas"]),
            ("Receita Total", formatar_moeda(visao["total_receita"])),
            ("Total de Pagamentos", visao["total_pagamentos"]),
            ("Ticket Médio", formatar_moeda(visao["ticket_medio"])),
        ],
        columns=["Métrica", "Valor"],
    )
    faixas = pd.DataFrame(
        [(f"{faixa} anos", qtd) for faixa, qtd in relatorio["faixas_etarias"].items()],
        columns=["Faixa Etária", "Quantidade"],
    )

    buffer = io.StringIO()
    buffer.write("Relatório Geral\n\n")
    metricas.to_csv(buffer, index=False, lineterminator="\n")
    buffer.write("\nDistribuição por Idade\n")
    faixas.to_csv(buffer, index=False, lineterminator="\n")
    return buffer.getvalue()


def csv_financeiro(relatorio: dict) -> str:
    receitas = pd.DataFrame(
        [(mes, formatar_moeda(valor)) for mes, valor in relatorio["receita_mensal"].items()],
        columns=["Mês", "Receita"],
    )
    buffer = io.StringIO()
    buffer.write("Relatório Financeiro\n\n")
    receitas.to_csv(buffer, index=False, lineterminator="\n")
    return buffer.getvalue()


def csv_presencas(presencas: List[dict]) -> str:
    linhas = [
        {
            "Data": _como_data(p["data"]).strftime("%d/%m/%Y"),
            "Aluno": p.get("aluno_nome") or "",
            "Turma": p.get("turma_nome") or "",
            "Professor": p.get("professor_nome") or "N/A",
            "Status": "Presente" if p.get("presente") else "Ausente",
            "Observacoes": p.get("observacoes") or "",
        }
        for p in presencas
    ]
    df = pd.DataFrame(linhas, columns=["Data", "Aluno", "Turma", "Professor", "Status", "Observacoes"])
    return df.to_csv(index=False, lineterminator="\n")
