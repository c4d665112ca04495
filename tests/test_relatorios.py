"""Testes das funções de relatório e exportação CSV."""

from datetime import date

from escola_futebol import relatorios

HOJE = date(2024, 5, 15)


def _pagamento(valor, mes, dia, forma="PIX"):
    return {
        "aluno_id": 1,
        "valor": valor,
        "mes_referencia": mes,
        "data_pagamento": dia,
        "forma_pagamento": forma,
    }


def test_periodo_intervalo_mes_atual():
    """O mês atual vai do dia 1 ao último dia do mês."""
    assert relatorios.periodo_intervalo("current-month", HOJE) == (date(2024, 5, 1), date(2024, 5, 31))


def test_periodo_intervalo_mes_passado():
    assert relatorios.periodo_intervalo("last-month", HOJE) == (date(2024, 4, 1), date(2024, 4, 30))


def test_periodo_intervalo_ultimos_meses():
    assert relatorios.periodo_intervalo("last-3-months", HOJE) == (date(2024, 3, 1), date(2024, 5, 31))
    assert relatorios.periodo_intervalo("last-6-months", HOJE) == (date(2023, 12, 1), date(2024, 5, 31))


def test_periodo_desconhecido_vale_mes_atual():
    assert relatorios.periodo_intervalo("qualquer", HOJE) == relatorios.periodo_intervalo("current-month", HOJE)


def test_calcular_idade_antes_do_aniversario():
    assert relatorios.calcular_idade(date(2014, 6, 1), HOJE) == 9
    assert relatorios.calcular_idade("2014-05-15", HOJE) == 10
    assert relatorios.calcular_idade(None, HOJE) is None


def test_relatorio_geral_totais_e_faixas():
    """Somente pagamentos do período entram na receita."""
    alunos = [
        {"ativo": True, "data_nascimento": date(2016, 1, 1)},   # 8 anos
        {"ativo": True, "data_nascimento": date(2011, 1, 1)},   # 13 anos
        {"ativo": False, "data_nascimento": date(2000, 1, 1)},  # 24 anos
        {"ativo": True, "data_nascimento": None},
    ]
    pagamentos = [
        _pagamento(100, "2024-05", date(2024, 5, 2)),
        _pagamento(50, "2024-05", date(2024, 5, 10), "Dinheiro"),
        _pagamento(999, "2024-03", date(2024, 3, 10)),
    ]
    inicio, fim = relatorios.periodo_intervalo("current-month", HOJE)

    relatorio = relatorios.relatorio_geral(
        alunos, [{"ativo": True}], [{"ativo": True}, {"ativo": False}], pagamentos, inicio, fim, HOJE
    )

    visao = relatorio["visao_geral"]
    assert visao["total_alunos"] == 3
    assert visao["total_professores"] == 1
    assert visao["total_turmas"] == 1
    assert visao["total_receita"] == 150.0
    assert visao["total_pagamentos"] == 2
    assert visao["ticket_medio"] == 75.0
    assert relatorio["faixas_etarias"] == {"5-10": 1, "11-15": 1, "16-20": 0, "21+": 1}
    assert relatorio["formas_pagamento"] == {"PIX": 1, "Dinheiro": 1}


def test_relatorio_geral_sem_pagamentos():
    inicio, fim = relatorios.periodo_intervalo("current-month", HOJE)
    relatorio = relatorios.relatorio_geral([], [], [], [], inicio, fim, HOJE)
    assert relatorio["visao_geral"]["total_receita"] == 0.0
    assert relatorio["visao_geral"]["ticket_medio"] == 0.0
    assert relatorio["formas_pagamento"] == {}


def test_relatorio_financeiro_agrupa_por_mes():
    pagamentos = [
        _pagamento(100, "2024-04", date(2024, 4, 5)),
        _pagamento(80.5, "2024-05", date(2024, 5, 5)),
        _pagamento(19.5, "2024-05", date(2024, 5, 5)),
    ]
    inicio, fim = relatorios.periodo_intervalo("last-3-months", HOJE)

    relatorio = relatorios.relatorio_financeiro(pagamentos, inicio, fim)

    assert relatorio["receita_mensal"] == {"2024-04": 100.0, "2024-05": 100.0}
    assert relatorio["receita_diaria"] == {"2024-04-05": 100.0, "2024-05-05": 100.0}
    assert relatorio["receita_total"] == 200.0


def test_estatisticas_presenca_arredonda_para_cima():
    presencas = [{"presente": True}, {"presente": True}, {"presente": False}]
    assert relatorios.estatisticas_presenca(presencas) == {
        "total": 3, "presentes": 2, "ausentes": 1, "percentual": 67,
    }
    # 1/8 = 12,5% -> 13
    assert relatorios.estatisticas_presenca([{"presente": True}] + [{"presente": False}] * 7)["percentual"] == 13
    assert relatorios.estatisticas_presenca([])["percentual"] == 0


def test_formatar_moeda():
    assert relatorios.formatar_moeda(1234.5) == "R$ 1.234,50"
    assert relatorios.formatar_moeda(0) == "R$ 0,00"
    assert relatorios.formatar_moeda(None) == ""


def test_csv_geral():
    inicio, fim = relatorios.periodo_intervalo("current-month", HOJE)
    relatorio = relatorios.relatorio_geral(
        [{"ativo": True, "data_nascimento": date(2016, 1, 1)}], [], [],
        [_pagamento(1234.5, "2024-05", date(2024, 5, 2))], inicio, fim, HOJE,
    )

    conteudo = relatorios.csv_geral(relatorio)

    assert conteudo.startswith("Relatório Geral\n\nMétrica,Valor\n")
    assert "Total de Alunos,1\n" in conteudo
    assert 'Receita Total,"R$ 1.234,50"\n' in conteudo
    assert "\nDistribuição por Idade\nFaixa Etária,Quantidade\n" in conteudo
    assert "5-10 anos,1\n" in conteudo


def test_csv_financeiro():
    conteudo = relatorios.csv_financeiro({"receita_mensal": {"2024-05": 150.0}})
    assert conteudo == 'Relatório Financeiro\n\nMês,Receita\n2024-05,"R$ 150,00"\n'


def test_csv_presencas_escapa_campos():
    """Vírgulas e aspas nos campos são protegidas pelo CSV."""
    conteudo = relatorios.csv_presencas([
        {
            "data": date(2024, 5, 6),
            "aluno_nome": "Silva, João",
            "turma_nome": "Sub 09",
            "professor_nome": None,
            "presente": False,
            "observacoes": 'Disse "volto já"',
        }
    ])

    linhas = conteudo.splitlines()
    assert linhas[0] == "Data,Aluno,Turma,Professor,Status,Observacoes"
    assert linhas[1] == '06/05/2024,"Silva, João",Sub 09,N/A,Ausente,"Disse ""volto já"""'
