"""Testes do dashboard, relatórios, configurações, documentos e combos."""

import io
from datetime import date

from PIL import Image

from escola_futebol.models.pagamento import Pagamento


def _pagar(db, aluno, valor, mes, dia, forma="PIX"):
    db.add(Pagamento(aluno_id=aluno.id, valor=valor, mes_referencia=mes, data_pagamento=dia, forma_pagamento=forma))
    db.commit()


def test_metricas_do_dashboard(client, db, aluno, professor, turma):
    hoje = date.today()
    _pagar(db, aluno, 150, hoje.strftime("%Y-%m"), hoje)
    _pagar(db, aluno, 99, "2020-01", date(2020, 1, 5))

    metricas = client.get("/api/dashboard/metrics").json()

    assert metricas == {"total_alunos": 1, "total_professores": 1, "total_turmas": 1, "receita_mensal": 150.0}


def test_relatorio_geral(client, db, aluno):
    hoje = date.today()
    _pagar(db, aluno, 100, hoje.strftime("%Y-%m"), hoje)

    relatorio = client.get("/api/relatorios/geral", params={"periodo": "current-month"}).json()

    assert relatorio["visao_geral"]["total_alunos"] == 1
    assert relatorio["visao_geral"]["total_receita"] == 100.0
    assert relatorio["formas_pagamento"] == {"PIX": 1}


def test_relatorio_geral_csv(client, aluno):
    resposta = client.get("/api/relatorios/geral.csv")

    assert resposta.status_code == 200
    assert resposta.headers["content-type"].startswith("text/csv")
    assert "attachment; filename=\"relatorio_geral_" in resposta.headers["content-disposition"]
    assert resposta.text.startswith("Relatório Geral")


def test_relatorio_financeiro(client, db, aluno):
    hoje = date.today()
    mes = hoje.strftime("%Y-%m")
    _pagar(db, aluno, 80, mes, hoje)
    _pagar(db, aluno, 20, mes, hoje, "Dinheiro")

    relatorio = client.get("/api/relatorios/financeiro").json()
    assert relatorio["receita_mensal"] == {mes: 100.0}

    csv = client.get("/api/relatorios/financeiro.csv").text
    assert f'{mes},"R$ 100,00"' in csv


def test_relatorio_de_presencas(client, turma, aluno):
    for dia, presente in (("2024-05-06", True), ("2024-05-08", False)):
        client.post("/api/presencas/lote", json={
            "turma_id": turma.id, "data": dia, "presencas": [{"aluno_id": aluno.id, "presente": presente}],
        })

    dados = client.get("/api/relatorios/presencas", params={"status": "ausente"}).json()

    # Estatísticas sempre sobre todas as presenças
    assert dados["estatisticas"] == {"total": 2, "presentes": 1, "ausentes": 1, "percentual": 50}
    assert len(dados["presencas"]) == 1
    assert dados["presencas"][0]["presente"] is False

    csv = client.get("/api/relatorios/presencas.csv", params={"turma_id": turma.id}).text
    linhas = csv.strip().split("\n")
    assert linhas[0] == "Data,Aluno,Turma,Professor,Status,Observacoes"
    assert linhas[1].startswith("08/05/2024,João Silva,")
    assert len(linhas) == 3


def test_configuracoes_padrao_e_atualizacao(client):
    padrao = client.get("/api/configuracoes").json()
    assert padrao["nome_escola"] == "Escola de Futebol"
    assert padrao["cor_primaria"] == "#16a34a"

    resposta = client.put("/api/configuracoes", json={"nome_escola": "Craques do Amanhã", "cor_primaria": "#0000ff"})
    assert resposta.status_code == 200
    assert resposta.json()["nome_escola"] == "Craques do Amanhã"
    assert resposta.json()["cor_secundaria"] == padrao["cor_secundaria"]


def test_cor_invalida(client):
    resposta = client.put("/api/configuracoes", json={"cor_fundo": "azul"})
    assert resposta.status_code == 422
    assert resposta.json()["erros"][0]["campo"] == "cor_fundo"


def test_upload_do_logo(client):
    imagem = io.BytesIO()
    Image.new("RGBA", (1200, 400), (0, 128, 0, 255)).save(imagem, format="PNG")
    imagem.seek(0)

    resposta = client.post("/api/configuracoes/logo", files={"logo": ("logo.png", imagem, "image/png")})

    assert resposta.status_code == 200
    assert resposta.json()["logo_url"].startswith("/uploads/")


def test_documentos(client, filial):
    resposta = client.post(
        "/api/documentos",
        data={"titulo": "Regulamento 2024", "categoria": "regulamento"},
        files={"arquivo": ("regulamento.pdf", io.BytesIO(b"%PDF-1.4 conteudo"), "application/pdf")},
    )
    assert resposta.status_code == 201
    documento = resposta.json()
    assert documento["upload_por_nome"] == "Administrador"
    assert documento["tamanho_bytes"] == len(b"%PDF-1.4 conteudo")

    assert len(client.get("/api/documentos", params={"categoria": "regulamento"}).json()) == 1
    assert client.delete(f"/api/documentos/{documento['id']}").status_code == 204
    assert client.get("/api/documentos").json() == []


def test_documento_com_visibilidade_invalida(client):
    resposta = client.post(
        "/api/documentos",
        data={"titulo": "Aviso", "visibilidade": "filial"},
        files={"arquivo": ("aviso.txt", io.BytesIO(b"aviso"), "text/plain")},
    )
    assert resposta.status_code == 400
    assert resposta.json()["detail"] == "Informe a filial do documento."


def test_combos_de_aulas(client):
    resposta = client.post("/api/combos-aulas", json={"nome": "2x por semana", "preco": 180.0, "aulas_por_semana": 2})
    assert resposta.status_code == 201
    combo_id = resposta.json()["id"]

    assert client.put(f"/api/combos-aulas/{combo_id}", json={"preco": 200.0}).json()["preco"] == 200.0
    assert client.delete(f"/api/combos-aulas/{combo_id}").status_code == 204
    assert client.get("/api/combos-aulas").json() == []


def test_raiz_da_api(app_client):
    assert app_client.get("/").json()["mensagem"].startswith("API Escola de Futebol")
