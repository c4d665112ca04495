"""Testes de pagamentos e da chamada (presenças)."""

from datetime import date


def _pagamento(aluno_id, **extra):
    dados = {
        "aluno_id": aluno_id,
        "valor": 150.0,
        "mes_referencia": "2024-05",
        "data_pagamento": "2024-05-05",
        "forma_pagamento": "PIX",
    }
    dados.update(extra)
    return dados


def test_registrar_pagamento(client, aluno):
    resposta = client.post("/api/pagamentos", json=_pagamento(aluno.id, observacoes="Mensalidade"))

    assert resposta.status_code == 201
    dados = resposta.json()
    assert dados["aluno"]["nome"] == "João Silva"
    assert dados["valor"] == 150.0


def test_pagamento_valida_campos(client, aluno):
    assert client.post("/api/pagamentos", json=_pagamento(aluno.id, valor=0)).status_code == 422
    assert client.post("/api/pagamentos", json=_pagamento(aluno.id, forma_pagamento="Cheque")).status_code == 422

    resposta = client.post("/api/pagamentos", json=_pagamento(aluno.id, mes_referencia="2024-13"))
    assert resposta.status_code == 422
    assert resposta.json()["erros"][0] == {
        "campo": "mes_referencia", "mensagem": "Mês de referência deve estar no formato AAAA-MM",
    }


def test_pagamento_de_aluno_inexistente(client):
    assert client.post("/api/pagamentos", json=_pagamento(999)).status_code == 404


def test_filtros_e_ordem(client, aluno):
    client.post("/api/pagamentos", json=_pagamento(aluno.id, mes_referencia="2024-04", data_pagamento="2024-04-03"))
    client.post("/api/pagamentos", json=_pagamento(aluno.id, forma_pagamento="Dinheiro"))

    todos = client.get("/api/pagamentos").json()
    assert [p["mes_referencia"] for p in todos] == ["2024-05", "2024-04"]

    assert len(client.get("/api/pagamentos", params={"mes_referencia": "2024-04"}).json()) == 1
    assert len(client.get("/api/pagamentos", params={"forma_pagamento": "Dinheiro"}).json()) == 1
    assert len(client.get("/api/pagamentos", params={"data_inicio": "2024-05-01"}).json()) == 1
    assert len(client.get("/api/pagamentos", params={"aluno_id": aluno.id}).json()) == 2


def test_atualizar_e_excluir_pagamento(client, aluno):
    pagamento = client.post("/api/pagamentos", json=_pagamento(aluno.id)).json()

    resposta = client.put(f"/api/pagamentos/{pagamento['id']}", json={"valor": 120.0, "forma_pagamento": None})
    assert resposta.status_code == 200
    assert resposta.json()["valor"] == 120.0
    assert resposta.json()["forma_pagamento"] == "PIX"

    assert client.delete(f"/api/pagamentos/{pagamento['id']}").status_code == 204
    assert client.get(f"/api/pagamentos/{pagamento['id']}").status_code == 404


def test_chamada_em_lote_substitui_a_anterior(client, turma, aluno):
    lote = {"turma_id": turma.id, "data": "2024-05-06", "presencas": [{"aluno_id": aluno.id, "presente": True}]}
    assert client.post("/api/presencas/lote", json=lote).status_code == 201

    lote["presencas"][0].update(presente=False, observacoes="Doente")
    resposta = client.post("/api/presencas/lote", json=lote)
    assert resposta.status_code == 201

    chamada = client.get("/api/presencas", params={"turma_id": turma.id, "data": "2024-05-06"}).json()
    assert len(chamada) == 1
    assert chamada[0]["presente"] is False
    assert chamada[0]["observacoes"] == "Doente"


def test_chamada_sem_alunos_e_recusada(client, turma):
    resposta = client.post("/api/presencas/lote", json={"turma_id": turma.id, "data": "2024-05-06", "presencas": []})
    assert resposta.status_code == 422


def test_chamada_com_aluno_ou_turma_inexistente(client, turma, aluno):
    sem_turma = {"turma_id": 999, "data": "2024-05-06", "presencas": [{"aluno_id": aluno.id}]}
    assert client.post("/api/presencas/lote", json=sem_turma).status_code == 404

    sem_aluno = {"turma_id": turma.id, "data": "2024-05-06", "presencas": [{"aluno_id": 999}]}
    resposta = client.post("/api/presencas/lote", json=sem_aluno)
    assert resposta.status_code == 404
    assert "999" in resposta.json()["detail"]


def test_presencas_detalhadas_e_exclusao(client, turma, aluno):
    client.post("/api/presencas/lote", json={
        "turma_id": turma.id, "data": str(date(2024, 5, 6)), "presencas": [{"aluno_id": aluno.id, "presente": True}],
    })

    detalhadas = client.get("/api/presencas/detalhadas", params={"status": "presente"}).json()
    assert len(detalhadas) == 1
    assert detalhadas[0]["aluno_nome"] == "João Silva"
    assert detalhadas[0]["turma_nome"] == turma.nome

    assert client.delete(f"/api/presencas/{detalhadas[0]['id']}").status_code == 204
    assert client.get("/api/presencas/detalhadas").json() == []
