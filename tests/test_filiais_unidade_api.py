"""Testes das filiais e do portal da unidade."""

from datetime import date, timedelta

from escola_futebol.models.pagamento import Pagamento
from escola_futebol.models.sincronizacao import Sincronizacao

from conftest import SENHA


def test_criar_filial_com_login_do_portal(client, app_client):
    resposta = client.post("/api/filiais", json={
        "nome": "Unidade Sul",
        "endereco": "Av. Brasil, 100",
        "login_portal": "sul@escola.com",
        "senha_portal": "portal123",
    })
    assert resposta.status_code == 201
    assert "senha_portal_hash" not in resposta.json()

    login = app_client.post("/api/unidade/login", json={"email": "sul@escola.com", "senha": "portal123"})
    assert login.status_code == 200
    assert login.json()["filial"]["nome"] == "Unidade Sul"
    assert login.json()["gestor"] is None


def test_login_do_portal_duplicado(client):
    dados = {"nome": "A", "endereco": "Rua 1", "login_portal": "mesmo@escola.com"}
    assert client.post("/api/filiais", json=dados).status_code == 201
    assert client.post("/api/filiais", json=dict(dados, nome="B")).status_code == 400


def test_filiais_detalhadas(client, db, filial, aluno, professor, turma):
    db.add(Pagamento(aluno_id=aluno.id, valor=200, mes_referencia=date.today().strftime("%Y-%m"),
                     data_pagamento=date.today(), forma_pagamento="PIX"))
    # Fora do mês corrente: mês passado e pagamento pós-datado
    db.add(Pagamento(aluno_id=aluno.id, valor=90, mes_referencia="2000-01",
                     data_pagamento=date.today().replace(day=1) - timedelta(days=1), forma_pagamento="PIX"))
    db.add(Pagamento(aluno_id=aluno.id, valor=70, mes_referencia="2099-01",
                     data_pagamento=date.today() + timedelta(days=40), forma_pagamento="PIX"))
    db.commit()

    detalhadas = client.get("/api/filiais/detalhadas").json()

    assert len(detalhadas) == 1
    item = detalhadas[0]
    assert item["total_alunos"] == 1
    assert item["total_professores"] == 1
    assert item["total_turmas"] == 1
    assert item["receita_mensal"] == 200.0


def test_excluir_filial_apenas_desativa(client, filial, aluno):
    assert client.delete(f"/api/filiais/{filial.id}").status_code == 204

    assert client.get("/api/filiais").json() == []
    assert client.get(f"/api/filiais/{filial.id}").json()["ativa"] is False
    assert client.get(f"/api/alunos/{aluno.id}").status_code == 200


def test_busca_de_filiais(client, filial, outra_filial):
    assert [f["nome"] for f in client.get("/api/filiais", params={"busca": "norte"}).json()] == ["Unidade Norte"]


def test_login_do_gestor(unidade_client, gestor):
    resposta = unidade_client.get("/api/unidade/me")
    assert resposta.status_code == 200
    assert resposta.json()["gestor"]["email"] == gestor.email
    assert resposta.json()["filial"]["nome"] == "Unidade Centro"


def test_login_do_gestor_invalido(app_client, gestor):
    resposta = app_client.post("/api/unidade/login", json={"email": gestor.email, "senha": "errada"})
    assert resposta.status_code == 401


def test_portal_exige_login(app_client):
    assert app_client.get("/api/unidade/alunos").status_code == 401


def test_portal_ve_apenas_a_propria_filial(unidade_client, db, aluno, outra_filial):
    from escola_futebol.models.aluno import Aluno

    db.add(Aluno(nome="De Fora", filial_id=outra_filial.id))
    db.commit()

    alunos = unidade_client.get("/api/unidade/alunos").json()
    assert [a["nome"] for a in alunos] == ["João Silva"]


def test_cadastro_de_aluno_pelo_portal_entra_na_fila(unidade_client, db, filial):
    resposta = unidade_client.post("/api/unidade/alunos", json={"nome": "Novo Atleta", "filial_id": 999})

    assert resposta.status_code == 202
    assert resposta.json()["status"] == "pendente"
    assert unidade_client.get("/api/unidade/sync/status").json()["status"] == "pendente"

    operacao = db.query(Sincronizacao).one()
    assert operacao.filial_id == filial.id
    assert "filial_id" not in operacao.dados


def test_pagamento_pelo_portal_sincroniza_na_hora(unidade_client, aluno):
    resposta = unidade_client.post("/api/unidade/pagamentos", json={
        "aluno_id": aluno.id,
        "valor": 150.0,
        "mes_referencia": "2024-05",
        "data_pagamento": "2024-05-05",
        "forma_pagamento": "PIX",
    })

    assert resposta.status_code == 202
    assert resposta.json()["status"] == "sincronizado"
    assert len(unidade_client.get("/api/unidade/pagamentos").json()) == 1


def test_pagamento_de_aluno_de_outra_unidade(unidade_client, db, outra_filial):
    from escola_futebol.models.aluno import Aluno

    estranho = Aluno(nome="De Fora", filial_id=outra_filial.id)
    db.add(estranho)
    db.commit()

    resposta = unidade_client.post("/api/unidade/pagamentos", json={
        "aluno_id": estranho.id,
        "valor": 150.0,
        "mes_referencia": "2024-05",
        "data_pagamento": "2024-05-05",
        "forma_pagamento": "PIX",
    })
    assert resposta.status_code == 403
    assert resposta.json()["detail"] == "Aluno não pertence a esta unidade"


def test_presencas_pelo_portal(unidade_client, turma, aluno):
    resposta = unidade_client.post("/api/unidade/presencas", json={
        "turma_id": turma.id, "data": "2024-05-06", "presencas": [{"aluno_id": aluno.id, "presente": True}],
    })
    assert resposta.status_code == 202
    assert resposta.json()["tipo"] == "presenca"


def test_administrador_forca_sincronizacao(client, filial, gestor):
    # Mesmo navegador: sessão da administração e do portal
    client.post("/api/unidade/login", json={"email": gestor.email, "senha": SENHA})
    client.post("/api/unidade/professores", json={"nome": "Paula Goleiros"})

    assert client.get("/api/sync/status").json()["pendentes"] == 1
    assert client.post("/api/sync/force").json() == {"processadas": 1, "falhas": 0}
    assert client.get("/api/sync/status", params={"filial_id": filial.id}).json()["status"] == "sincronizado"
    assert [p["nome"] for p in client.get("/api/professores", params={"filial_id": filial.id}).json()] == ["Paula Goleiros"]


def test_cadastro_completo(app_client):
    dados = {
        "nome": "Rita Gestora",
        "email": "rita@leste.com",
        "senha": "senha123",
        "confirmar_senha": "senha123",
        "nome_unidade": "Unidade Leste",
        "endereco_unidade": "Rua Leste, 5",
    }
    resposta = app_client.post("/api/unidade/cadastro-completo", json=dados)

    assert resposta.status_code == 201
    assert resposta.json()["filial"]["nome"] == "Unidade Leste"
    assert resposta.json()["access_token"]
    assert app_client.get("/api/unidade/me").json()["gestor"]["nome"] == "Rita Gestora"

    repetido = app_client.post("/api/unidade/cadastro-completo", json=dados)
    assert repetido.status_code == 400


def test_cadastro_completo_senhas_diferentes(app_client):
    resposta = app_client.post("/api/unidade/cadastro-completo", json={
        "nome": "Rita",
        "email": "rita@leste.com",
        "senha": "senha123",
        "confirmar_senha": "outra123",
        "nome_unidade": "Unidade Leste",
        "endereco_unidade": "Rua Leste, 5",
    })
    assert resposta.status_code == 422
    assert resposta.json()["erros"][0]["mensagem"] == "As senhas não coincidem"


def test_gestores_gerenciados_pelo_administrador(client, filial):
    resposta = client.post("/api/gestores-unidade", json={
        "nome": "Novo Gestor", "email": "novo@centro.com", "senha": "senha123", "filial_id": filial.id,
    })
    assert resposta.status_code == 201
    gestor_id = resposta.json()["id"]

    assert len(client.get("/api/gestores-unidade", params={"filial_id": filial.id}).json()) == 1
    assert client.put(f"/api/gestores-unidade/{gestor_id}", json={"ativo": False}).json()["ativo"] is False
    assert client.delete(f"/api/gestores-unidade/{gestor_id}").status_code == 204
