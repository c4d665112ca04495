"""Testes de login, sessão e permissões da API."""

import create_first_user
from escola_futebol import auth
from escola_futebol.models.usuario import Usuario

from conftest import SENHA, TestingSessionLocal


def test_login_devolve_token_e_dados_do_usuario(app_client, admin):
    resposta = app_client.post("/api/login", json={"email": admin.email, "senha": SENHA})

    assert resposta.status_code == 200
    dados = resposta.json()
    assert dados["token_type"] == "bearer"
    assert dados["access_token"]
    assert dados["user_info"]["email"] == admin.email
    assert dados["user_info"]["role"] == "administrador"


def test_login_com_senha_errada(app_client, admin):
    resposta = app_client.post("/api/login", json={"email": admin.email, "senha": "errada"})
    assert resposta.status_code == 401
    assert resposta.json()["detail"] == "Email ou senha inválidos"


def test_rotas_exigem_autenticacao(app_client):
    assert app_client.get("/api/alunos").status_code == 401
    assert app_client.get("/api/dashboard/metrics").status_code == 401


def test_sessao_do_navegador(client, admin):
    resposta = client.get("/api/auth/user")
    assert resposta.status_code == 200
    assert resposta.json()["username"] == admin.username


def test_logout_encerra_sessao(client):
    assert client.post("/api/logout").status_code == 200
    assert client.get("/api/auth/user").status_code == 401


def test_token_bearer(app_client, admin):
    token = auth.create_access_token({"sub": admin.email, "tipo": "admin"})
    resposta = app_client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert resposta.status_code == 200


def test_token_invalido(app_client):
    resposta = app_client.get("/api/auth/user", headers={"Authorization": "Bearer nao-e-um-token"})
    assert resposta.status_code == 401


def test_token_da_unidade_nao_acessa_administracao(app_client, admin):
    token = auth.create_access_token({"sub": admin.email, "tipo": "unidade", "filial_id": 1})
    resposta = app_client.get("/api/alunos", headers={"Authorization": f"Bearer {token}"})
    assert resposta.status_code == 401


def test_usuario_pendente_bloqueado(app_client, db):
    db.add(Usuario(username="novo", email="novo@escola.com", hashed_password=auth.get_password_hash(SENHA), role="pendente"))
    db.commit()
    app_client.post("/api/login", json={"email": "novo@escola.com", "senha": SENHA})

    resposta = app_client.get("/api/alunos")
    assert resposta.status_code == 403


def test_atendente_nao_gerencia_usuarios(app_client, db):
    db.add(Usuario(username="atende", email="atende@escola.com", hashed_password=auth.get_password_hash(SENHA), role="atendente"))
    db.commit()
    app_client.post("/api/login", json={"email": "atende@escola.com", "senha": SENHA})

    assert app_client.get("/api/alunos").status_code == 200
    assert app_client.get("/api/usuarios").status_code == 403


def test_crud_usuarios(client):
    resposta = client.post("/api/usuarios", json={
        "email": "secretaria@escola.com", "username": "secretaria", "password": "senha123", "role": "atendente",
    })
    assert resposta.status_code == 201
    usuario_id = resposta.json()["id"]

    duplicado = client.post("/api/usuarios", json={
        "email": "secretaria@escola.com", "username": "outra", "password": "senha123",
    })
    assert duplicado.status_code == 400
    assert duplicado.json()["detail"] == "Email já registrado"

    atualizado = client.put(f"/api/usuarios/{usuario_id}", json={"nome": "Secretaria"})
    assert atualizado.status_code == 200
    assert atualizado.json()["nome"] == "Secretaria"

    assert client.delete(f"/api/usuarios/{usuario_id}").status_code == 204
    assert client.get(f"/api/usuarios/{usuario_id}").status_code == 404


def test_create_first_user(db, monkeypatch):
    monkeypatch.setattr(create_first_user, "SessionLocal", TestingSessionLocal)
    monkeypatch.delenv("ADMIN_EMAIL", raising=False)
    assert create_first_user.create_first_user() is None

    monkeypatch.setenv("ADMIN_EMAIL", "dono@escola.com")
    monkeypatch.setenv("ADMIN_PASSWORD", SENHA)
    create_first_user.create_first_user()
    create_first_user.create_first_user()

    usuarios = db.query(Usuario).filter(Usuario.email == "dono@escola.com").all()
    assert len(usuarios) == 1
    assert usuarios[0].role == "administrador"
    assert auth.verify_password(SENHA, usuarios[0].hashed_password)
