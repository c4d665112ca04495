"""Fixtures compartilhadas para os testes."""

import os
import tempfile

# Precisa vir antes de importar a aplicação
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="escola_uploads_")
for variavel in ("ADMIN_EMAIL", "ADMIN_PASSWORD", "S3_BUCKET_NAME", "S3_ENDPOINT_URL"):
    os.environ.pop(variavel, None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import main
from escola_futebol import auth
from escola_futebol.database import Base, get_db
from escola_futebol.models.aluno import Aluno
from escola_futebol.models.filial import Filial
from escola_futebol.models.gestor_unidade import GestorUnidade
from escola_futebol.models.professor import Professor
from escola_futebol.models.turma import Turma
from escola_futebol.models.usuario import Usuario

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

SENHA = "segredo123"


@pytest.fixture()
def db():
    """Sessão num banco em memória recriado a cada teste."""
    Base.metadata.create_all(bind=engine)
    sessao = TestingSessionLocal()
    try:
        yield sessao
    finally:
        sessao.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def app_client(db):
    """Cliente da API sem autenticação."""
    def override_get_db():
        yield db

    main.app.dependency_overrides[get_db] = override_get_db
    with TestClient(main.app) as cliente:
        yield cliente
    main.app.dependency_overrides.clear()


@pytest.fixture()
def admin(db):
    usuario = Usuario(
        username="admin",
        email="admin@escola.com",
        nome="Administrador",
        hashed_password=auth.get_password_hash(SENHA),
        role="administrador",
    )
    db.add(usuario)
    db.commit()
    db.refresh(usuario)
    return usuario


@pytest.fixture()
def client(app_client, admin):
    """Cliente da API já autenticado como administrador (sessão em cookie)."""
    resposta = app_client.post("/api/login", json={"email": admin.email, "senha": SENHA})
    assert resposta.status_code == 200
    return app_client


@pytest.fixture()
def filial(db):
    registro = Filial(nome="Unidade Centro", endereco="Rua A, 10", cidade="Curitiba", responsavel="Marta")
    db.add(registro)
    db.commit()
    db.refresh(registro)
    return registro


@pytest.fixture()
def outra_filial(db):
    registro = Filial(nome="Unidade Norte", endereco="Rua B, 20", cidade="Curitiba")
    db.add(registro)
    db.commit()
    db.refresh(registro)
    return registro


@pytest.fixture()
def professor(db, filial):
    registro = Professor(nome="Carlos Treinador", email="carlos@escola.com", filial_id=filial.id)
    db.add(registro)
    db.commit()
    db.refresh(registro)
    return registro


@pytest.fixture()
def turma(db, filial, professor):
    registro = Turma(
        nome="Sub 09 Manhã",
        categoria="Sub 09/10",
        horario="08:00",
        dias_semana="Segunda,Quarta",
        capacidade_maxima=2,
        valor_mensalidade=150.0,
        professor_id=professor.id,
        filial_id=filial.id,
    )
    db.add(registro)
    db.commit()
    db.refresh(registro)
    return registro


@pytest.fixture()
def aluno(db, filial):
    registro = Aluno(nome="João Silva", cpf="12345678901", telefone="41999990000", filial_id=filial.id)
    db.add(registro)
    db.commit()
    db.refresh(registro)
    return registro


@pytest.fixture()
def gestor(db, filial):
    registro = GestorUnidade(
        nome="Gestora Centro",
        email="gestora@centro.com",
        senha_hash=auth.get_password_hash(SENHA),
        filial_id=filial.id,
    )
    db.add(registro)
    db.commit()
    db.refresh(registro)
    return registro


@pytest.fixture()
def unidade_client(app_client, gestor):
    """Cliente autenticado no portal da unidade."""
    resposta = app_client.post("/api/unidade/login", json={"email": gestor.email, "senha": SENHA})
    assert resposta.status_code == 200
    return app_client
