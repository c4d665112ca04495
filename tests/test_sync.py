"""Testes da fila de sincronização das unidades."""

import pytest

from escola_futebol import sync
from escola_futebol.models.aluno import Aluno
from escola_futebol.models.pagamento import Pagamento
from escola_futebol.models.presenca import Presenca
from escola_futebol.models.sincronizacao import Sincronizacao


def test_adicionar_rejeita_tipo_invalido(db, filial):
    with pytest.raises(sync.SincronizacaoError):
        sync.adicionar(db, filial.id, "turma", "create", {})
    with pytest.raises(sync.SincronizacaoError):
        sync.adicionar(db, filial.id, "aluno", "apagar", {})


def test_aluno_fica_pendente_ate_processar(db, filial):
    operacao = sync.adicionar(db, filial.id, "aluno", "create", {"nome": "Pedro Alves", "cpf": "111.222.333-44"})

    assert operacao.status == "pendente"
    assert sync.status(db, filial.id)["status"] == "pendente"
    assert db.query(Aluno).count() == 0

    assert sync.processar_lote(db) == {"processadas": 1, "falhas": 0}

    aluno = db.query(Aluno).one()
    assert aluno.filial_id == filial.id
    assert aluno.cpf == "11122233344"
    db.refresh(operacao)
    assert operacao.status == "sincronizado"
    assert operacao.processado_em is not None
    resumo = sync.status(db, filial.id)
    assert resumo["status"] == "sincronizado"
    assert resumo["ultima_sincronizacao"] is not None


def test_pagamento_sincroniza_na_hora(db, filial, aluno):
    operacao = sync.adicionar(db, filial.id, "pagamento", "create", {
        "aluno_id": aluno.id,
        "valor": 150.0,
        "mes_referencia": "2024-05",
        "data_pagamento": "2024-05-05",
        "forma_pagamento": "PIX",
    })

    assert operacao.status == "sincronizado"
    assert db.query(Pagamento).filter(Pagamento.aluno_id == aluno.id).count() == 1


def test_operacoes_aplicadas_em_ordem(db, filial, aluno):
    sync.adicionar(db, filial.id, "aluno", "update", {"id": aluno.id, "nome": "Primeiro Nome"})
    sync.adicionar(db, filial.id, "aluno", "update", {"id": aluno.id, "nome": "Nome Final"})

    sync.processar_lote(db)

    db.refresh(aluno)
    assert aluno.nome == "Nome Final"


def test_unidade_nao_altera_registro_de_outra_filial(db, filial, outra_filial, aluno):
    operacao = sync.adicionar(db, outra_filial.id, "aluno", "delete", {"id": aluno.id})

    assert sync.processar_lote(db) == {"processadas": 0, "falhas": 1}

    db.refresh(operacao)
    assert operacao.status == "pendente"
    assert operacao.tentativas == 1
    assert "não encontrado" in operacao.erro
    assert db.query(Aluno).filter(Aluno.id == aluno.id).count() == 1


def test_operacao_vira_erro_apos_limite_de_tentativas(db, filial):
    operacao = sync.adicionar(db, filial.id, "aluno", "create", {"nome": ""})

    for _ in range(sync.MAX_TENTATIVAS):
        sync.processar_lote(db)

    db.refresh(operacao)
    assert operacao.tentativas == sync.MAX_TENTATIVAS
    assert operacao.status == "erro"
    assert sync.status(db, filial.id)["status"] == "erro"
    # Operações com erro saem da fila
    assert sync.processar_lote(db) == {"processadas": 0, "falhas": 0}


def test_falha_nao_bloqueia_demais_operacoes(db, filial):
    sync.adicionar(db, filial.id, "professor", "update", {"id": 999, "nome": "Ninguém"})
    sync.adicionar(db, filial.id, "professor", "create", {"nome": "Ana Preparadora"})

    assert sync.processar_lote(db) == {"processadas": 1, "falhas": 1}
    assert db.query(Sincronizacao).filter(Sincronizacao.status == "sincronizado").count() == 1


def test_presenca_da_unidade(db, filial, turma, aluno):
    sync.adicionar(db, filial.id, "presenca", "create", {
        "turma_id": turma.id,
        "data": "2024-05-06",
        "presencas": [{"aluno_id": aluno.id, "presente": True}],
    })

    assert sync.processar_lote(db)["processadas"] == 1
    assert db.query(Presenca).filter(Presenca.turma_id == turma.id).count() == 1


def test_status_filtra_por_filial(db, filial, outra_filial):
    sync.adicionar(db, outra_filial.id, "aluno", "create", {"nome": "Outro"})
    assert sync.status(db, filial.id) == {
        "status": "sincronizado", "pendentes": 0, "erros": 0, "ultima_sincronizacao": None,
    }
    assert sync.status(db)["pendentes"] == 1


def test_script_do_cron_drena_a_fila(tmp_path, monkeypatch):
    from sqlalchemy import create_engine
    from sqlalchemy.orm import sessionmaker

    from escola_futebol.database import criar_tabelas
    from escola_futebol.models.filial import Filial
    import processar_sincronizacoes

    url = f"sqlite:///{tmp_path / 'fila.db'}"
    engine = create_engine(url)
    criar_tabelas(engine)
    sessao = sessionmaker(bind=engine)()
    filial = Filial(nome="Unidade Sul", endereco="Rua C, 30")
    sessao.add(filial)
    sessao.commit()
    for nome in ("Ana", "Bia", "Caio"):
        sync.adicionar(sessao, filial.id, "aluno", "create", {"nome": nome})
    sessao.close()

    monkeypatch.setenv("DATABASE_URL", url)
    resultado = processar_sincronizacoes.processar_sincronizacoes(["--lote", "2"])

    assert resultado == {"processadas": 3, "falhas": 0}
    sessao = sessionmaker(bind=engine)()
    assert sessao.query(Aluno).count() == 3
    assert sync.status(sessao)["pendentes"] == 0
    sessao.close()
    engine.dispose()


def test_script_do_cron_sem_banco(monkeypatch):
    import processar_sincronizacoes

    monkeypatch.setattr(processar_sincronizacoes, "load_dotenv", lambda: None)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    assert processar_sincronizacoes.processar_sincronizacoes([]) is None
