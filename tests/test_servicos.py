"""Testes das regras compartilhadas (situação de pagamento e chamada)."""

from datetime import date
from types import SimpleNamespace

from escola_futebol.models.presenca import Presenca
from escola_futebol.schemas.presenca import PresencaItem
from escola_futebol.servicos import presencas_detalhadas, registrar_chamada, status_pagamento

HOJE = date(2024, 5, 15)


def _pagamentos(*meses):
    return [SimpleNamespace(mes_referencia=mes) for mes in meses]


def test_status_sem_pagamentos():
    assert status_pagamento([], HOJE) == {"em_dia": False, "ultimo_pagamento": None, "dias_atraso": None}


def test_status_em_dia_com_mes_corrente():
    assert status_pagamento(_pagamentos("2024-03", "2024-05"), HOJE) == {
        "em_dia": True, "ultimo_pagamento": "2024-05", "dias_atraso": 0,
    }


def test_status_pagamento_adiantado_conta_como_em_dia():
    assert status_pagamento(_pagamentos("2024-07"), HOJE)["em_dia"] is True


def test_status_atrasado_conta_a_partir_do_mes_seguinte():
    """Último mês pago 2024-03: vence em 01/04, então 44 dias em 15/05."""
    resultado = status_pagamento(_pagamentos("2024-02", "2024-03"), HOJE)
    assert resultado == {"em_dia": False, "ultimo_pagamento": "2024-03", "dias_atraso": 44}


def test_status_mes_anterior_no_inicio_do_mes():
    resultado = status_pagamento(_pagamentos("2024-04"), date(2024, 5, 1))
    assert resultado["em_dia"] is False
    assert resultado["dias_atraso"] == 0


def test_registrar_chamada_substitui_dia(db, turma, aluno):
    dia = date(2024, 5, 6)
    registrar_chamada(db, turma.id, dia, [PresencaItem(aluno_id=aluno.id, presente=False)])
    db.commit()
    registrar_chamada(db, turma.id, dia, [PresencaItem(aluno_id=aluno.id, presente=True, observacoes="Chegou atrasado")])
    db.commit()

    registros = db.query(Presenca).filter(Presenca.turma_id == turma.id).all()
    assert len(registros) == 1
    assert registros[0].presente is True
    assert registros[0].observacoes == "Chegou atrasado"


def test_presencas_detalhadas_filtros(db, turma, aluno):
    registrar_chamada(db, turma.id, date(2024, 5, 6), [PresencaItem(aluno_id=aluno.id, presente=True)])
    registrar_chamada(db, turma.id, date(2024, 5, 8), [PresencaItem(aluno_id=aluno.id, presente=False)])
    db.commit()

    todas = presencas_detalhadas(db)
    assert [p["data"] for p in todas] == [date(2024, 5, 8), date(2024, 5, 6)]
    assert todas[0]["professor_nome"] == "Carlos Treinador"
    assert todas[0]["filial_nome"] == "Unidade Centro"

    assert len(presencas_detalhadas(db, status="presente")) == 1
    assert len(presencas_detalhadas(db, status="ausente")) == 1
    assert len(presencas_detalhadas(db, busca="joão")) == 2
    assert presencas_detalhadas(db, busca="inexistente") == []
    assert len(presencas_detalhadas(db, data_inicio=date(2024, 5, 7))) == 1
    assert len(presencas_detalhadas(db, data_fim=date(2024, 5, 7))) == 1
