# -*- coding: utf-8 -*-
"""
Sincronização das unidades com a matriz.

As operações feitas no portal da unidade entram numa fila persistente
(tabela ``sincronizacoes``) e são aplicadas na base central em lotes, na
ordem em que chegaram. Pagamentos disparam o processamento na hora; o
restante é drenado pelo script ``processar_sincronizacoes.py`` (cron) ou
pelo endpoint ``POST /api/sync/force``.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from escola_futebol.models.aluno import Aluno
from escola_futebol.models.pagamento import Pagamento
from escola_futebol.models.professor import Professor
from escola_futebol.models.sincronizacao import Sincronizacao
from escola_futebol.models.turma import Turma
from escola_futebol.schemas.aluno import AlunoCreate, AlunoUpdate
from escola_futebol.schemas.pagamento import PagamentoCreate, PagamentoUpdate
from escola_futebol.schemas.presenca import PresencaLote
from escola_futebol.schemas.professor import ProfessorCreate, ProfessorUpdate
from escola_futebol.servicos import registrar_chamada

logger = logging.getLogger(__name__)

MAX_TENTATIVAS = 5
TAMANHO_LOTE = 100

TIPOS = ("aluno", "professor", "pagamento", "presenca")
ACOES = ("create", "update", "delete")

# tipo -> (modelo, schema de criação, schema de atualização)
_ENTIDADES = {
    "aluno": (Aluno, AlunoCreate, AlunoUpdate),
    "professor": (Professor, ProfessorCreate, ProfessorUpdate),
    "pagamento": (Pagamento, PagamentoCreate, PagamentoUpdate),
}


class SincronizacaoError(ValueError):
    pass


def adicionar(db: Session, filial_id: int, tipo: str, acao: str, dados: dict) -> Sincronizacao:
    """
    Coloca uma operação na fila. ``dados`` precisa ser serializável em JSON.
    """
    if tipo not in TIPOS:
        raise SincronizacaoError(f"Tipo de sincronização inválido: {tipo}")
    if acao not in ACOES:
        raise SincronizacaoError(f"Ação de sincronização inválida: {acao}")

    registro = Sincronizacao(filial_id=filial_id, tipo=tipo, acao=acao, dados=dados)
    db.add(registro)
    db.commit()
    db.refresh(registro)
    logger.info(f"Sincronização {registro.id} enfileirada ({tipo}/{acao}) para a filial {filial_id}")

    # Pagamentos precisam aparecer no financeiro da matriz imediatamente
    if tipo == "pagamento":
        processar_lote(db)
        db.refresh(registro)
    return registro


def _buscar_da_filial(db: Session, modelo, registro_id, filial_id):
    if registro_id is None:
        raise SincronizacaoError("Operação sem o id do registro")
    if modelo is Pagamento:
        objeto = (
            db.query(Pagamento)
            .join(Aluno, Pagamento.aluno_id == Aluno.id)
            .filter(Pagamento.id == registro_id, Aluno.filial_id == filial_id)
            .first()
        )
    else:
        objeto = db.query(modelo).filter(modelo.id == registro_id, modelo.filial_id == filial_id).first()
    if objeto is None:
        raise SincronizacaoError(f"{modelo.__name__} {registro_id} não encontrado na filial {filial_id}")
    return objeto


def _checar_aluno_da_filial(db: Session, aluno_id, filial_id):
    aluno = db.query(Aluno).filter(Aluno.id == aluno_id, Aluno.filial_id == filial_id).first()
    if aluno is None:
        raise SincronizacaoError(f"Aluno {aluno_id} não pertence à filial {filial_id}")


def _aplicar_presenca(db: Session, operacao: Sincronizacao):
    lote = PresencaLote.model_validate(operacao.dados)
    turma = db.query(Turma).filter(Turma.id == lote.turma_id, Turma.filial_id == operacao.filial_id).first()
    if turma is None:
        raise SincronizacaoError(f"Turma {lote.turma_id} não pertence à filial {operacao.filial_id}")
    for item in lote.presencas:
        _checar_aluno_da_filial(db, item.aluno_id, operacao.filial_id)
    registrar_chamada(db, lote.turma_id, lote.data, lote.presencas)


def _aplicar(db: Session, operacao: Sincronizacao):
    if operacao.tipo == "presenca":
        if operacao.acao != "create":
            raise SincronizacaoError("Presenças só aceitam a ação create")
        _aplicar_presenca(db, operacao)
        return

    modelo, schema_create, schema_update = _ENTIDADES[operacao.tipo]
    dados = dict(operacao.dados or {})
    registro_id = dados.pop("id", None)

    if operacao.acao == "create":
        valores = schema_create.model_validate(dados).model_dump()
        if modelo is Pagamento:
            _checar_aluno_da_filial(db, valores["aluno_id"], operacao.filial_id)
        else:
            valores["filial_id"] = operacao.filial_id
        db.add(modelo(**valores))

    elif operacao.acao == "update":
        objeto = _buscar_da_filial(db, modelo, registro_id, operacao.filial_id)
        valores = schema_update.model_validate(dados).model_dump(exclude_unset=True)
        # A unidade não pode mover registros para outra filial
        valores.pop("filial_id", None)
        for key, value in valores.items():
            setattr(objeto, key, value)

    else:
        objeto = _buscar_da_filial(db, modelo, registro_id, operacao.filial_id)
        db.delete(objeto)

    db.flush()


def processar_lote(db: Session, limite: int = TAMANHO_LOTE) -> dict:
    """
    Aplica as operações pendentes, das mais antigas para as mais novas.
    """
    pendentes = (
        db.query(Sincronizacao)
        .filter(Sincronizacao.status == "pendente")
        .order_by(Sincronizacao.created_at, Sincronizacao.id)
        .limit(limite)
        .all()
    )

    processadas = 0
    falhas = 0
    for operacao in pendentes:
        operacao_id = operacao.id
        try:
            _aplicar(db, operacao)
            operacao.status = "sincronizado"
            operacao.erro = None
            operacao.processado_em = datetime.utcnow()
            db.commit()
            processadas += 1
        except (ValueError, SQLAlchemyError) as e:
            db.rollback()
            operacao = db.get(Sincronizacao, operacao_id)
            operacao.tentativas = (operacao.tentativas or 0) + 1
            operacao.erro = str(e)
            if operacao.tentativas >= MAX_TENTATIVAS:
                operacao.status = "erro"
            db.commit()
            falhas += 1
            logger.error(f"Falha ao sincronizar operação {operacao_id} (tentativa {operacao.tentativas}): {e}")

    if pendentes:
        logger.info(f"Lote de sincronização: {processadas} processadas, {falhas} com falha")
    return {"processadas": processadas, "falhas": falhas}


def status(db: Session, filial_id: Optional[int] = None) -> dict:
    """
    Resumo para o indicador de sincronização: sincronizado, pendente ou erro.
    """
    query = db.query(Sincronizacao)
    if filial_id:
        query = query.filter(Sincronizacao.filial_id == filial_id)

    pendentes = query.filter(Sincronizacao.status == "pendente").count()
    erros = query.filter(Sincronizacao.status == "erro").count()
    ultima = query.filter(Sincronizacao.status == "sincronizado").with_entities(
        func.max(Sincronizacao.processado_em)
    ).scalar()

    if erros:
        estado = "erro"
    elif pendentes:
        estado = "pendente"
    else:
        estado = "sincronizado"

    return {
        "status": estado,
        "pendentes": pendentes,
        "erros": erros,
        "ultima_sincronizacao": ultima,
    }
