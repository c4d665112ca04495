# -*- coding: utf-8 -*-
"""
Portal da unidade: login dos gestores, consultas restritas à própria
filial e cadastros que seguem para a matriz pela fila de sincronização.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session, joinedload

from escola_futebol import auth, sync
from escola_futebol.database import get_db
from escola_futebol.models.aluno import Aluno
from escola_futebol.models.filial import Filial
from escola_futebol.models.gestor_unidade import GestorUnidade
from escola_futebol.models.pagamento import Pagamento
from escola_futebol.models.professor import Professor
from escola_futebol.models.turma import Turma
from escola_futebol.schemas.aluno import AlunoCreate, AlunoRead
from escola_futebol.schemas.gestor_unidade import CadastroCompleto, SessaoUnidadeRead
from escola_futebol.schemas.pagamento import PagamentoCreate, PagamentoRead
from escola_futebol.schemas.presenca import PresencaLote
from escola_futebol.schemas.professor import ProfessorCreate, ProfessorRead
from escola_futebol.schemas.sincronizacao import SincronizacaoRead, SyncStatus
from escola_futebol.schemas.turma import TurmaRead
from escola_futebol.schemas.usuario import LoginRequest
from escola_futebol.servicos import status_pagamento

router = APIRouter(
    prefix="/api/unidade",
    tags=["Portal da Unidade"],
)


def _sessao_resposta(sessao: auth.SessaoUnidade, token: str = None) -> dict:
    return {"gestor": sessao.gestor, "filial": sessao.filial, "access_token": token}


def _abrir_sessao(request: Request, sessao: auth.SessaoUnidade) -> str:
    request.session["filial_id"] = sessao.filial.id
    request.session["gestor_id"] = sessao.gestor.id if sessao.gestor else None
    return auth.create_access_token(data={
        "sub": sessao.gestor.email if sessao.gestor else sessao.filial.login_portal,
        "tipo": "unidade",
        "filial_id": sessao.filial.id,
        "gestor_id": sessao.gestor.id if sessao.gestor else None,
    })


@router.post("/login", response_model=SessaoUnidadeRead)
def login_unidade(credenciais: LoginRequest, request: Request, db: Session = Depends(get_db)):
    sessao = auth.authenticate_unidade(db, credenciais.email, credenciais.senha)
    if sessao is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Email ou senha inválidos")
    token = _abrir_sessao(request, sessao)
    return _sessao_resposta(sessao, token)


@router.post("/logout")
def logout_unidade(request: Request):
    request.session.pop("filial_id", None)
    request.session.pop("gestor_id", None)
    return {"mensagem": "Logout realizado com sucesso"}


@router.get("/me", response_model=SessaoUnidadeRead)
def read_sessao(sessao: auth.SessaoUnidade = Depends(auth.get_current_gestor)):
    return _sessao_resposta(sessao)


@router.post("/cadastro-completo", response_model=SessaoUnidadeRead, status_code=status.HTTP_201_CREATED)
def cadastro_completo(cadastro: CadastroCompleto, request: Request, db: Session = Depends(get_db)):
    """
    Cria a filial e o seu primeiro gestor numa única transação.
    """
    if db.query(GestorUnidade).filter(GestorUnidade.email == cadastro.email).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email já cadastrado para outro gestor")

    filial = Filial(
        nome=cadastro.nome_unidade,
        endereco=cadastro.endereco_unidade,
        telefone=cadastro.telefone_unidade,
        responsavel=cadastro.responsavel_unidade or cadastro.nome,
        email=cadastro.email,
    )
    db.add(filial)
    db.flush()

    gestor = GestorUnidade(
        nome=cadastro.nome,
        email=cadastro.email,
        senha_hash=auth.get_password_hash(cadastro.senha),
        telefone=cadastro.telefone,
        filial_id=filial.id,
    )
    db.add(gestor)
    db.commit()
    db.refresh(filial)
    db.refresh(gestor)
    logging.info(f"Unidade {filial.nome} cadastrada com o gestor {gestor.email}")

    sessao = auth.SessaoUnidade(filial=filial, gestor=gestor)
    token = _abrir_sessao(request, sessao)
    return _sessao_resposta(sessao, token)


# --- Consultas da unidade ---

@router.get("/alunos", response_model=List[AlunoRead])
def read_alunos_unidade(sessao: auth.SessaoUnidade = Depends(auth.get_current_gestor), db: Session = Depends(get_db)):
    alunos = db.query(Aluno).options(joinedload(Aluno.filial), joinedload(Aluno.pagamentos)).filter(
        Aluno.filial_id == sessao.filial.id
    ).order_by(Aluno.nome).all()
    resultado = []
    for aluno in alunos:
        item = AlunoRead.model_validate(aluno)
        item.status_pagamento = status_pagamento(aluno.pagamentos)
        resultado.append(item)
    return resultado


@router.get("/professores", response_model=List[ProfessorRead])
def read_professores_unidade(sessao: auth.SessaoUnidade = Depends(auth.get_current_gestor), db: Session = Depends(get_db)):
    return db.query(Professor).filter(Professor.filial_id == sessao.filial.id).order_by(Professor.nome).all()


@router.get("/turmas", response_model=List[TurmaRead])
def read_turmas_unidade(sessao: auth.SessaoUnidade = Depends(auth.get_current_gestor), db: Session = Depends(get_db)):
    turmas = db.query(Turma).options(joinedload(Turma.matriculas), joinedload(Turma.professor)).filter(
        Turma.filial_id == sessao.filial.id
    ).order_by(Turma.categoria, Turma.nome).all()
    for turma in turmas:
        turma.total_alunos = sum(1 for m in turma.matriculas if m.ativo)
    return turmas


@router.get("/pagamentos", response_model=List[PagamentoRead])
def read_pagamentos_unidade(sessao: auth.SessaoUnidade = Depends(auth.get_current_gestor), db: Session = Depends(get_db)):
    return (
        db.query(Pagamento)
        .join(Aluno, Pagamento.aluno_id == Aluno.id)
        .options(joinedload(Pagamento.aluno))
        .filter(Aluno.filial_id == sessao.filial.id)
        .order_by(Pagamento.data_pagamento.desc())
        .all()
    )


# --- Cadastros enviados para a matriz ---

def _checar_aluno_da_unidade(db: Session, aluno_id: int, filial_id: int):
    aluno = db.query(Aluno).filter(Aluno.id == aluno_id).first()
    if aluno is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Aluno não encontrado")
    if aluno.filial_id != filial_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Aluno não pertence a esta unidade")


@router.post("/alunos", response_model=SincronizacaoRead, status_code=status.HTTP_202_ACCEPTED)
def create_aluno_unidade(aluno: AlunoCreate, sessao: auth.SessaoUnidade = Depends(auth.get_current_gestor), db: Session = Depends(get_db)):
    dados = aluno.model_dump(mode="json", exclude={"filial_id"})
    return sync.adicionar(db, sessao.filial.id, "aluno", "create", dados)


@router.post("/professores", response_model=SincronizacaoRead, status_code=status.HTTP_202_ACCEPTED)
def create_professor_unidade(professor: ProfessorCreate, sessao: auth.SessaoUnidade = Depends(auth.get_current_gestor), db: Session = Depends(get_db)):
    dados = professor.model_dump(mode="json", exclude={"filial_id"})
    return sync.adicionar(db, sessao.filial.id, "professor", "create", dados)


@router.post("/pagamentos", response_model=SincronizacaoRead, status_code=status.HTTP_202_ACCEPTED)
def create_pagamento_unidade(pagamento: PagamentoCreate, sessao: auth.SessaoUnidade = Depends(auth.get_current_gestor), db: Session = Depends(get_db)):
    _checar_aluno_da_unidade(db, pagamento.aluno_id, sessao.filial.id)
    return sync.adicionar(db, sessao.filial.id, "pagamento", "create", pagamento.model_dump(mode="json"))


@router.post("/presencas", response_model=SincronizacaoRead, status_code=status.HTTP_202_ACCEPTED)
def registrar_presencas_unidade(lote: PresencaLote, sessao: auth.SessaoUnidade = Depends(auth.get_current_gestor), db: Session = Depends(get_db)):
    turma = db.query(Turma).filter(Turma.id == lote.turma_id).first()
    if turma is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Turma não encontrada")
    if turma.filial_id != sessao.filial.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Turma não pertence a esta unidade")
    for item in lote.presencas:
        _checar_aluno_da_unidade(db, item.aluno_id, sessao.filial.id)
    return sync.adicionar(db, sessao.filial.id, "presenca", "create", lote.model_dump(mode="json"))


@router.get("/sync/status", response_model=SyncStatus)
def read_sync_status_unidade(sessao: auth.SessaoUnidade = Depends(auth.get_current_gestor), db: Session = Depends(get_db)):
    return sync.status(db, sessao.filial.id)
