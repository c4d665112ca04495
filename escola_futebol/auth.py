"""
Autenticação da API: senhas com bcrypt, token JWT para clientes externos
e sessão em cookie para o navegador.
"""
import os
from datetime import datetime, timedelta
from typing import NamedTuple, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from escola_futebol import database
from escola_futebol.models.usuario import Usuario
from escola_futebol.models.filial import Filial
from escola_futebol.models.gestor_unidade import GestorUnidade

# --- CONFIGURAÇÃO DE SEGURANÇA ---
SECRET_KEY = os.environ.get("SECRET_KEY", "escola-futebol-dev-secret-troque-em-producao")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 8  # 8 horas

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
# auto_error=False: sem token, cai para a sessão do navegador
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login", auto_error=False)


class SessaoUnidade(NamedTuple):
    filial: Filial
    gestor: Optional[GestorUnidade]


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def create_access_token(data: dict):
    to_encode = data.copy()
    expire = datetime.utcnow() + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def _decode_token(token: str) -> dict:
    return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])


# --- DEPENDÊNCIAS DE AUTENTICAÇÃO E AUTORIZAÇÃO ---
def get_user(db: Session, email: str):
    return db.query(Usuario).filter(Usuario.email == email).first()


def authenticate_user(db: Session, email: str, senha: str):
    user = get_user(db, email)
    if not user or not user.hashed_password or not verify_password(senha, user.hashed_password):
        return None
    return user


async def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(database.get_db),
):
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Não autenticado",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if token:
        try:
            payload = _decode_token(token)
        except JWTError:
            raise credentials_exception
        if payload.get("tipo", "admin") != "admin":
            raise credentials_exception
        email = payload.get("sub")
    else:
        email = request.session.get("usuario_email")

    if not email:
        raise credentials_exception
    user = get_user(db, email=email)
    if user is None:
        raise credentials_exception
    return user


async def get_current_active_user(current_user: Usuario = Depends(get_current_user)):
    """
    Bloqueia contas ainda pendentes de aprovação.
    """
    if current_user.role == "pendente":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Sua conta está pendente de aprovação por um administrador."
        )
    return current_user


async def get_admin_user(current_user: Usuario = Depends(get_current_active_user)):
    if current_user.role != "administrador":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Acesso restrito a administradores."
        )
    return current_user


# --- PORTAL DA UNIDADE ---
def authenticate_unidade(db: Session, email: str, senha: str) -> Optional[SessaoUnidade]:
    """
    Primeiro tenta um gestor da unidade; se não houver, tenta o login
    do portal cadastrado na própria filial.
    """
    gestor = db.query(GestorUnidade).filter(GestorUnidade.email == email).first()
    if gestor and gestor.ativo and verify_password(senha, gestor.senha_hash):
        filial = db.query(Filial).filter(Filial.id == gestor.filial_id, Filial.ativa == True).first()
        if not filial:
            return None
        gestor.ultimo_login = datetime.utcnow()
        db.commit()
        return SessaoUnidade(filial=filial, gestor=gestor)

    filial = db.query(Filial).filter(Filial.login_portal == email, Filial.ativa == True).first()
    if filial and filial.senha_portal_hash and verify_password(senha, filial.senha_portal_hash):
        return SessaoUnidade(filial=filial, gestor=None)
    return None


async def get_current_gestor(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(database.get_db),
) -> SessaoUnidade:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Autenticação da unidade necessária",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if token:
        try:
            payload = _decode_token(token)
        except JWTError:
            raise credentials_exception
        if payload.get("tipo") != "unidade":
            raise credentials_exception
        filial_id = payload.get("filial_id")
        gestor_id = payload.get("gestor_id")
    else:
        filial_id = request.session.get("filial_id")
        gestor_id = request.session.get("gestor_id")

    if not filial_id:
        raise credentials_exception
    filial = db.query(Filial).filter(Filial.id == filial_id, Filial.ativa == True).first()
    if filial is None:
        raise credentials_exception

    gestor = None
    if gestor_id:
        gestor = db.query(GestorUnidade).filter(GestorUnidade.id == gestor_id).first()
        if gestor is None or not gestor.ativo:
            raise credentials_exception
    return SessaoUnidade(filial=filial, gestor=gestor)
