from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from escola_futebol import database
from escola_futebol.auth import get_password_hash, get_admin_user
from escola_futebol.models.usuario import Usuario
from escola_futebol.schemas.usuario import UsuarioCreate, UsuarioRead, UsuarioUpdate

router = APIRouter(
    prefix="/api/usuarios",
    tags=["Usuarios"],
    dependencies=[Depends(get_admin_user)]
)


@router.post("", response_model=UsuarioRead, status_code=status.HTTP_201_CREATED)
def create_user(user: UsuarioCreate, db: Session = Depends(database.get_db)):
    if db.query(Usuario).filter(Usuario.email == user.email).first():
        raise HTTPException(status_code=400, detail="Email já registrado")

    if db.query(Usuario).filter(Usuario.username == user.username).first():
        raise HTTPException(status_code=400, detail="Nome de usuário já registrado")

    db_user = Usuario(
        email=user.email,
        username=user.username,
        nome=user.nome,
        hashed_password=get_password_hash(user.password),
        role=user.role
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


@router.get("", response_model=List[UsuarioRead])
def read_users(skip: int = 0, limit: int = 100, db: Session = Depends(database.get_db)):
    return db.query(Usuario).order_by(Usuario.nome).offset(skip).limit(limit).all()


@router.get("/{user_id}", response_model=UsuarioRead)
def read_user(user_id: int, db: Session = Depends(database.get_db)):
    db_user = db.query(Usuario).filter(Usuario.id == user_id).first()
    if db_user is None:
        raise HTTPException(status_code=404, detail="Usuário não encontrado")
    return db_user


@router.put("/{user_id}", response_model=UsuarioRead)
def update_user(user_id: int, user: UsuarioUpdate, db: Session = Depends(database.get_db)):
    db_user = db.query(Usuario).filter(Usuario.id == user_id).first()
    if not db_user:
        raise HTTPException(status_code=404, detail="Usuário não encontrado")

    update_data = user.model_dump(exclude_unset=True)

    if "username" in update_data and update_data["username"] != db_user.username:
        if db.query(Usuario).filter(Usuario.username == update_data["username"]).first():
            raise HTTPException(status_code=400, detail="Nome de usuário já está em uso.")

    if "email" in update_data and update_data["email"] != db_user.email:
        if db.query(Usuario).filter(Usuario.email == update_data["email"]).first():
            raise HTTPException(status_code=400, detail="Email já registrado")

    senha = update_data.pop("password", None)
    if senha:
        db_user.hashed_password = get_password_hash(senha)

    for key, value in update_data.items():
        setattr(db_user, key, value)

    db.commit()
    db.refresh(db_user)
    return db_user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(database.get_db)):
    db_user = db.query(Usuario).filter(Usuario.id == user_id).first()
    if not db_user:
        raise HTTPException(status_code=404, detail="Usuário não encontrado")
    db.delete(db_user)
    db.commit()
    return None
