from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from escola_futebol.auth import get_admin_user, get_password_hash
from escola_futebol.database import get_db
from escola_futebol.models.filial import Filial
from escola_futebol.models.gestor_unidade import GestorUnidade
from escola_futebol.schemas.gestor_unidade import GestorUnidadeCreate, GestorUnidadeRead, GestorUnidadeUpdate

router = APIRouter(
    tags=["Gestores de Unidade"],
    responses={404: {"description": "Gestor não encontrado"}},
    dependencies=[Depends(get_admin_user)],
)


def _checar_filial(db: Session, filial_id: int):
    if not db.query(Filial).filter(Filial.id == filial_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Filial não encontrada")


@router.get("", response_model=List[GestorUnidadeRead])
def read_gestores(filial_id: Optional[int] = None, db: Session = Depends(get_db)):
    query = db.query(GestorUnidade)
    if filial_id:
        query = query.filter(GestorUnidade.filial_id == filial_id)
    return query.order_by(GestorUnidade.nome).all()


@router.post("", response_model=GestorUnidadeRead, status_code=status.HTTP_201_CREATED)
def create_gestor(gestor: GestorUnidadeCreate, db: Session = Depends(get_db)):
    _checar_filial(db, gestor.filial_id)
    if db.query(GestorUnidade).filter(GestorUnidade.email == gestor.email).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email já cadastrado para outro gestor")

    dados = gestor.model_dump(exclude={"senha"})
    db_gestor = GestorUnidade(**dados, senha_hash=get_password_hash(gestor.senha))
    db.add(db_gestor)
    db.commit()
    db.refresh(db_gestor)
    return db_gestor


@router.put("/{gestor_id}", response_model=GestorUnidadeRead)
def update_gestor(gestor_id: int, gestor_update: GestorUnidadeUpdate, db: Session = Depends(get_db)):
    db_gestor = db.query(GestorUnidade).filter(GestorUnidade.id == gestor_id).first()
    if db_gestor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Gestor não encontrado")

    update_data = gestor_update.model_dump(exclude_unset=True)
    if update_data.get("filial_id"):
        _checar_filial(db, update_data["filial_id"])
    if update_data.get("email") and update_data["email"] != db_gestor.email:
        if db.query(GestorUnidade).filter(GestorUnidade.email == update_data["email"]).first():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email já cadastrado para outro gestor")

    senha = update_data.pop("senha", None)
    if senha:
        db_gestor.senha_hash = get_password_hash(senha)

    for key, value in update_data.items():
        if value is not None:
            setattr(db_gestor, key, value)

    db.commit()
    db.refresh(db_gestor)
    return db_gestor


@router.delete("/{gestor_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_gestor(gestor_id: int, db: Session = Depends(get_db)):
    db_gestor = db.query(GestorUnidade).filter(GestorUnidade.id == gestor_id).first()
    if db_gestor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Gestor não encontrado")
    db.delete(db_gestor)
    db.commit()
    return None
