from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from escola_futebol.auth import get_current_active_user
from escola_futebol.database import get_db
from escola_futebol.models.combo_aulas import ComboAulas
from escola_futebol.schemas.combo_aulas import ComboAulasCreate, ComboAulasRead, ComboAulasUpdate

router = APIRouter(
    tags=["Combos de Aulas"],
    responses={404: {"description": "Combo não encontrado"}},
    dependencies=[Depends(get_current_active_user)],
)


@router.get("", response_model=List[ComboAulasRead])
def read_combos(db: Session = Depends(get_db)):
    return db.query(ComboAulas).filter(ComboAulas.ativo == True).order_by(ComboAulas.preco).all()


@router.post("", response_model=ComboAulasRead, status_code=status.HTTP_201_CREATED)
def create_combo(combo: ComboAulasCreate, db: Session = Depends(get_db)):
    db_combo = ComboAulas(**combo.model_dump())
    db.add(db_combo)
    db.commit()
    db.refresh(db_combo)
    return db_combo


@router.put("/{combo_id}", response_model=ComboAulasRead)
def update_combo(combo_id: int, combo_update: ComboAulasUpdate, db: Session = Depends(get_db)):
    db_combo = db.query(ComboAulas).filter(ComboAulas.id == combo_id).first()
    if db_combo is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Combo não encontrado")

    for key, value in combo_update.model_dump(exclude_unset=True).items():
        setattr(db_combo, key, value)

    db.commit()
    db.refresh(db_combo)
    return db_combo


@router.delete("/{combo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_combo(combo_id: int, db: Session = Depends(get_db)):
    db_combo = db.query(ComboAulas).filter(ComboAulas.id == combo_id).first()
    if db_combo is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Combo não encontrado")
    db.delete(db_combo)
    db.commit()
    return None
