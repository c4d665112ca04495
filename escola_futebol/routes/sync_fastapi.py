from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from escola_futebol import sync
from escola_futebol.auth import get_current_active_user
from escola_futebol.database import get_db
from escola_futebol.schemas.sincronizacao import SyncResultado, SyncStatus

router = APIRouter(
    tags=["Sincronização"],
    dependencies=[Depends(get_current_active_user)],
)


@router.get("/status", response_model=SyncStatus)
def read_status(filial_id: Optional[int] = None, db: Session = Depends(get_db)):
    return sync.status(db, filial_id)


@router.post("/force", response_model=SyncResultado)
def force_sync(db: Session = Depends(get_db)):
    return sync.processar_lote(db)
