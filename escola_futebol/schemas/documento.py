from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class DocumentoRead(BaseModel):
    id: int
    titulo: str
    descricao: Optional[str] = None
    categoria: str
    arquivo_url: str
    tipo_arquivo: Optional[str] = None
    tamanho_bytes: Optional[int] = None
    nome_arquivo_original: Optional[str] = None
    visibilidade: str
    filial_id: Optional[int] = None
    aluno_id: Optional[int] = None
    upload_por_nome: Optional[str] = None
    ativo: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
