from datetime import date
from typing import Optional

from pydantic import BaseModel

from escola_futebol.schemas.aluno import AlunoResumo
from escola_futebol.schemas.turma import TurmaResumo


class MatriculaBase(BaseModel):
    aluno_id: int
    turma_id: int
    data_matricula: Optional[date] = None
    ativo: Optional[bool] = True


class MatriculaCreate(MatriculaBase):
    pass


class MatriculaUpdate(BaseModel):
    turma_id: Optional[int] = None
    data_matricula: Optional[date] = None
    ativo: Optional[bool] = None


class MatriculaRead(MatriculaBase):
    id: int
    ativo: bool
    aluno: Optional[AlunoResumo] = None
    turma: Optional[TurmaResumo] = None

    class Config:
        from_attributes = True
