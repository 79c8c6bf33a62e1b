from pydantic import BaseModel, Field
from typing import Optional
from datetime import date


class RecorrenciaCreate(BaseModel):
    tipo: str
    valor: float = Field(..., gt=0)
    descricao: str = Field(..., min_length=1, max_length=255)
    dia_vencimento: int = Field(..., ge=1, le=31)
    frequencia: Optional[str] = "mensal"
    caixinha_id: Optional[int] = None


class RecorrenciaUpdate(BaseModel):
    valor: Optional[float] = Field(None, gt=0)
    descricao: Optional[str] = Field(None, min_length=1, max_length=255)
    dia_vencimento: Optional[int] = Field(None, ge=1, le=31)
    frequencia: Optional[str] = None
    caixinha_id: Optional[int] = None
    ativo: Optional[bool] = None


class RecorrenciaRead(BaseModel):
    id: int
    tipo: str
    valor: float
    descricao: str
    dia_vencimento: int
    frequencia: str
    ativo: bool
    caixinha_id: Optional[int] = None

    class Config:
        from_attributes = True


class ParceladaCreate(BaseModel):
    descricao: str = Field(..., min_length=1, max_length=255)
    valor_total: float = Field(..., gt=0)
    num_parcelas: int = Field(..., ge=1)
    dia_vencimento: int = Field(..., ge=1, le=31)
    data_inicio: date
    caixinha_id: Optional[int] = None


class ParceladaRead(BaseModel):
    id: int
    descricao: str
    valor_total: float
    num_parcelas: int
    parcela_atual: int
    valor_parcela: float
    dia_vencimento: int
    data_inicio: date
    ativo: bool
    caixinha_id: Optional[int] = None

    class Config:
        from_attributes = True
