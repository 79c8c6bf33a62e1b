from pydantic import BaseModel, Field
from typing import Optional


class ContaCreate(BaseModel):
    nome: str = Field(..., min_length=1, max_length=100)
    tipo: str
    saldo_inicial: Optional[float] = 0.0
    cor: Optional[str] = Field("#3B82F6", max_length=7)


class ContaUpdate(BaseModel):
    nome: Optional[str] = Field(None, min_length=1, max_length=100)
    tipo: Optional[str] = None
    cor: Optional[str] = Field(None, max_length=7)
    ativo: Optional[bool] = None


class ContaRead(BaseModel):
    id: int
    nome: str
    tipo: str
    saldo_inicial: float
    saldo_atual: float
    cor: Optional[str] = None
    ativo: bool

    class Config:
        from_attributes = True


class SaldoTotal(BaseModel):
    saldo_total: float
    total_contas: int
