# -*- coding: utf-8 -*-
"""
Schemas Pydantic para a entidade Transacao.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime


class TransacaoBase(BaseModel):
    tipo: str  # 'entrada' ou 'saida'
    valor: float
    descricao: Optional[str] = Field(None, max_length=255)
    data: Optional[date] = None
    caixinha_id: Optional[int] = None


class TransacaoCreate(TransacaoBase):
    pass


class TransacaoUpdate(BaseModel):
    tipo: Optional[str] = None
    valor: Optional[float] = None
    descricao: Optional[str] = Field(None, max_length=255)
    data: Optional[date] = None
    caixinha_id: Optional[int] = None


class TransacaoRead(TransacaoBase):
    id: int
    data: date
    nome_caixinha: Optional[str] = None
    criado_em: Optional[datetime] = None

    class Config:
        from_attributes = True


class EstatisticasMes(BaseModel):
    mes_referencia: str
    total_entradas: float
    total_saidas: float
    saldo: float
    num_entradas: int
    num_saidas: int
