# -*- coding: utf-8 -*-
"""
Schemas Pydantic para Dívidas e Amortizações.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date


class DividaCreate(BaseModel):
    descricao: str = Field(..., min_length=1, max_length=255)
    valor_original: float = Field(..., gt=0)
    juros_mensal: Optional[float] = Field(0.0, ge=0, le=100)
    data_inicio: date
    caixinha_id: Optional[int] = None


class DividaStatusUpdate(BaseModel):
    status: str


class DividaRead(BaseModel):
    id: int
    descricao: str
    valor_original: float
    valor_atual: float
    juros_mensal: Optional[float] = 0.0
    status: str
    data_inicio: date
    data_quitacao: Optional[date] = None
    caixinha_id: Optional[int] = None
    percentual_pago: float

    class Config:
        from_attributes = True


class AmortizacaoCreate(BaseModel):
    valor: float
    data_pagamento: Optional[date] = None
    caixinha_id: int
    observacao: Optional[str] = None


class AmortizacaoRead(BaseModel):
    id: int
    valor: float
    data_pagamento: date
    observacao: Optional[str] = None
    caixinha_id: Optional[int] = None
    nome_caixinha: Optional[str] = None

    class Config:
        from_attributes = True


class ResumoDividas(BaseModel):
    total_dividas: int
    pendentes: int
    negociando: int
    quitadas: int
    total_devido: float
    total_original: float
