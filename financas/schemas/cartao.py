# -*- coding: utf-8 -*-
"""
Schemas Pydantic para Cartões e Faturas.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date


class CartaoCreate(BaseModel):
    nome: str = Field(..., min_length=1, max_length=100)
    bandeira: Optional[str] = None
    limite: float = Field(..., ge=0)
    dia_fechamento: int = Field(..., ge=1, le=31)
    dia_vencimento: int = Field(..., ge=1, le=31)
    cor: Optional[str] = Field("#8B5CF6", max_length=7)


class CartaoUpdate(BaseModel):
    nome: Optional[str] = Field(None, min_length=1, max_length=100)
    bandeira: Optional[str] = None
    limite: Optional[float] = Field(None, ge=0)
    dia_fechamento: Optional[int] = Field(None, ge=1, le=31)
    dia_vencimento: Optional[int] = Field(None, ge=1, le=31)
    cor: Optional[str] = Field(None, max_length=7)
    ativo: Optional[bool] = None


class CartaoRead(BaseModel):
    id: int
    nome: str
    bandeira: Optional[str] = None
    limite: float
    limite_disponivel: float
    dia_fechamento: int
    dia_vencimento: int
    cor: Optional[str] = None
    ativo: bool

    class Config:
        from_attributes = True


class FaturaRead(BaseModel):
    id: int
    cartao_id: int
    mes_referencia: str
    valor_total: float
    status: str
    data_fechamento: Optional[date] = None
    data_vencimento: Optional[date] = None
    data_pagamento: Optional[date] = None

    class Config:
        from_attributes = True


class FaturaAtual(BaseModel):
    fatura: FaturaRead
    cartao: CartaoRead


class CompraCartao(BaseModel):
    valor: float


class PagamentoFatura(BaseModel):
    valor: float
    conta_id: int
    data_pagamento: Optional[date] = None


class MelhorDiaCompra(BaseModel):
    melhor_dia: int
    dia_fechamento: int
    dia_vencimento: int
    dias_ate_fechamento: int
    data_vencimento_proxima: date
    dica: str


class ResumoCartoes(BaseModel):
    total_cartoes: int
    limite_total: float
    limite_disponivel_total: float
    total_utilizado: float
    total_faturas_abertas: float
