# -*- coding: utf-8 -*-
"""
Schemas Pydantic para os itens da Wishlist.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date


class ItemWishlistCreate(BaseModel):
    item: str = Field(..., min_length=1, max_length=255)
    valor_estimado: float = Field(..., gt=0)
    contribuicao_mensal: Optional[float] = Field(0.0, ge=0)
    necessidade: int = Field(..., ge=1, le=5)
    desejo: int = Field(..., ge=1, le=5)
    caixinha_id: Optional[int] = None


class ItemWishlistUpdate(BaseModel):
    item: Optional[str] = Field(None, min_length=1, max_length=255)
    valor_estimado: Optional[float] = Field(None, gt=0)
    contribuicao_mensal: Optional[float] = Field(None, ge=0)
    necessidade: Optional[int] = Field(None, ge=1, le=5)
    desejo: Optional[int] = Field(None, ge=1, le=5)
    status: Optional[str] = None
    caixinha_id: Optional[int] = None


class ItemWishlistRead(BaseModel):
    id: int
    item: str
    valor_estimado: float
    contribuicao_mensal: Optional[float] = 0.0
    necessidade: int
    desejo: int
    status: str
    caixinha_id: Optional[int] = None
    prioridade_score: int
    meses_para_comprar: Optional[int] = None
    data_prevista_compra: Optional[date] = None

    class Config:
        from_attributes = True


class CompraWishlist(BaseModel):
    caixinha_id: Optional[int] = None
    valor_real: Optional[float] = None
