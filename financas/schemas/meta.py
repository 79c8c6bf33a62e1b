# -*- coding: utf-8 -*-
"""
Schemas Pydantic para Metas e Aportes.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date


class MetaBase(BaseModel):
    nome: str = Field(..., min_length=1, max_length=100)
    descricao: Optional[str] = None
    valor_alvo: float = Field(..., gt=0)
    data_limite: Optional[date] = None
    caixinha_id: Optional[int] = None
    prioridade: Optional[int] = Field(1, ge=1, le=5)
    cor: Optional[str] = Field("#10B981", max_length=7)


class MetaCreate(MetaBase):
    pass


class MetaUpdate(BaseModel):
    nome: Optional[str] = Field(None, min_length=1, max_length=100)
    descricao: Optional[str] = None
    valor_alvo: Optional[float] = Field(None, gt=0)
    data_limite: Optional[date] = None
    caixinha_id: Optional[int] = None
    prioridade: Optional[int] = Field(None, ge=1, le=5)
    cor: Optional[str] = Field(None, max_length=7)
    status: Optional[str] = None


class MetaRead(MetaBase):
    id: int
    valor_atual: float
    status: str
    percentual_concluido: float = 0.0
    valor_mensal_necessario: float = 0.0

    class Config:
        from_attributes = True


class AporteCreate(BaseModel):
    valor: float
    data_aporte: Optional[date] = None
    caixinha_id: Optional[int] = None
    observacao: Optional[str] = None


class AporteRead(BaseModel):
    id: int
    valor: float
    data_aporte: date
    observacao: Optional[str] = None

    class Config:
        from_attributes = True


class AporteResposta(BaseModel):
    message: str
    concluida: bool
    meta: MetaRead


class ResumoMetas(BaseModel):
    total_metas: int
    ativas: int
    concluidas: int
    total_alvo_ativas: float
    total_poupado_ativas: float
