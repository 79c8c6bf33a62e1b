# -*- coding: utf-8 -*-
"""
Schemas Pydantic para a entidade Caixinha.
"""

from pydantic import BaseModel, Field
from typing import List, Optional


class CaixinhaConfig(BaseModel):
    nome: str = Field(..., max_length=100)
    porcentagem: float


class CaixinhasConfigurar(BaseModel):
    caixinhas: List[CaixinhaConfig]
    mes_referencia: Optional[str] = None  # 'YYYY-MM'; padrão: mês atual


class CaixinhasDistribuir(BaseModel):
    valor: float
    mes_referencia: Optional[str] = None


class CaixinhaRead(BaseModel):
    id: int
    nome_caixinha: str
    porcentagem_alvo: float
    valor_alocado: float
    valor_gasto: float
    saldo_disponivel: float
    mes_referencia: str

    class Config:
        from_attributes = True


class CaixinhasResposta(BaseModel):
    message: str
    caixinhas: List[CaixinhaRead]
