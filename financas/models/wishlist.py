# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para os itens da Wishlist.
"""
import math
from datetime import date, datetime

from dateutil.relativedelta import relativedelta
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from financas.database import Base

STATUS_WISHLIST = ("desejando", "poupando", "comprado", "cancelado")


class ItemWishlist(Base):
    __tablename__ = "wishlist"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    item = Column(String(255), nullable=False)
    valor_estimado = Column(Float, nullable=False)
    contribuicao_mensal = Column(Float, default=0.0)
    necessidade = Column(Integer, nullable=False, default=3)  # 1 a 5
    desejo = Column(Integer, nullable=False, default=3)  # 1 a 5
    status = Column(String(20), nullable=False, default="desejando")
    caixinha_id = Column(Integer, ForeignKey("caixinhas.id"), nullable=True)
    criado_em = Column(DateTime, default=datetime.utcnow)

    caixinha = relationship("Caixinha")

    @property
    def prioridade_score(self):
        return (self.necessidade or 0) + (self.desejo or 0)

    @property
    def meses_para_comprar(self):
        return projetar_meses(self.valor_estimado, self.contribuicao_mensal)

    @property
    def data_prevista_compra(self):
        meses = self.meses_para_comprar
        if meses is None:
            return None
        return date.today() + relativedelta(months=meses)


def projetar_meses(valor_estimado, contribuicao_mensal):
    """Meses até a compra poupando a contribuição mensal; None se não houver contribuição."""
    if not contribuicao_mensal or contribuicao_mensal <= 0:
        return None
    return math.ceil(valor_estimado / contribuicao_mensal)
