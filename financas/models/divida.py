# -*- coding: utf-8 -*-
"""
Modelos SQLAlchemy para Dívidas e suas Amortizações.
"""
from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from financas.database import Base
from datetime import datetime

STATUS_DIVIDA = ("pendente", "negociando", "quitado")


class Divida(Base):
    __tablename__ = "dividas"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    descricao = Column(String(255), nullable=False)
    valor_original = Column(Float, nullable=False)
    valor_atual = Column(Float, nullable=False)  # nunca cresce via amortização, nunca negativo
    juros_mensal = Column(Float, default=0.0)
    status = Column(String(20), nullable=False, default="pendente")
    data_inicio = Column(Date, nullable=False)
    data_quitacao = Column(Date, nullable=True)
    caixinha_id = Column(Integer, ForeignKey("caixinhas.id"), nullable=True)
    criado_em = Column(DateTime, default=datetime.utcnow)

    caixinha = relationship("Caixinha")
    amortizacoes = relationship("Amortizacao", back_populates="divida", cascade="all, delete-orphan")

    @property
    def percentual_pago(self):
        if not self.valor_original:
            return 0.0
        return round((self.valor_original - self.valor_atual) / self.valor_original * 100, 2)


class Amortizacao(Base):
    __tablename__ = "amortizacoes"

    id = Column(Integer, primary_key=True, index=True)
    divida_id = Column(Integer, ForeignKey("dividas.id"), nullable=False, index=True)
    caixinha_id = Column(Integer, ForeignKey("caixinhas.id"), nullable=True)
    valor = Column(Float, nullable=False)
    data_pagamento = Column(Date, nullable=False)
    observacao = Column(Text, nullable=True)

    divida = relationship("Divida", back_populates="amortizacoes")
    caixinha = relationship("Caixinha")

    @property
    def nome_caixinha(self):
        return self.caixinha.nome_caixinha if self.caixinha else None
