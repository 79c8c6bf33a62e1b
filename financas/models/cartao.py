# -*- coding: utf-8 -*-
"""
Modelos SQLAlchemy para Cartões de crédito e suas Faturas.
"""
from sqlalchemy import Column, Integer, String, Float, Boolean, Date, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from financas.database import Base

STATUS_FATURA = ("aberta", "fechada", "paga")


class Cartao(Base):
    __tablename__ = "cartoes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    nome = Column(String(100), nullable=False)
    bandeira = Column(String(50), nullable=True)
    limite = Column(Float, nullable=False)
    # limite menos o total das faturas não pagas
    limite_disponivel = Column(Float, nullable=False)
    dia_fechamento = Column(Integer, nullable=False)
    dia_vencimento = Column(Integer, nullable=False)
    cor = Column(String(7), default="#8B5CF6")
    ativo = Column(Boolean, default=True)

    faturas = relationship("Fatura", back_populates="cartao", cascade="all, delete-orphan")


class Fatura(Base):
    __tablename__ = "faturas"
    __table_args__ = (
        UniqueConstraint("cartao_id", "mes_referencia", name="uq_fatura_cartao_mes"),
    )

    id = Column(Integer, primary_key=True, index=True)
    cartao_id = Column(Integer, ForeignKey("cartoes.id"), nullable=False, index=True)
    mes_referencia = Column(String(7), nullable=False)  # 'YYYY-MM'
    valor_total = Column(Float, nullable=False, default=0.0)
    status = Column(String(20), nullable=False, default="aberta")
    data_fechamento = Column(Date, nullable=True)
    data_vencimento = Column(Date, nullable=True)
    data_pagamento = Column(Date, nullable=True)

    cartao = relationship("Cartao", back_populates="faturas")
