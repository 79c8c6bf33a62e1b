# -*- coding: utf-8 -*-
"""
Modelos SQLAlchemy para Recorrências (contas fixas) e Compras Parceladas.
"""
from sqlalchemy import Column, Integer, String, Float, Date, Boolean, ForeignKey
from financas.database import Base


class Recorrencia(Base):
    __tablename__ = "recorrencias"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    tipo = Column(String(20), nullable=False)  # 'entrada' ou 'saida'
    valor = Column(Float, nullable=False)
    descricao = Column(String(255), nullable=False)
    dia_vencimento = Column(Integer, nullable=False)
    frequencia = Column(String(20), default="mensal")  # 'mensal' ou 'anual'
    ativo = Column(Boolean, default=True)
    caixinha_id = Column(Integer, ForeignKey("caixinhas.id"), nullable=True)


class Parcelada(Base):
    __tablename__ = "parceladas"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    descricao = Column(String(255), nullable=False)
    valor_total = Column(Float, nullable=False)
    num_parcelas = Column(Integer, nullable=False)
    parcela_atual = Column(Integer, default=1)
    valor_parcela = Column(Float, nullable=False)
    dia_vencimento = Column(Integer, nullable=False)
    data_inicio = Column(Date, nullable=False)
    ativo = Column(Boolean, default=True)
    caixinha_id = Column(Integer, ForeignKey("caixinhas.id"), nullable=True)
