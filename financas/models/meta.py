# -*- coding: utf-8 -*-
"""
Modelos SQLAlchemy para Metas de economia e seus Aportes.
"""
from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from financas.database import Base
from datetime import date, datetime

STATUS_META = ("ativa", "concluida")


class Meta(Base):
    __tablename__ = "metas"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    nome = Column(String(100), nullable=False)
    descricao = Column(Text, nullable=True)
    valor_alvo = Column(Float, nullable=False)
    valor_atual = Column(Float, nullable=False, default=0.0)
    data_limite = Column(Date, nullable=True)
    caixinha_id = Column(Integer, ForeignKey("caixinhas.id"), nullable=True)
    prioridade = Column(Integer, default=1)  # 1 a 5
    cor = Column(String(7), default="#10B981")
    status = Column(String(20), nullable=False, default="ativa")
    criado_em = Column(DateTime, default=datetime.utcnow)

    caixinha = relationship("Caixinha")
    aportes = relationship("Aporte", back_populates="meta", cascade="all, delete-orphan")

    @property
    def percentual_concluido(self):
        if not self.valor_alvo:
            return 0.0
        return round((self.valor_atual or 0.0) / self.valor_alvo * 100, 2)

    @property
    def valor_mensal_necessario(self):
        """Quanto falta por mês até a data limite (mínimo de 1 mês)."""
        if not self.data_limite or self.status != "ativa":
            return 0.0
        hoje = date.today()
        meses_restantes = max(
            (self.data_limite.year - hoje.year) * 12 + (self.data_limite.month - hoje.month), 1
        )
        faltante = self.valor_alvo - (self.valor_atual or 0.0)
        return round(faltante / meses_restantes, 2) if faltante > 0 else 0.0


class Aporte(Base):
    __tablename__ = "aportes_metas"

    id = Column(Integer, primary_key=True, index=True)
    meta_id = Column(Integer, ForeignKey("metas.id"), nullable=False, index=True)
    valor = Column(Float, nullable=False)
    data_aporte = Column(Date, nullable=False)
    observacao = Column(Text, nullable=True)

    meta = relationship("Meta", back_populates="aportes")
