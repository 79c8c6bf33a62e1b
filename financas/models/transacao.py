# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para a entidade Transacao (entrada ou saída).
"""
from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from financas.database import Base
from datetime import datetime

TIPOS_TRANSACAO = ("entrada", "saida")


class Transacao(Base):
    __tablename__ = "transacoes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    tipo = Column(String(20), nullable=False)  # 'entrada' ou 'saida'
    valor = Column(Float, nullable=False)
    descricao = Column(String(255), nullable=True)
    data = Column(Date, nullable=False)

    # Saídas sempre apontam para uma caixinha; entradas são distribuídas entre todas do mês
    caixinha_id = Column(Integer, ForeignKey("caixinhas.id"), nullable=True, index=True)
    criado_em = Column(DateTime, default=datetime.utcnow)

    caixinha = relationship("Caixinha")

    @property
    def nome_caixinha(self):
        return self.caixinha.nome_caixinha if self.caixinha else None
