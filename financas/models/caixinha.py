# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para a entidade Caixinha (envelope de orçamento mensal).
"""
from sqlalchemy import Column, Integer, String, Float, ForeignKey, UniqueConstraint
from financas.database import Base


class Caixinha(Base):
    __tablename__ = "caixinhas"
    __table_args__ = (
        UniqueConstraint("user_id", "nome_caixinha", "mes_referencia", name="uq_caixinha_usuario_nome_mes"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    nome_caixinha = Column(String(100), nullable=False)
    porcentagem_alvo = Column(Float, nullable=False, default=0.0)  # 0 a 100

    valor_alocado = Column(Float, nullable=False, default=0.0)
    valor_gasto = Column(Float, nullable=False, default=0.0)
    # Sempre gravado como valor_alocado - valor_gasto no mesmo UPDATE
    saldo_disponivel = Column(Float, nullable=False, default=0.0)

    mes_referencia = Column(String(7), nullable=False, index=True)  # 'YYYY-MM'
