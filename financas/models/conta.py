# financas/models/conta.py
from sqlalchemy import Column, Integer, String, Float, Boolean, ForeignKey
from financas.database import Base

TIPOS_CONTA = ("corrente", "poupanca", "investimento", "carteira")


class Conta(Base):
    __tablename__ = "contas"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    nome = Column(String(100), nullable=False)
    tipo = Column(String(20), nullable=False)
    saldo_inicial = Column(Float, default=0.0)
    saldo_atual = Column(Float, default=0.0)  # pode ficar negativo (cheque especial)
    cor = Column(String(7), default="#3B82F6")
    ativo = Column(Boolean, default=True)
