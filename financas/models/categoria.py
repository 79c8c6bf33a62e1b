# -*- coding: utf-8 -*-
"""
Modelo SQLAlchemy para Categorias de transação.

Categorias do sistema não têm dono (user_id nulo) e aparecem para todos os
usuários; as personalizadas pertencem a um usuário e podem ser excluídas.
"""
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from financas.database import Base

TIPOS_CATEGORIA = ("entrada", "saida")

CATEGORIAS_SISTEMA = (
    ("Salário", "entrada", "#10B981"),
    ("Renda extra", "entrada", "#22C55E"),
    ("Alimentação", "saida", "#F59E0B"),
    ("Moradia", "saida", "#3B82F6"),
    ("Transporte", "saida", "#6366F1"),
    ("Saúde", "saida", "#EF4444"),
    ("Lazer", "saida", "#EC4899"),
    ("Educação", "saida", "#8B5CF6"),
)


class Categoria(Base):
    __tablename__ = "categorias"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("usuarios.id"), nullable=True, index=True)
    nome = Column(String(100), nullable=False)
    tipo = Column(String(10), nullable=False)
    icone = Column(String(50), nullable=True)
    cor = Column(String(7), default="#6B7280")
    is_sistema = Column(Boolean, nullable=False, default=False)
