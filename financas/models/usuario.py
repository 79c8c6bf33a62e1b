# financas/models/usuario.py
from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime
from financas.database import Base


class Usuario(Base):
    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, index=True)
    nome = Column(String(100), nullable=False)
    # O e-mail é a chave de login
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    criado_em = Column(DateTime, default=datetime.utcnow)
