# -*- coding: utf-8 -*-
"""
Configurações da aplicação lidas do ambiente (arquivo .env suportado).
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Usa variável de ambiente ou default para SQLite
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./database/financas.db")

# Se for PostgreSQL no Render, ajusta o prefixo se necessário
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# Segurança
SECRET_KEY = os.getenv("SECRET_KEY", "troque-esta-chave-em-producao")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 8))  # 8 horas

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3001")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE") or None  # None = console

# Regra de negócio: as porcentagens das caixinhas de um mês devem somar 100
EXIGIR_SOMA_100 = os.getenv("EXIGIR_SOMA_100", "true").lower() in ("1", "true", "sim", "yes")
