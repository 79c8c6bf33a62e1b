# -*- coding: utf-8 -*-
"""
Configuração do banco de dados SQLAlchemy para a aplicação FastAPI.

O acesso ao banco é feito por um objeto ``Database`` construído explicitamente
e injetado nos serviços. Cada operação de escrita do motor financeiro usa
``Database.transacao()``: uma sessão nova, commit no sucesso, rollback em
qualquer erro e fechamento garantido da sessão.
"""

import logging
from contextlib import contextmanager
from pathlib import Path

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from financas import config
from financas.exceptions import ErroArmazenamento

logger = logging.getLogger(__name__)

# Cria uma Base class
Base = declarative_base()


class Database:
    def __init__(self, url: str):
        self.url = url

        # Configuração de argumentos de conexão
        connect_args = {}
        if url.startswith("sqlite"):
            connect_args = {"check_same_thread": False}
            caminho = url.replace("sqlite:///", "", 1)
            if caminho and caminho != url and ":memory:" not in caminho:
                Path(caminho).parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(
            url,
            connect_args=connect_args,
            # pool_pre_ping=True: Verifica se a conexão está viva antes de usar
            pool_pre_ping=True,
            # pool_recycle: Recicla conexões a cada hora para evitar timeouts do banco
            pool_recycle=3600,
        )
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def criar_tabelas(self):
        # Importa os modelos para registrá-los na Base antes do create_all
        from financas.models import (caixinha, cartao, categoria, conta, divida, meta,  # noqa: F401
                                     recorrencia, transacao, usuario, wishlist)
        Base.metadata.create_all(bind=self.engine)

    def sessao(self):
        """Gera uma sessão para uso com Depends (leituras e CRUD simples)."""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    @contextmanager
    def transacao(self):
        """
        Unidade atômica: tudo o que for escrito na sessão é confirmado junto
        ou descartado junto. Os objetos devolvidos continuam legíveis após o
        commit (expire_on_commit=False).
        """
        session = self.SessionLocal(expire_on_commit=False)
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Rollback da transação por erro de banco: {e}")
            raise ErroArmazenamento() from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self):
        self.engine.dispose()


_database = None


def get_database() -> Database:
    """Instância padrão, criada na primeira chamada a partir de DATABASE_URL."""
    global _database
    if _database is None:
        _database = Database(config.DATABASE_URL)
    return _database


# Função para obter uma sessão do banco de dados (usada com Depends)
def get_db(database: Database = Depends(get_database)):
    yield from database.sessao()
