# -*- coding: utf-8 -*-
"""
Carga inicial das categorias do sistema.
"""

import logging

from financas.database import Database
from financas.models.categoria import CATEGORIAS_SISTEMA, Categoria

logger = logging.getLogger(__name__)


def garantir_categorias_sistema(database: Database) -> int:
    """Cria as categorias do sistema que ainda não existem. Devolve quantas foram criadas."""
    with database.transacao() as session:
        existentes = {
            (nome, tipo)
            for nome, tipo in session.query(Categoria.nome, Categoria.tipo).filter(Categoria.is_sistema.is_(True))
        }
        novas = [
            Categoria(user_id=None, nome=nome, tipo=tipo, cor=cor, is_sistema=True)
            for nome, tipo, cor in CATEGORIAS_SISTEMA
            if (nome, tipo) not in existentes
        ]
        session.add_all(novas)

    if novas:
        logger.info(f"{len(novas)} categorias do sistema criadas")
    return len(novas)
