# -*- coding: utf-8 -*-
"""
Débito e estorno de gastos em uma caixinha.

O saldo disponível pode ficar negativo: é o sinal de "estourou" exibido no
cliente, não um erro. Os ids de caixinha recebidos aqui já tiveram a posse
verificada pelo chamador.
"""

import logging

from financas.database import Database
from financas.exceptions import CaixinhaNaoEncontrada, ValorInvalido
from financas.models.caixinha import Caixinha

logger = logging.getLogger(__name__)


def _ajustar_gasto(session, caixinha_id: int, delta: float):
    # UPDATE relativo: nunca lê-modifica-grava o gasto na aplicação
    session.flush()
    linhas = (
        session.query(Caixinha)
        .filter(Caixinha.id == caixinha_id)
        .update(
            {
                Caixinha.valor_gasto: Caixinha.valor_gasto + delta,
                Caixinha.saldo_disponivel: Caixinha.valor_alocado - (Caixinha.valor_gasto + delta),
            },
            synchronize_session=False,
        )
    )
    session.expire_all()
    if linhas == 0:
        raise CaixinhaNaoEncontrada(caixinha_id=caixinha_id)


def debitar_caixinha(session, caixinha_id: int, valor: float):
    _ajustar_gasto(session, caixinha_id, valor)


def estornar_caixinha(session, caixinha_id: int, valor: float):
    _ajustar_gasto(session, caixinha_id, -valor)


class ServicoGastos:
    def __init__(self, database: Database):
        self.database = database

    def debitar(self, caixinha_id: int, valor: float) -> Caixinha:
        if valor is None or valor <= 0:
            raise ValorInvalido(valor=valor)
        with self.database.transacao() as session:
            debitar_caixinha(session, caixinha_id, valor)
            caixinha = session.get(Caixinha, caixinha_id, populate_existing=True)
        logger.info(f"Débito de {valor:.2f} na caixinha {caixinha_id}")
        return caixinha

    def estornar(self, caixinha_id: int, valor: float) -> Caixinha:
        if valor is None or valor <= 0:
            raise ValorInvalido(valor=valor)
        with self.database.transacao() as session:
            estornar_caixinha(session, caixinha_id, valor)
            caixinha = session.get(Caixinha, caixinha_id, populate_existing=True)
        logger.info(f"Estorno de {valor:.2f} na caixinha {caixinha_id}")
        return caixinha
