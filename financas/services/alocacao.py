# -*- coding: utf-8 -*-
"""
Distribuição de entradas entre as caixinhas do mês.

Cada caixinha recebe ``valor * porcentagem_alvo / 100``, usando as
porcentagens gravadas no momento da distribuição (mesmo que não somem 100).
A reversão usa o mês da transação original, nunca o mês corrente.
"""

import logging

from financas.database import Database
from financas.exceptions import SemCaixinhasConfiguradas, ValorInvalido
from financas.models.caixinha import Caixinha
from financas.services.caixinhas import listar_do_mes, mes_atual, validar_mes

logger = logging.getLogger(__name__)


def contar_caixinhas(session, usuario_id: int, mes: str) -> int:
    return (
        session.query(Caixinha)
        .filter(Caixinha.user_id == usuario_id, Caixinha.mes_referencia == mes)
        .count()
    )


def _ajustar_alocado(session, usuario_id: int, mes: str, valor: float) -> int:
    parcela = valor * Caixinha.porcentagem_alvo / 100.0

    # Um único UPDATE relativo para todas as caixinhas do mês
    session.flush()
    linhas = (
        session.query(Caixinha)
        .filter(Caixinha.user_id == usuario_id, Caixinha.mes_referencia == mes)
        .update(
            {
                Caixinha.valor_alocado: Caixinha.valor_alocado + parcela,
                Caixinha.saldo_disponivel: Caixinha.valor_alocado + parcela - Caixinha.valor_gasto,
            },
            synchronize_session=False,
        )
    )
    session.expire_all()
    return linhas


def aplicar_alocacao(session, usuario_id: int, mes: str, valor: float) -> int:
    return _ajustar_alocado(session, usuario_id, mes, valor)


def reverter_alocacao(session, usuario_id: int, mes: str, valor: float) -> int:
    linhas = _ajustar_alocado(session, usuario_id, mes, -valor)
    if linhas == 0:
        logger.warning(
            f"Reversão de entrada de {valor:.2f} sem caixinhas no mês {mes} (usuario={usuario_id})"
        )
    return linhas


class ServicoAlocacao:
    def __init__(self, database: Database):
        self.database = database

    def alocar_entrada(self, usuario_id: int, valor: float, mes: str = None):
        """Distribui ``valor`` entre as caixinhas do mês e devolve o conjunto atualizado."""
        if valor is None or valor <= 0:
            raise ValorInvalido(valor=valor)
        mes = validar_mes(mes or mes_atual())

        with self.database.transacao() as session:
            if contar_caixinhas(session, usuario_id, mes) == 0:
                raise SemCaixinhasConfiguradas(mes=mes)
            aplicar_alocacao(session, usuario_id, mes, valor)
            caixinhas = listar_do_mes(session, usuario_id, mes)

        logger.info(f"Entrada de {valor:.2f} distribuída em {len(caixinhas)} caixinhas ({mes}, usuario={usuario_id})")
        return caixinhas

    def desalocar_entrada(self, usuario_id: int, valor: float, mes: str):
        """Desfaz a distribuição de ``valor`` nas caixinhas de ``mes``."""
        if valor is None or valor <= 0:
            raise ValorInvalido(valor=valor)
        mes = validar_mes(mes)

        with self.database.transacao() as session:
            reverter_alocacao(session, usuario_id, mes, valor)
            caixinhas = listar_do_mes(session, usuario_id, mes)

        logger.info(f"Entrada de {valor:.2f} retirada das caixinhas de {mes} (usuario={usuario_id})")
        return caixinhas
