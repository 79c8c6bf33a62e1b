# -*- coding: utf-8 -*-
"""
Fábricas de serviços para uso com Depends. Todas recebem o ``Database``
injetado, de modo que os testes trocam o banco com ``dependency_overrides``.
"""

from fastapi import Depends

from financas.database import Database, get_database
from financas.services.alocacao import ServicoAlocacao
from financas.services.caixinhas import ServicoCaixinhas
from financas.services.cartoes import ServicoCartoes
from financas.services.liquidacoes import ServicoLiquidacoes
from financas.services.transacoes import ServicoTransacoes


def get_servico_caixinhas(database: Database = Depends(get_database)) -> ServicoCaixinhas:
    return ServicoCaixinhas(database)


def get_servico_alocacao(database: Database = Depends(get_database)) -> ServicoAlocacao:
    return ServicoAlocacao(database)


def get_servico_transacoes(database: Database = Depends(get_database)) -> ServicoTransacoes:
    return ServicoTransacoes(database)


def get_servico_liquidacoes(database: Database = Depends(get_database)) -> ServicoLiquidacoes:
    return ServicoLiquidacoes(database)


def get_servico_cartoes(database: Database = Depends(get_database)) -> ServicoCartoes:
    return ServicoCartoes(database)
