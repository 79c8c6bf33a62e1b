# -*- coding: utf-8 -*-
"""
Faturas de cartão: fatura corrente (busca ou cria) e lançamento de compras.
"""

import calendar
import logging
from datetime import date

from dateutil.relativedelta import relativedelta

from financas.database import Database
from financas.exceptions import CartaoNaoEncontrado, ValorInvalido
from financas.models.cartao import Cartao, Fatura

logger = logging.getLogger(__name__)


def _dia_no_mes(ano: int, mes: int, dia: int) -> date:
    # Dia 31 em mês de 30 dias vira o último dia do mês
    return date(ano, mes, min(dia, calendar.monthrange(ano, mes)[1]))


def mes_da_fatura_atual(dia_fechamento: int, hoje: date = None) -> str:
    """Após o dia de fechamento, as compras caem na fatura do mês seguinte."""
    hoje = hoje or date.today()
    if hoje.day > dia_fechamento:
        hoje = hoje + relativedelta(months=1)
    return hoje.strftime("%Y-%m")


def _obter_cartao(session, usuario_id: int, cartao_id: int) -> Cartao:
    cartao = (
        session.query(Cartao)
        .filter(Cartao.id == cartao_id, Cartao.user_id == usuario_id)
        .first()
    )
    if cartao is None:
        raise CartaoNaoEncontrado(cartao_id=cartao_id)
    return cartao


def buscar_ou_criar_fatura(session, cartao: Cartao, mes_referencia: str) -> Fatura:
    fatura = (
        session.query(Fatura)
        .filter(Fatura.cartao_id == cartao.id, Fatura.mes_referencia == mes_referencia)
        .first()
    )
    if fatura is None:
        ano, mes = (int(parte) for parte in mes_referencia.split("-"))
        fatura = Fatura(
            cartao_id=cartao.id,
            mes_referencia=mes_referencia,
            valor_total=0.0,
            status="aberta",
            data_fechamento=_dia_no_mes(ano, mes, cartao.dia_fechamento),
            data_vencimento=_dia_no_mes(ano, mes, cartao.dia_vencimento),
        )
        session.add(fatura)
        session.flush()
    return fatura


class ServicoCartoes:
    def __init__(self, database: Database):
        self.database = database

    def fatura_atual(self, usuario_id: int, cartao_id: int, hoje: date = None):
        with self.database.transacao() as session:
            cartao = _obter_cartao(session, usuario_id, cartao_id)
            fatura = buscar_ou_criar_fatura(session, cartao, mes_da_fatura_atual(cartao.dia_fechamento, hoje))
        return cartao, fatura

    def lancar_compra(self, usuario_id: int, cartao_id: int, valor: float, hoje: date = None) -> Fatura:
        """
        Lança uma compra na fatura corrente: soma ao total da fatura e reduz o
        limite disponível do cartão, na mesma transação.
        """
        if valor is None or valor <= 0:
            raise ValorInvalido(valor=valor)

        with self.database.transacao() as session:
            cartao = _obter_cartao(session, usuario_id, cartao_id)
            fatura = buscar_ou_criar_fatura(session, cartao, mes_da_fatura_atual(cartao.dia_fechamento, hoje))
            fatura_id = fatura.id

            session.query(Fatura).filter(Fatura.id == fatura_id).update(
                {Fatura.valor_total: Fatura.valor_total + valor, Fatura.status: "aberta"},
                synchronize_session=False,
            )
            session.query(Cartao).filter(Cartao.id == cartao_id).update(
                {Cartao.limite_disponivel: Cartao.limite_disponivel - valor}, synchronize_session=False
            )
            fatura = session.get(Fatura, fatura_id, populate_existing=True)

        logger.info(f"Compra de {valor:.2f} lançada na fatura {fatura.mes_referencia} do cartão {cartao_id}")
        return fatura


def melhor_dia_compra(cartao: Cartao, hoje: date = None) -> dict:
    """
    Melhor dia para comprar é o dia seguinte ao fechamento: a compra só entra
    na fatura do mês seguinte. Também informa quantos dias faltam para o
    próximo fechamento e quando vence a fatura que está aberta hoje.
    """
    hoje = hoje or date.today()
    melhor_dia = 1 if cartao.dia_fechamento + 1 > 28 else cartao.dia_fechamento + 1

    fechamento = _dia_no_mes(hoje.year, hoje.month, cartao.dia_fechamento)
    if hoje > fechamento:
        seguinte = hoje + relativedelta(months=1)
        fechamento = _dia_no_mes(seguinte.year, seguinte.month, cartao.dia_fechamento)
    dias_ate_fechamento = (fechamento - hoje).days

    if dias_ate_fechamento <= 5:
        dica = "Compras hoje entrarão na fatura atual. Considere aguardar após o fechamento para mais prazo."
    else:
        dica = f"Você tem {dias_ate_fechamento} dias até o fechamento da fatura atual."

    return {
        "melhor_dia": melhor_dia,
        "dia_fechamento": cartao.dia_fechamento,
        "dia_vencimento": cartao.dia_vencimento,
        "dias_ate_fechamento": dias_ate_fechamento,
        "data_vencimento_proxima": _dia_no_mes(fechamento.year, fechamento.month, cartao.dia_vencimento),
        "dica": dica,
    }
