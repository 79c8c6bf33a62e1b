# -*- coding: utf-8 -*-
"""
Liquidações: movimentos de dinheiro que saem de uma caixinha (ou conta) e
entram em outra entidade: dívida, meta, fatura de cartão ou compra da
wishlist.

Cada operação valida tudo antes de escrever e grava em uma única transação;
não há compensação nem nova tentativa. A existência e a posse de dívida,
meta, fatura, conta e item são conferidas aqui; a posse das caixinhas
informadas é conferida pela camada HTTP.
"""

import logging
from datetime import date

from financas.database import Database
from financas.exceptions import (ContaNaoEncontrada, DividaJaQuitada, DividaNaoEncontrada, EntradaInvalida,
                                 FaturaNaoEncontrada, ItemNaoEncontrado, MetaNaoEncontrada, ValorInvalido)
from financas.models.cartao import Cartao, Fatura
from financas.models.conta import Conta
from financas.models.divida import Amortizacao, Divida
from financas.models.meta import Aporte, Meta
from financas.models.transacao import Transacao
from financas.models.wishlist import ItemWishlist
from financas.services.gastos import debitar_caixinha

logger = logging.getLogger(__name__)


def _exigir_valor_positivo(valor):
    if valor is None or valor <= 0:
        raise ValorInvalido(valor=valor)


class ServicoLiquidacoes:
    def __init__(self, database: Database):
        self.database = database

    # ========================
    # DÍVIDAS
    # ========================

    def amortizar_divida(self, usuario_id: int, divida_id: int, caixinha_id: int, valor: float,
                         data_pagamento: date = None, observacao: str = None) -> Divida:
        _exigir_valor_positivo(valor)
        data_pagamento = data_pagamento or date.today()

        with self.database.transacao() as session:
            divida = (
                session.query(Divida)
                .filter(Divida.id == divida_id, Divida.user_id == usuario_id)
                .with_for_update()
                .first()
            )
            if divida is None:
                raise DividaNaoEncontrada(divida_id=divida_id)
            if divida.status == "quitado":
                raise DividaJaQuitada(divida_id=divida_id)

            novo_valor = max(divida.valor_atual - valor, 0.0)
            divida.valor_atual = novo_valor
            if novo_valor == 0:
                divida.status = "quitado"
                divida.data_quitacao = data_pagamento

            session.add(Amortizacao(
                divida_id=divida.id,
                caixinha_id=caixinha_id,
                valor=valor,
                data_pagamento=data_pagamento,
                observacao=observacao,
            ))
            debitar_caixinha(session, caixinha_id, valor)
            session.flush()
            divida = session.get(Divida, divida_id, populate_existing=True)

        logger.info(
            f"Amortização de {valor:.2f} na dívida {divida_id} (restante={divida.valor_atual:.2f}, status={divida.status})"
        )
        return divida

    # ========================
    # METAS
    # ========================

    def aportar_meta(self, usuario_id: int, meta_id: int, valor: float, data_aporte: date = None,
                     caixinha_id: int = None, observacao: str = None):
        """
        Soma o aporte à meta. Metas já concluídas continuam recebendo aportes
        (sem teto). Devolve ``(meta, concluida)``.
        """
        _exigir_valor_positivo(valor)
        data_aporte = data_aporte or date.today()

        with self.database.transacao() as session:
            meta = (
                session.query(Meta)
                .filter(Meta.id == meta_id, Meta.user_id == usuario_id)
                .with_for_update()
                .first()
            )
            if meta is None:
                raise MetaNaoEncontrada(meta_id=meta_id)

            meta.valor_atual = (meta.valor_atual or 0.0) + valor
            if meta.valor_atual >= meta.valor_alvo:
                meta.status = "concluida"

            session.add(Aporte(meta_id=meta.id, valor=valor, data_aporte=data_aporte, observacao=observacao))
            if caixinha_id:
                debitar_caixinha(session, caixinha_id, valor)
            session.flush()
            meta = session.get(Meta, meta_id, populate_existing=True)

        concluida = meta.status == "concluida"
        logger.info(f"Aporte de {valor:.2f} na meta {meta_id} (atual={meta.valor_atual:.2f}, concluida={concluida})")
        return meta, concluida

    # ========================
    # FATURAS
    # ========================

    def pagar_fatura(self, usuario_id: int, cartao_id: int, fatura_id: int, conta_id: int, valor: float,
                     data_pagamento: date = None) -> str:
        """
        Abate ``valor`` da fatura, debita a conta (sem checar saldo) e libera
        o mesmo valor no limite do cartão. Devolve o novo status da fatura.
        """
        _exigir_valor_positivo(valor)
        data_pagamento = data_pagamento or date.today()

        with self.database.transacao() as session:
            fatura = (
                session.query(Fatura)
                .join(Cartao, Fatura.cartao_id == Cartao.id)
                .filter(Fatura.id == fatura_id, Cartao.id == cartao_id, Cartao.user_id == usuario_id)
                .with_for_update(of=Fatura)
                .first()
            )
            if fatura is None:
                raise FaturaNaoEncontrada(fatura_id=fatura_id)

            conta_existe = (
                session.query(Conta.id)
                .filter(Conta.id == conta_id, Conta.user_id == usuario_id)
                .first()
            )
            if conta_existe is None:
                raise ContaNaoEncontrada(conta_id=conta_id)

            novo_total = max(fatura.valor_total - valor, 0.0)
            novo_status = "paga" if novo_total <= 0 else "aberta"
            fatura.valor_total = novo_total
            fatura.status = novo_status
            if novo_status == "paga":
                fatura.data_pagamento = data_pagamento
            session.flush()

            session.query(Conta).filter(Conta.id == conta_id).update(
                {Conta.saldo_atual: Conta.saldo_atual - valor}, synchronize_session=False
            )
            session.query(Cartao).filter(Cartao.id == cartao_id).update(
                {Cartao.limite_disponivel: Cartao.limite_disponivel + valor}, synchronize_session=False
            )

        logger.info(f"Pagamento de {valor:.2f} na fatura {fatura_id} (cartão {cartao_id}, conta {conta_id}): {novo_status}")
        return novo_status

    # ========================
    # WISHLIST
    # ========================

    def comprar_item_wishlist(self, usuario_id: int, item_id: int, caixinha_id: int = None,
                              valor_real: float = None) -> ItemWishlist:
        """
        Marca o item como comprado. Com caixinha, debita o valor pago
        (ou o estimado) e registra a saída correspondente com data de hoje.
        """
        if valor_real is not None:
            _exigir_valor_positivo(valor_real)

        with self.database.transacao() as session:
            item = (
                session.query(ItemWishlist)
                .filter(ItemWishlist.id == item_id, ItemWishlist.user_id == usuario_id)
                .with_for_update()
                .first()
            )
            if item is None:
                raise ItemNaoEncontrado(item_id=item_id)
            if item.status == "comprado":
                raise EntradaInvalida("Item já foi comprado", item_id=item_id)

            item.status = "comprado"

            if caixinha_id:
                valor = valor_real or item.valor_estimado
                session.add(Transacao(
                    user_id=usuario_id,
                    tipo="saida",
                    valor=valor,
                    descricao=f"Compra: {item.item}",
                    caixinha_id=caixinha_id,
                    data=date.today(),
                ))
                debitar_caixinha(session, caixinha_id, valor)
            session.flush()
            item = session.get(ItemWishlist, item_id, populate_existing=True)

        logger.info(f"Item {item_id} da wishlist comprado (usuario={usuario_id}, caixinha={caixinha_id})")
        return item
