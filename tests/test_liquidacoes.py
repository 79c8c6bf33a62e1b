from datetime import date

import pytest

from financas.exceptions import (CaixinhaNaoEncontrada, ContaNaoEncontrada, DividaJaQuitada, DividaNaoEncontrada,
                                 EntradaInvalida, FaturaNaoEncontrada, ItemNaoEncontrado, MetaNaoEncontrada,
                                 ValorInvalido)
from financas.models.cartao import Cartao, Fatura
from financas.models.conta import Conta
from financas.models.divida import Amortizacao, Divida
from financas.models.meta import Aporte, Meta
from financas.models.transacao import Transacao
from financas.models.wishlist import ItemWishlist
from financas.services.alocacao import ServicoAlocacao
from financas.services.cartoes import ServicoCartoes
from financas.services.liquidacoes import ServicoLiquidacoes

MES = "2024-05"


@pytest.fixture
def servico(database):
    return ServicoLiquidacoes(database)


@pytest.fixture
def custos(database, usuario, caixinhas):
    ServicoAlocacao(database).alocar_entrada(usuario.id, 1000, MES)
    return caixinhas["Custos"]


def _adicionar(database, objeto):
    with database.transacao() as session:
        session.add(objeto)
        session.flush()
    return objeto


# --- Dívidas ---

@pytest.fixture
def divida(database, usuario):
    return _adicionar(database, Divida(
        user_id=usuario.id, descricao="Empréstimo", valor_original=1000, valor_atual=1000,
        status="pendente", data_inicio=date(2024, 1, 10),
    ))


def test_amortizar_400_e_depois_700(database, servico, usuario, divida, custos, ler_caixinha):
    primeira = servico.amortizar_divida(usuario.id, divida.id, custos.id, 400, date(2024, 5, 5))
    assert primeira.valor_atual == pytest.approx(600)
    assert primeira.status == "pendente"
    assert primeira.data_quitacao is None

    segunda = servico.amortizar_divida(usuario.id, divida.id, custos.id, 700, date(2024, 5, 20))
    assert segunda.valor_atual == 0
    assert segunda.status == "quitado"
    assert segunda.data_quitacao == date(2024, 5, 20)
    assert segunda.percentual_pago == 100

    caixinha = ler_caixinha(custos.id)
    assert caixinha.valor_gasto == pytest.approx(1100)
    assert caixinha.saldo_disponivel == pytest.approx(-550)
    with database.transacao() as session:
        assert [a.valor for a in session.query(Amortizacao).order_by(Amortizacao.id)] == [400, 700]


def test_divida_quitada_nao_aceita_amortizacao(database, servico, usuario, divida, custos, ler_caixinha):
    servico.amortizar_divida(usuario.id, divida.id, custos.id, 1000)
    with pytest.raises(DividaJaQuitada):
        servico.amortizar_divida(usuario.id, divida.id, custos.id, 10)
    assert ler_caixinha(custos.id).valor_gasto == pytest.approx(1000)


def test_amortizacao_invalida_nao_escreve(database, servico, usuario, outro_usuario, divida, custos, ler_caixinha):
    with pytest.raises(ValorInvalido):
        servico.amortizar_divida(usuario.id, divida.id, custos.id, 0)
    with pytest.raises(DividaNaoEncontrada):
        servico.amortizar_divida(outro_usuario.id, divida.id, custos.id, 100)
    with pytest.raises(DividaNaoEncontrada):
        servico.amortizar_divida(usuario.id, 4242, custos.id, 100)

    assert ler_caixinha(custos.id).valor_gasto == 0
    with database.transacao() as session:
        assert session.get(Divida, divida.id).valor_atual == 1000
        assert session.query(Amortizacao).count() == 0


def test_amortizacao_com_caixinha_inexistente_desfaz_tudo(database, servico, usuario, divida):
    # a dívida e a amortização já estão na sessão quando a caixinha falha
    with pytest.raises(CaixinhaNaoEncontrada):
        servico.amortizar_divida(usuario.id, divida.id, 9999, 1000)

    with database.transacao() as session:
        atual = session.get(Divida, divida.id)
        assert atual.valor_atual == 1000
        assert atual.status == "pendente"
        assert atual.data_quitacao is None
        assert session.query(Amortizacao).count() == 0


# --- Metas ---

@pytest.fixture
def meta(database, usuario):
    return _adicionar(database, Meta(user_id=usuario.id, nome="Reserva de emergência", valor_alvo=500,
                                     valor_atual=0, status="ativa"))


def test_aporte_conclui_meta_sem_teto(database, servico, usuario, meta):
    meta_atual, concluida = servico.aportar_meta(usuario.id, meta.id, 300)
    assert not concluida
    assert meta_atual.status == "ativa"

    meta_atual, concluida = servico.aportar_meta(usuario.id, meta.id, 250)
    assert concluida
    assert meta_atual.valor_atual == pytest.approx(550)

    meta_atual, concluida = servico.aportar_meta(usuario.id, meta.id, 100)
    assert concluida
    assert meta_atual.valor_atual == pytest.approx(650)
    assert meta_atual.percentual_concluido == pytest.approx(130)
    with database.transacao() as session:
        assert session.query(Aporte).filter(Aporte.meta_id == meta.id).count() == 3


def test_aporte_com_caixinha_debita(servico, usuario, meta, custos, ler_caixinha):
    servico.aportar_meta(usuario.id, meta.id, 200, date(2024, 5, 1), caixinha_id=custos.id)
    assert ler_caixinha(custos.id).saldo_disponivel == pytest.approx(350)


def test_aporte_sem_caixinha_nao_mexe_nas_caixinhas(servico, usuario, meta, custos, ler_caixinha):
    servico.aportar_meta(usuario.id, meta.id, 200)
    assert ler_caixinha(custos.id).valor_gasto == 0


def test_aporte_em_meta_de_outro_usuario(servico, outro_usuario, meta):
    with pytest.raises(MetaNaoEncontrada):
        servico.aportar_meta(outro_usuario.id, meta.id, 10)


def test_aporte_com_caixinha_inexistente_desfaz_tudo(database, servico, usuario, meta):
    with pytest.raises(CaixinhaNaoEncontrada):
        servico.aportar_meta(usuario.id, meta.id, 600, caixinha_id=9999)

    with database.transacao() as session:
        atual = session.get(Meta, meta.id)
        assert atual.valor_atual == 0
        assert atual.status == "ativa"
        assert session.query(Aporte).count() == 0


# --- Faturas ---

@pytest.fixture
def cartao(database, usuario):
    return _adicionar(database, Cartao(user_id=usuario.id, nome="Visa", limite=2000, limite_disponivel=2000,
                                       dia_fechamento=5, dia_vencimento=15))


@pytest.fixture
def conta(database, usuario):
    return _adicionar(database, Conta(user_id=usuario.id, nome="Corrente", tipo="corrente",
                                      saldo_inicial=3000, saldo_atual=3000))


@pytest.fixture
def fatura(database, usuario, cartao):
    return ServicoCartoes(database).lancar_compra(usuario.id, cartao.id, 800, hoje=date(2024, 5, 2))


def test_pagamento_parcial_e_total(database, servico, usuario, cartao, conta, fatura):
    status = servico.pagar_fatura(usuario.id, cartao.id, fatura.id, conta.id, 300)
    assert status == "aberta"

    status = servico.pagar_fatura(usuario.id, cartao.id, fatura.id, conta.id, 600, date(2024, 5, 14))
    assert status == "paga"

    with database.transacao() as session:
        fatura_atual = session.get(Fatura, fatura.id)
        assert fatura_atual.valor_total == 0
        assert fatura_atual.data_pagamento == date(2024, 5, 14)
        assert session.get(Conta, conta.id).saldo_atual == pytest.approx(2100)
        assert session.get(Cartao, cartao.id).limite_disponivel == pytest.approx(2100)


def test_fatura_de_outro_cartao(database, servico, usuario, outro_usuario, cartao, conta, fatura):
    outro = _adicionar(database, Cartao(user_id=usuario.id, nome="Master", limite=500, limite_disponivel=500,
                                        dia_fechamento=1, dia_vencimento=10))
    with pytest.raises(FaturaNaoEncontrada):
        servico.pagar_fatura(usuario.id, outro.id, fatura.id, conta.id, 100)
    with pytest.raises(FaturaNaoEncontrada):
        servico.pagar_fatura(outro_usuario.id, cartao.id, fatura.id, conta.id, 100)


def test_pagamento_com_conta_inexistente_nao_escreve(database, servico, usuario, cartao, fatura):
    with pytest.raises(ContaNaoEncontrada):
        servico.pagar_fatura(usuario.id, cartao.id, fatura.id, 777, 100)
    with database.transacao() as session:
        assert session.get(Fatura, fatura.id).valor_total == pytest.approx(800)


def test_pagamento_acima_da_fatura_libera_o_valor_pago(database, servico, usuario, cartao, conta, fatura):
    status = servico.pagar_fatura(usuario.id, cartao.id, fatura.id, conta.id, 1000)
    assert status == "paga"

    with database.transacao() as session:
        assert session.get(Fatura, fatura.id).valor_total == 0
        assert session.get(Conta, conta.id).saldo_atual == pytest.approx(2000)
        # o limite volta pelo valor pago inteiro, mesmo acima do que estava comprometido
        assert session.get(Cartao, cartao.id).limite_disponivel == pytest.approx(2200)

    # fatura já paga continua aceitando pagamento
    assert servico.pagar_fatura(usuario.id, cartao.id, fatura.id, conta.id, 50) == "paga"
    with database.transacao() as session:
        assert session.get(Cartao, cartao.id).limite_disponivel == pytest.approx(2250)


# --- Wishlist ---

@pytest.fixture
def item(database, usuario):
    return _adicionar(database, ItemWishlist(user_id=usuario.id, item="Notebook", valor_estimado=400,
                                             contribuicao_mensal=100, necessidade=4, desejo=5))


def test_comprar_item_com_caixinha(database, servico, usuario, item, custos, ler_caixinha):
    comprado = servico.comprar_item_wishlist(usuario.id, item.id, caixinha_id=custos.id, valor_real=380)

    assert comprado.status == "comprado"
    assert ler_caixinha(custos.id).valor_gasto == pytest.approx(380)
    with database.transacao() as session:
        transacao = session.query(Transacao).filter(Transacao.tipo == "saida").one()
        assert transacao.descricao == "Compra: Notebook"
        assert transacao.valor == pytest.approx(380)
        assert transacao.data == date.today()


def test_comprar_item_sem_valor_real_usa_o_estimado(database, servico, usuario, item, custos, ler_caixinha):
    servico.comprar_item_wishlist(usuario.id, item.id, caixinha_id=custos.id)

    caixinha = ler_caixinha(custos.id)
    assert caixinha.valor_gasto == pytest.approx(400)
    assert caixinha.saldo_disponivel == pytest.approx(150)
    with database.transacao() as session:
        assert session.query(Transacao).filter(Transacao.tipo == "saida").one().valor == pytest.approx(400)


def test_comprar_item_sem_caixinha(database, servico, usuario, item):
    servico.comprar_item_wishlist(usuario.id, item.id)
    with database.transacao() as session:
        assert session.query(Transacao).count() == 0


def test_item_nao_pode_ser_comprado_duas_vezes(servico, usuario, outro_usuario, item):
    servico.comprar_item_wishlist(usuario.id, item.id)
    with pytest.raises(EntradaInvalida):
        servico.comprar_item_wishlist(usuario.id, item.id)
    with pytest.raises(ItemNaoEncontrado):
        servico.comprar_item_wishlist(outro_usuario.id, item.id)


def test_projecao_da_wishlist(item):
    assert item.prioridade_score == 9
    assert item.meses_para_comprar == 4
    item.contribuicao_mensal = 0
    assert item.meses_para_comprar is None
    assert item.data_prevista_compra is None
