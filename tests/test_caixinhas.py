from datetime import date

import pytest

from financas.exceptions import CaixinhaNaoEncontrada, EntradaInvalida, PorcentagemInvalida
from financas.models.divida import Amortizacao, Divida
from financas.models.meta import Meta
from financas.models.transacao import Transacao
from financas.models.wishlist import ItemWishlist
from financas.services.alocacao import ServicoAlocacao
from financas.services.caixinhas import ServicoCaixinhas, validar_mes
from financas.services.liquidacoes import ServicoLiquidacoes
from financas.services.transacoes import ServicoTransacoes

MES = "2024-05"


def test_configurar_cria_caixinhas_zeradas_ordenadas(database, usuario):
    resultado = ServicoCaixinhas(database).configurar(usuario.id, MES, [
        {"nome": "Reserva", "porcentagem": 30},
        {"nome": "Custos", "porcentagem": 70},
    ])

    assert [c.nome_caixinha for c in resultado] == ["Custos", "Reserva"]
    for caixinha in resultado:
        assert caixinha.valor_alocado == 0
        assert caixinha.valor_gasto == 0
        assert caixinha.saldo_disponivel == 0
        assert caixinha.mes_referencia == MES


def test_reconfigurar_so_muda_porcentagem(database, usuario, caixinhas):
    ServicoAlocacao(database).alocar_entrada(usuario.id, 1000, MES)

    resultado = ServicoCaixinhas(database).configurar(usuario.id, MES, [
        {"nome": "Custos", "porcentagem": 50},
        {"nome": "Lazer", "porcentagem": 20},
    ])

    por_nome = {c.nome_caixinha: c for c in resultado}
    assert len(resultado) == 3
    assert por_nome["Custos"].id == caixinhas["Custos"].id
    assert por_nome["Custos"].porcentagem_alvo == 50
    assert por_nome["Custos"].valor_alocado == pytest.approx(550)
    assert por_nome["Lazer"].valor_alocado == pytest.approx(150)


def test_soma_diferente_de_100_rejeitada(database, usuario):
    servico = ServicoCaixinhas(database)
    with pytest.raises(PorcentagemInvalida):
        servico.configurar(usuario.id, MES, [{"nome": "Custos", "porcentagem": 60}])
    assert servico.listar(usuario.id, MES) == []


def test_soma_livre_quando_regra_desligada(database, usuario):
    resultado = ServicoCaixinhas(database, exigir_soma_100=False).configurar(
        usuario.id, MES, [{"nome": "Custos", "porcentagem": 60}]
    )
    assert resultado[0].porcentagem_alvo == 60


@pytest.mark.parametrize("itens", [
    [],
    [{"nome": "  ", "porcentagem": 100}],
    [{"nome": "Custos", "porcentagem": 50}, {"nome": "Custos", "porcentagem": 50}],
    [{"nome": "Custos", "porcentagem": 120}],
    [{"nome": "Custos", "porcentagem": -5}],
])
def test_configuracao_invalida(database, usuario, itens):
    with pytest.raises(EntradaInvalida):
        ServicoCaixinhas(database).configurar(usuario.id, MES, itens)


def test_mes_invalido():
    with pytest.raises(EntradaInvalida):
        validar_mes("2024-13")
    with pytest.raises(EntradaInvalida):
        validar_mes("05/2024")
    assert validar_mes("2024-12") == "2024-12"


def test_listar_isola_meses_e_usuarios(database, usuario, outro_usuario, caixinhas):
    servico = ServicoCaixinhas(database)
    assert len(servico.listar(usuario.id, MES)) == 3
    assert servico.listar(usuario.id, "2024-06") == []
    assert servico.listar(outro_usuario.id, MES) == []


def test_excluir_remove_transacoes_e_desfaz_vinculos(database, usuario, caixinhas):
    custos = caixinhas["Custos"]
    ServicoTransacoes(database).criar(usuario.id, "saida", 100, date(2024, 5, 3), custos.id)

    with database.transacao() as session:
        divida = Divida(user_id=usuario.id, descricao="Cartão antigo", valor_original=500, valor_atual=500,
                        data_inicio=date(2024, 1, 1), caixinha_id=custos.id)
        meta = Meta(user_id=usuario.id, nome="Viagem", valor_alvo=3000, valor_atual=0, caixinha_id=custos.id)
        item = ItemWishlist(user_id=usuario.id, item="Bicicleta", valor_estimado=1200, necessidade=3, desejo=4,
                            caixinha_id=custos.id)
        session.add_all([divida, meta, item])
        session.flush()
        ids = divida.id, meta.id, item.id
    ServicoLiquidacoes(database).amortizar_divida(usuario.id, ids[0], custos.id, 50, date(2024, 5, 4))

    ServicoCaixinhas(database).excluir(usuario.id, custos.id)

    with database.transacao() as session:
        assert session.query(Transacao).filter(Transacao.user_id == usuario.id).count() == 0
        assert session.get(Divida, ids[0]).caixinha_id is None
        assert session.get(Meta, ids[1]).caixinha_id is None
        assert session.get(ItemWishlist, ids[2]).caixinha_id is None
        assert session.query(Amortizacao).one().caixinha_id is None
    nomes = [c.nome_caixinha for c in ServicoCaixinhas(database).listar(usuario.id, MES)]
    assert nomes == ["Lazer", "Reserva"]


def test_excluir_caixinha_de_outro_usuario(database, outro_usuario, caixinhas):
    with pytest.raises(CaixinhaNaoEncontrada):
        ServicoCaixinhas(database).excluir(outro_usuario.id, caixinhas["Custos"].id)
