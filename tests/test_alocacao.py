import pytest

from financas.exceptions import SemCaixinhasConfiguradas, ValorInvalido
from financas.services.alocacao import ServicoAlocacao
from financas.services.caixinhas import ServicoCaixinhas

MES = "2024-05"


def test_distribui_1000_em_30_15_55(database, usuario, caixinhas):
    resultado = ServicoAlocacao(database).alocar_entrada(usuario.id, 1000, MES)

    por_nome = {c.nome_caixinha: c for c in resultado}
    assert por_nome["Reserva"].valor_alocado == pytest.approx(300)
    assert por_nome["Lazer"].valor_alocado == pytest.approx(150)
    assert por_nome["Custos"].valor_alocado == pytest.approx(550)
    for caixinha in resultado:
        assert caixinha.valor_gasto == 0
        assert caixinha.saldo_disponivel == pytest.approx(caixinha.valor_alocado)


@pytest.mark.parametrize("valor", [0.01, 333.33, 1000, 98765.43])
def test_conservacao_quando_porcentagens_somam_100(database, usuario, caixinhas, valor):
    resultado = ServicoAlocacao(database).alocar_entrada(usuario.id, valor, MES)
    assert sum(c.valor_alocado for c in resultado) == pytest.approx(valor)


def test_porcentagens_que_nao_somam_100_distribuem_proporcionalmente(database, usuario):
    ServicoCaixinhas(database, exigir_soma_100=False).configurar(usuario.id, MES, [
        {"nome": "Custos", "porcentagem": 50},
        {"nome": "Lazer", "porcentagem": 20},
    ])
    resultado = ServicoAlocacao(database).alocar_entrada(usuario.id, 1000, MES)
    assert sum(c.valor_alocado for c in resultado) == pytest.approx(700)


def test_sem_caixinhas_no_mes(database, usuario, caixinhas):
    with pytest.raises(SemCaixinhasConfiguradas):
        ServicoAlocacao(database).alocar_entrada(usuario.id, 1000, "2024-06")


@pytest.mark.parametrize("valor", [0, -10])
def test_valor_nao_positivo(database, usuario, caixinhas, valor):
    with pytest.raises(ValorInvalido):
        ServicoAlocacao(database).alocar_entrada(usuario.id, valor, MES)


def test_desalocar_desfaz_a_distribuicao(database, usuario, caixinhas):
    servico = ServicoAlocacao(database)
    servico.alocar_entrada(usuario.id, 1000, MES)
    servico.alocar_entrada(usuario.id, 400, MES)

    resultado = servico.desalocar_entrada(usuario.id, 400, MES)

    por_nome = {c.nome_caixinha: c for c in resultado}
    assert por_nome["Custos"].valor_alocado == pytest.approx(550)
    assert por_nome["Custos"].saldo_disponivel == pytest.approx(550)


def test_desalocar_em_mes_vazio_nao_falha(database, usuario, caixinhas):
    assert ServicoAlocacao(database).desalocar_entrada(usuario.id, 100, "2023-01") == []
