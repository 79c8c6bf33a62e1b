# -*- coding: utf-8 -*-
"""
Repositório de caixinhas: configuração mensal (upsert por usuário + nome + mês),
listagem e exclusão.

As funções que recebem ``session`` rodam dentro de uma transação aberta pelo
chamador; os métodos de ``ServicoCaixinhas`` abrem a sua própria.
"""

import logging
import re
from datetime import date

from financas import config
from financas.database import Database
from financas.exceptions import CaixinhaNaoEncontrada, EntradaInvalida, PorcentagemInvalida
from financas.models.caixinha import Caixinha
from financas.models.divida import Amortizacao, Divida
from financas.models.meta import Meta
from financas.models.recorrencia import Parcelada, Recorrencia
from financas.models.transacao import Transacao
from financas.models.wishlist import ItemWishlist

logger = logging.getLogger(__name__)

_MES_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")
TOLERANCIA_SOMA = 0.01


def mes_atual() -> str:
    return date.today().strftime("%Y-%m")


def mes_da_data(data: date) -> str:
    return data.strftime("%Y-%m")


def validar_mes(mes: str) -> str:
    if not mes or not _MES_RE.match(mes):
        raise EntradaInvalida("Mês de referência inválido. Use YYYY-MM", mes=mes)
    return mes


def listar_do_mes(session, usuario_id: int, mes: str):
    return (
        session.query(Caixinha)
        .filter(Caixinha.user_id == usuario_id, Caixinha.mes_referencia == mes)
        .order_by(Caixinha.nome_caixinha)
        .populate_existing()
        .all()
    )


def obter_caixinha_do_usuario(session, usuario_id: int, caixinha_id: int) -> Caixinha:
    """
    Verificação de posse usada na fronteira HTTP antes de chamar os motores,
    que confiam no id de caixinha recebido.
    """
    caixinha = (
        session.query(Caixinha)
        .filter(Caixinha.id == caixinha_id, Caixinha.user_id == usuario_id)
        .first()
    )
    if caixinha is None:
        raise CaixinhaNaoEncontrada(caixinha_id=caixinha_id)
    return caixinha


class ServicoCaixinhas:
    def __init__(self, database: Database, exigir_soma_100: bool = None):
        self.database = database
        self.exigir_soma_100 = config.EXIGIR_SOMA_100 if exigir_soma_100 is None else exigir_soma_100

    def configurar(self, usuario_id: int, mes: str, caixinhas):
        """
        Cria ou atualiza as caixinhas do mês. ``caixinhas`` é uma lista de
        dicts ``{"nome": str, "porcentagem": float}``.

        Caixinhas existentes só têm a porcentagem sobrescrita; valores alocados
        e gastos não mudam. Novas caixinhas começam zeradas.
        """
        mes = validar_mes(mes or mes_atual())
        novas = self._validar_itens(caixinhas)

        with self.database.transacao() as session:
            existentes = {c.nome_caixinha: c for c in listar_do_mes(session, usuario_id, mes)}

            if self.exigir_soma_100:
                resultado = {nome: c.porcentagem_alvo for nome, c in existentes.items()}
                resultado.update(novas)
                soma = sum(resultado.values())
                if abs(soma - 100) > TOLERANCIA_SOMA:
                    raise PorcentagemInvalida(
                        f"As porcentagens das caixinhas devem somar 100% (soma atual: {soma:g}%)",
                        soma=soma,
                    )

            for nome, porcentagem in novas.items():
                caixinha = existentes.get(nome)
                if caixinha is not None:
                    caixinha.porcentagem_alvo = porcentagem
                else:
                    session.add(Caixinha(
                        user_id=usuario_id,
                        nome_caixinha=nome,
                        porcentagem_alvo=porcentagem,
                        mes_referencia=mes,
                        valor_alocado=0.0,
                        valor_gasto=0.0,
                        saldo_disponivel=0.0,
                    ))
            session.flush()
            resultado = listar_do_mes(session, usuario_id, mes)

        logger.info(f"Caixinhas configuradas: usuario={usuario_id} mes={mes} total={len(resultado)}")
        return resultado

    def listar(self, usuario_id: int, mes: str = None):
        mes = validar_mes(mes or mes_atual())
        with self.database.transacao() as session:
            return listar_do_mes(session, usuario_id, mes)

    def excluir(self, usuario_id: int, caixinha_id: int):
        """
        Exclui a caixinha e as transações vinculadas a ela. Dívidas,
        amortizações, metas, recorrências, parceladas e itens da wishlist
        apenas perdem o vínculo.
        """
        with self.database.transacao() as session:
            obter_caixinha_do_usuario(session, usuario_id, caixinha_id)

            removidas = (
                session.query(Transacao)
                .filter(Transacao.caixinha_id == caixinha_id)
                .delete(synchronize_session=False)
            )
            for modelo in (Recorrencia, Parcelada, Meta, ItemWishlist, Divida, Amortizacao):
                session.query(modelo).filter(modelo.caixinha_id == caixinha_id).update(
                    {modelo.caixinha_id: None}, synchronize_session=False
                )
            session.query(Caixinha).filter(Caixinha.id == caixinha_id).delete(synchronize_session=False)

        logger.info(f"Caixinha {caixinha_id} excluída (usuario={usuario_id}, transacoes removidas={removidas})")

    @staticmethod
    def _validar_itens(caixinhas):
        if not caixinhas:
            raise EntradaInvalida("Caixinhas inválidas")

        novas = {}
        for item in caixinhas:
            nome = (item.get("nome") or "").strip()
            if not nome:
                raise EntradaInvalida("Nome da caixinha é obrigatório")
            if nome in novas:
                raise EntradaInvalida(f"Caixinha '{nome}' repetida na configuração", nome=nome)
            porcentagem = item.get("porcentagem")
            if porcentagem is None or porcentagem < 0 or porcentagem > 100:
                raise PorcentagemInvalida(
                    f"Porcentagem da caixinha '{nome}' deve estar entre 0 e 100", nome=nome
                )
            novas[nome] = float(porcentagem)
        return novas
