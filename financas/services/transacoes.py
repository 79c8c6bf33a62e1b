# -*- coding: utf-8 -*-
"""
Criação, edição e exclusão de transações mantendo os saldos das caixinhas.

Toda mutação segue o mesmo roteiro dentro de uma única transação de banco:
desfaz o efeito antigo (com valor, caixinha e mês originais), grava a linha
e aplica o efeito novo. Assim os saldos são mantidos incrementalmente e
sempre batem com um recálculo completo a partir do histórico.

Contrato com a camada HTTP: a posse de ``caixinha_id`` já foi verificada
(``obter_caixinha_do_usuario``); a existência/posse da transação é
verificada aqui.
"""

import logging
from datetime import date

from sqlalchemy.orm import joinedload

from financas.database import Database
from financas.exceptions import (CaixinhaObrigatoria, EntradaInvalida, SemCaixinhasConfiguradas,
                                 TransacaoNaoEncontrada, ValorInvalido)
from financas.models.transacao import TIPOS_TRANSACAO, Transacao
from financas.services.alocacao import aplicar_alocacao, contar_caixinhas, reverter_alocacao
from financas.services.caixinhas import mes_da_data
from financas.services.gastos import debitar_caixinha, estornar_caixinha

logger = logging.getLogger(__name__)

CAMPOS_EDITAVEIS = ("tipo", "valor", "data", "caixinha_id", "descricao")


def validar_transacao(tipo, valor, data, caixinha_id):
    if tipo not in TIPOS_TRANSACAO:
        raise EntradaInvalida("Tipo inválido. Use: entrada ou saida", tipo=tipo)
    if valor is None or valor <= 0:
        raise ValorInvalido(valor=valor)
    if data is None:
        raise EntradaInvalida("Data da transação é obrigatória")
    if tipo == "saida" and not caixinha_id:
        raise CaixinhaObrigatoria()


def aplicar_efeito(session, usuario_id: int, tipo: str, valor: float, data: date, caixinha_id):
    if tipo == "entrada":
        aplicar_alocacao(session, usuario_id, mes_da_data(data), valor)
    else:
        debitar_caixinha(session, caixinha_id, valor)


def reverter_efeito(session, transacao: Transacao):
    if transacao.tipo == "entrada":
        reverter_alocacao(session, transacao.user_id, mes_da_data(transacao.data), transacao.valor)
    elif transacao.caixinha_id:
        estornar_caixinha(session, transacao.caixinha_id, transacao.valor)


def _exigir_caixinhas_no_mes(session, usuario_id: int, tipo: str, data: date):
    if tipo == "entrada":
        mes = mes_da_data(data)
        if contar_caixinhas(session, usuario_id, mes) == 0:
            raise SemCaixinhasConfiguradas(mes=mes)


def _carregar(session, usuario_id: int, transacao_id: int, para_atualizar=False) -> Transacao:
    query = (
        session.query(Transacao)
        .options(joinedload(Transacao.caixinha))
        .filter(Transacao.id == transacao_id, Transacao.user_id == usuario_id)
        .populate_existing()
    )
    if para_atualizar:
        query = query.with_for_update(of=Transacao)
    transacao = query.first()
    if transacao is None:
        raise TransacaoNaoEncontrada(transacao_id=transacao_id)
    return transacao


class ServicoTransacoes:
    def __init__(self, database: Database):
        self.database = database

    def criar(self, usuario_id: int, tipo: str, valor: float, data: date = None,
              caixinha_id: int = None, descricao: str = None) -> Transacao:
        data = data or date.today()
        if tipo == "entrada":
            caixinha_id = None
        validar_transacao(tipo, valor, data, caixinha_id)

        with self.database.transacao() as session:
            _exigir_caixinhas_no_mes(session, usuario_id, tipo, data)

            transacao = Transacao(
                user_id=usuario_id,
                tipo=tipo,
                valor=valor,
                descricao=descricao or None,
                caixinha_id=caixinha_id,
                data=data,
            )
            session.add(transacao)
            session.flush()
            transacao_id = transacao.id

            aplicar_efeito(session, usuario_id, tipo, valor, data, caixinha_id)
            transacao = _carregar(session, usuario_id, transacao_id)

        logger.info(f"Transação {transacao_id} criada: {tipo} de {valor:.2f} em {data} (usuario={usuario_id})")
        return transacao

    def editar(self, usuario_id: int, transacao_id: int, campos: dict) -> Transacao:
        """
        ``campos`` contém só os campos enviados (tipo, valor, data,
        caixinha_id, descricao). Os demais mantêm o valor original.
        """
        desconhecidos = set(campos) - set(CAMPOS_EDITAVEIS)
        if desconhecidos:
            raise EntradaInvalida(f"Campos não editáveis: {', '.join(sorted(desconhecidos))}")

        with self.database.transacao() as session:
            transacao = _carregar(session, usuario_id, transacao_id, para_atualizar=True)

            novo = {campo: getattr(transacao, campo) for campo in CAMPOS_EDITAVEIS}
            novo.update(campos)
            if novo["tipo"] == "entrada":
                novo["caixinha_id"] = None

            # Validação completa antes de qualquer escrita
            validar_transacao(novo["tipo"], novo["valor"], novo["data"], novo["caixinha_id"])
            _exigir_caixinhas_no_mes(session, usuario_id, novo["tipo"], novo["data"])

            reverter_efeito(session, transacao)

            for campo, valor in novo.items():
                setattr(transacao, campo, valor)
            session.flush()

            aplicar_efeito(session, usuario_id, novo["tipo"], novo["valor"], novo["data"], novo["caixinha_id"])
            transacao = _carregar(session, usuario_id, transacao_id)

        logger.info(f"Transação {transacao_id} editada (usuario={usuario_id})")
        return transacao

    def excluir(self, usuario_id: int, transacao_id: int):
        with self.database.transacao() as session:
            transacao = _carregar(session, usuario_id, transacao_id, para_atualizar=True)
            reverter_efeito(session, transacao)
            session.delete(transacao)

        logger.info(f"Transação {transacao_id} excluída (usuario={usuario_id})")

    def listar(self, usuario_id: int, data_inicio: date = None, data_fim: date = None,
               tipo: str = None, caixinha_id: int = None):
        with self.database.transacao() as session:
            query = (
                session.query(Transacao)
                .options(joinedload(Transacao.caixinha))
                .filter(Transacao.user_id == usuario_id)
            )
            if data_inicio:
                query = query.filter(Transacao.data >= data_inicio)
            if data_fim:
                query = query.filter(Transacao.data <= data_fim)
            if tipo:
                query = query.filter(Transacao.tipo == tipo)
            if caixinha_id:
                query = query.filter(Transacao.caixinha_id == caixinha_id)
            return query.order_by(Transacao.data.desc(), Transacao.criado_em.desc()).all()
