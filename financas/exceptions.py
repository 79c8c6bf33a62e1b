# -*- coding: utf-8 -*-
"""
Erros de domínio do motor financeiro.

Cada erro tem um ``codigo`` estável (usado pelo cliente) e uma ``mensagem``
legível. A camada HTTP traduz o código em status (ver ``main.py``).
"""


class ErroFinancas(Exception):
    codigo = "erro"
    mensagem = "Erro ao processar a operação"

    def __init__(self, mensagem=None, **detalhes):
        self.mensagem = mensagem or self.mensagem
        self.detalhes = detalhes
        super().__init__(self.mensagem)


# --- Não encontrado (nunca revela dados de outro usuário) ---

class NaoEncontrado(ErroFinancas):
    codigo = "nao_encontrado"
    mensagem = "Registro não encontrado"


class CaixinhaNaoEncontrada(NaoEncontrado):
    mensagem = "Caixinha não encontrada"


class TransacaoNaoEncontrada(NaoEncontrado):
    mensagem = "Transação não encontrada"


class DividaNaoEncontrada(NaoEncontrado):
    mensagem = "Dívida não encontrada"


class MetaNaoEncontrada(NaoEncontrado):
    mensagem = "Meta não encontrada"


class FaturaNaoEncontrada(NaoEncontrado):
    mensagem = "Fatura não encontrada"


class ContaNaoEncontrada(NaoEncontrado):
    mensagem = "Conta não encontrada"


class CartaoNaoEncontrado(NaoEncontrado):
    mensagem = "Cartão não encontrado"


class ItemNaoEncontrado(NaoEncontrado):
    mensagem = "Item não encontrado"


class CategoriaNaoEncontrada(NaoEncontrado):
    mensagem = "Categoria não encontrada ou é do sistema"


# --- Entrada inválida ---

class EntradaInvalida(ErroFinancas):
    codigo = "entrada_invalida"
    mensagem = "Dados inválidos"


class ValorInvalido(EntradaInvalida):
    mensagem = "Valor inválido"


class CaixinhaObrigatoria(EntradaInvalida):
    mensagem = "Saídas devem estar vinculadas a uma caixinha"


class PorcentagemInvalida(EntradaInvalida):
    mensagem = "Porcentagem inválida"


# --- Regras de estado ---

class DividaJaQuitada(ErroFinancas):
    codigo = "divida_ja_quitada"
    mensagem = "Dívida já está quitada"


class SemCaixinhasConfiguradas(ErroFinancas):
    codigo = "sem_caixinhas_configuradas"
    mensagem = "Configure as caixinhas primeiro"


# --- Infraestrutura ---

class ErroArmazenamento(ErroFinancas):
    codigo = "erro_armazenamento"
    mensagem = "Erro ao gravar no banco de dados"
