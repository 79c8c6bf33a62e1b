# -*- coding: utf-8 -*-
"""
Rotas FastAPI para as Transações (entradas e saídas).

A posse da caixinha informada é conferida aqui, antes de chamar o serviço.
"""
from typing import List, Optional
from datetime import date
from dateutil.relativedelta import relativedelta
from fastapi import APIRouter, Depends, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from financas.auth import get_current_user
from financas.database import get_db
from financas.dependencias import get_servico_transacoes
from financas.models.transacao import Transacao
from financas.models.usuario import Usuario
from financas.schemas.transacao import EstatisticasMes, TransacaoCreate, TransacaoRead, TransacaoUpdate
from financas.services.caixinhas import mes_atual, obter_caixinha_do_usuario, validar_mes
from financas.services.transacoes import ServicoTransacoes

router = APIRouter(
    tags=["Transações"],
    responses={404: {"description": "Transação não encontrada"}},
)


@router.get("", response_model=List[TransacaoRead])
def read_transacoes(
    data_inicio: Optional[date] = None,
    data_fim: Optional[date] = None,
    tipo: Optional[str] = None,
    caixinha_id: Optional[int] = None,
    servico: ServicoTransacoes = Depends(get_servico_transacoes),
    current_user: Usuario = Depends(get_current_user),
):
    return servico.listar(current_user.id, data_inicio, data_fim, tipo, caixinha_id)


@router.get("/estatisticas", response_model=EstatisticasMes)
def read_estatisticas(
    mes: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    """
    Totais de entradas e saídas do mês (YYYY-MM; padrão: mês corrente).
    """
    mes = validar_mes(mes or mes_atual())
    inicio = date(int(mes[:4]), int(mes[5:]), 1)
    fim = inicio + relativedelta(months=1)
    do_mes = db.query(Transacao).filter(
        Transacao.user_id == current_user.id, Transacao.data >= inicio, Transacao.data < fim
    )

    totais = {}
    for tipo in ("entrada", "saida"):
        do_tipo = do_mes.filter(Transacao.tipo == tipo)
        totais[tipo] = (do_tipo.with_entities(func.sum(Transacao.valor)).scalar() or 0.0, do_tipo.count())

    return {
        "mes_referencia": mes,
        "total_entradas": totais["entrada"][0],
        "total_saidas": totais["saida"][0],
        "saldo": totais["entrada"][0] - totais["saida"][0],
        "num_entradas": totais["entrada"][1],
        "num_saidas": totais["saida"][1],
    }


@router.post("", response_model=TransacaoRead, status_code=status.HTTP_201_CREATED)
def create_transacao(
    transacao: TransacaoCreate,
    db: Session = Depends(get_db),
    servico: ServicoTransacoes = Depends(get_servico_transacoes),
    current_user: Usuario = Depends(get_current_user),
):
    if transacao.caixinha_id and transacao.tipo == "saida":
        obter_caixinha_do_usuario(db, current_user.id, transacao.caixinha_id)

    return servico.criar(
        current_user.id,
        tipo=transacao.tipo,
        valor=transacao.valor,
        data=transacao.data,
        caixinha_id=transacao.caixinha_id,
        descricao=transacao.descricao,
    )


@router.put("/{transacao_id}", response_model=TransacaoRead)
def update_transacao(
    transacao_id: int,
    dados: TransacaoUpdate,
    db: Session = Depends(get_db),
    servico: ServicoTransacoes = Depends(get_servico_transacoes),
    current_user: Usuario = Depends(get_current_user),
):
    """
    Desfaz o efeito antigo da transação nas caixinhas, grava os novos dados e
    aplica o novo efeito, tudo de uma vez.
    """
    campos = dados.dict(exclude_unset=True)
    if campos.get("caixinha_id"):
        obter_caixinha_do_usuario(db, current_user.id, campos["caixinha_id"])

    return servico.editar(current_user.id, transacao_id, campos)


@router.delete("/{transacao_id}")
def delete_transacao(
    transacao_id: int,
    servico: ServicoTransacoes = Depends(get_servico_transacoes),
    current_user: Usuario = Depends(get_current_user),
):
    servico.excluir(current_user.id, transacao_id)
    return {"message": "Transação deletada com sucesso"}
