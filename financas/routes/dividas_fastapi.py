# -*- coding: utf-8 -*-
"""
Rotas FastAPI para Dívidas e suas Amortizações.
"""

from typing import List, Optional
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError
import logging

from financas.auth import get_current_user
from financas.database import get_db
from financas.dependencias import get_servico_liquidacoes
from financas.exceptions import DividaNaoEncontrada
from financas.models.divida import STATUS_DIVIDA, Amortizacao, Divida
from financas.models.usuario import Usuario
from financas.schemas.divida import (AmortizacaoCreate, AmortizacaoRead, DividaCreate, DividaRead,
                                     DividaStatusUpdate, ResumoDividas)
from financas.services.caixinhas import obter_caixinha_do_usuario
from financas.services.liquidacoes import ServicoLiquidacoes

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Dívidas"],
    responses={404: {"description": "Dívida não encontrada"}},
)


def _obter_divida(db: Session, usuario_id: int, divida_id: int) -> Divida:
    db_divida = db.query(Divida).filter(Divida.id == divida_id, Divida.user_id == usuario_id).first()
    if db_divida is None:
        raise DividaNaoEncontrada(divida_id=divida_id)
    return db_divida


@router.post("", response_model=DividaRead, status_code=status.HTTP_201_CREATED)
def create_divida(
    divida: DividaCreate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    """
    Cadastra uma dívida; o saldo devedor começa igual ao valor original.
    """
    if divida.caixinha_id:
        obter_caixinha_do_usuario(db, current_user.id, divida.caixinha_id)

    try:
        db_divida = Divida(**divida.dict(), user_id=current_user.id, valor_atual=divida.valor_original)
        db.add(db_divida)
        db.commit()
        db.refresh(db_divida)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Erro ao cadastrar dívida.")
    return db_divida


@router.get("", response_model=List[DividaRead])
def read_dividas(
    status_divida: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    query = db.query(Divida).filter(Divida.user_id == current_user.id)
    if status_divida:
        query = query.filter(Divida.status == status_divida)
    return query.order_by(Divida.data_inicio.desc()).all()


@router.get("/estatisticas/resumo", response_model=ResumoDividas)
def read_resumo_dividas(db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    dividas = db.query(Divida).filter(Divida.user_id == current_user.id)
    por_status = dict(
        dividas.with_entities(Divida.status, func.count(Divida.id)).group_by(Divida.status).all()
    )
    em_aberto = dividas.filter(Divida.status != "quitado")
    return {
        "total_dividas": sum(por_status.values()),
        "pendentes": por_status.get("pendente", 0),
        "negociando": por_status.get("negociando", 0),
        "quitadas": por_status.get("quitado", 0),
        "total_devido": em_aberto.with_entities(func.sum(Divida.valor_atual)).scalar() or 0.0,
        "total_original": dividas.with_entities(func.sum(Divida.valor_original)).scalar() or 0.0,
    }


@router.post("/{divida_id}/amortizar", response_model=DividaRead)
def amortizar_divida(
    divida_id: int,
    dados: AmortizacaoCreate,
    db: Session = Depends(get_db),
    servico: ServicoLiquidacoes = Depends(get_servico_liquidacoes),
    current_user: Usuario = Depends(get_current_user),
):
    """
    Abate o valor do saldo devedor e debita a caixinha de onde o dinheiro saiu.
    Ao zerar, a dívida passa a 'quitado'.
    """
    obter_caixinha_do_usuario(db, current_user.id, dados.caixinha_id)
    return servico.amortizar_divida(
        current_user.id,
        divida_id,
        dados.caixinha_id,
        dados.valor,
        data_pagamento=dados.data_pagamento,
        observacao=dados.observacao,
    )


@router.patch("/{divida_id}/status", response_model=DividaRead)
def update_status_divida(
    divida_id: int,
    dados: DividaStatusUpdate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    if dados.status not in STATUS_DIVIDA:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Status inválido. Use: {', '.join(STATUS_DIVIDA)}",
        )

    db_divida = _obter_divida(db, current_user.id, divida_id)
    db_divida.status = dados.status
    if dados.status == "quitado" and db_divida.data_quitacao is None:
        db_divida.data_quitacao = datetime.now().date()
    db.commit()
    db.refresh(db_divida)
    logger.info(f"Status da dívida {divida_id} alterado manualmente para {dados.status}")
    return db_divida


@router.get("/{divida_id}/amortizacoes", response_model=List[AmortizacaoRead])
def read_amortizacoes(
    divida_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    _obter_divida(db, current_user.id, divida_id)
    return (
        db.query(Amortizacao)
        .options(joinedload(Amortizacao.caixinha))
        .filter(Amortizacao.divida_id == divida_id)
        .order_by(Amortizacao.data_pagamento.desc(), Amortizacao.id.desc())
        .all()
    )


@router.delete("/{divida_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_divida(
    divida_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    """
    Exclui a dívida e o histórico de amortizações (os débitos já feitos nas
    caixinhas permanecem).
    """
    db_divida = _obter_divida(db, current_user.id, divida_id)
    db.delete(db_divida)
    db.commit()
    return None
