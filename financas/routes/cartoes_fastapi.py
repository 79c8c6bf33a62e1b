# -*- coding: utf-8 -*-
"""
Rotas FastAPI para Cartões de crédito e Faturas.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from financas.auth import get_current_user
from financas.database import get_db
from financas.dependencias import get_servico_cartoes, get_servico_liquidacoes
from financas.exceptions import CartaoNaoEncontrado
from financas.models.cartao import Cartao, Fatura
from financas.models.usuario import Usuario
from financas.schemas.cartao import (CartaoCreate, CartaoRead, CartaoUpdate, CompraCartao, FaturaAtual, FaturaRead,
                                     MelhorDiaCompra, PagamentoFatura, ResumoCartoes)
from financas.services.cartoes import ServicoCartoes, melhor_dia_compra
from financas.services.liquidacoes import ServicoLiquidacoes

router = APIRouter(
    tags=["Cartões"],
    responses={404: {"description": "Cartão não encontrado"}},
)


def _obter_cartao(db: Session, usuario_id: int, cartao_id: int) -> Cartao:
    db_cartao = db.query(Cartao).filter(Cartao.id == cartao_id, Cartao.user_id == usuario_id).first()
    if db_cartao is None:
        raise CartaoNaoEncontrado(cartao_id=cartao_id)
    return db_cartao


# --- CRUD Endpoints ---

@router.post("", response_model=CartaoRead, status_code=status.HTTP_201_CREATED)
def create_cartao(
    cartao: CartaoCreate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    """
    Cadastra um cartão; o limite disponível começa igual ao limite total.
    """
    try:
        db_cartao = Cartao(**cartao.dict(), user_id=current_user.id, limite_disponivel=cartao.limite, ativo=True)
        db.add(db_cartao)
        db.commit()
        db.refresh(db_cartao)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Erro ao cadastrar cartão.")
    return db_cartao


@router.get("", response_model=List[CartaoRead])
def read_cartoes(db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    return db.query(Cartao).filter(Cartao.user_id == current_user.id).order_by(Cartao.nome).all()


@router.get("/resumo", response_model=ResumoCartoes)
def read_resumo_cartoes(db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    """Totais dos cartões ativos e das faturas em aberto."""
    ativos = db.query(Cartao).filter(Cartao.user_id == current_user.id, Cartao.ativo.is_(True))
    limite_total = ativos.with_entities(func.sum(Cartao.limite)).scalar() or 0.0
    disponivel = ativos.with_entities(func.sum(Cartao.limite_disponivel)).scalar() or 0.0
    faturas_abertas = (
        db.query(func.sum(Fatura.valor_total))
        .select_from(Fatura)
        .join(Cartao, Fatura.cartao_id == Cartao.id)
        .filter(Cartao.user_id == current_user.id, Fatura.status == "aberta")
        .scalar()
        or 0.0
    )
    return {
        "total_cartoes": ativos.count(),
        "limite_total": limite_total,
        "limite_disponivel_total": disponivel,
        "total_utilizado": limite_total - disponivel,
        "total_faturas_abertas": faturas_abertas,
    }


@router.put("/{cartao_id}", response_model=CartaoRead)
def update_cartao(
    cartao_id: int,
    cartao_update: CartaoUpdate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    """
    Atualiza o cartão. Uma mudança de limite desloca o limite disponível pela
    mesma diferença, preservando o que já está comprometido em faturas.
    """
    db_cartao = _obter_cartao(db, current_user.id, cartao_id)
    update_data = cartao_update.dict(exclude_unset=True)

    novo_limite = update_data.get("limite")
    if novo_limite is not None:
        diferenca = novo_limite - db_cartao.limite
        db.query(Cartao).filter(Cartao.id == cartao_id).update(
            {Cartao.limite_disponivel: Cartao.limite_disponivel + diferenca}, synchronize_session=False
        )

    for key, value in update_data.items():
        setattr(db_cartao, key, value)
    db.commit()
    db.refresh(db_cartao)
    return db_cartao


@router.delete("/{cartao_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cartao(cartao_id: int, db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    db_cartao = _obter_cartao(db, current_user.id, cartao_id)
    db.delete(db_cartao)
    db.commit()
    return None


# --- Faturas ---

@router.get("/{cartao_id}/faturas", response_model=List[FaturaRead])
def read_faturas(cartao_id: int, db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    _obter_cartao(db, current_user.id, cartao_id)
    return (
        db.query(Fatura)
        .filter(Fatura.cartao_id == cartao_id)
        .order_by(Fatura.mes_referencia.desc())
        .all()
    )


@router.get("/{cartao_id}/fatura-atual", response_model=FaturaAtual)
def read_fatura_atual(
    cartao_id: int,
    servico: ServicoCartoes = Depends(get_servico_cartoes),
    current_user: Usuario = Depends(get_current_user),
):
    """Fatura em aberto do ciclo atual; é criada zerada se ainda não existir."""
    cartao, fatura = servico.fatura_atual(current_user.id, cartao_id)
    return {"fatura": fatura, "cartao": cartao}


@router.post("/{cartao_id}/compras", response_model=FaturaRead, status_code=status.HTTP_201_CREATED)
def lancar_compra(
    cartao_id: int,
    compra: CompraCartao,
    servico: ServicoCartoes = Depends(get_servico_cartoes),
    current_user: Usuario = Depends(get_current_user),
):
    return servico.lancar_compra(current_user.id, cartao_id, compra.valor)


@router.post("/{cartao_id}/faturas/{fatura_id}/pagar")
def pagar_fatura(
    cartao_id: int,
    fatura_id: int,
    pagamento: PagamentoFatura,
    servico: ServicoLiquidacoes = Depends(get_servico_liquidacoes),
    current_user: Usuario = Depends(get_current_user),
):
    """
    Paga (total ou parcialmente) a fatura com dinheiro de uma conta.
    """
    novo_status = servico.pagar_fatura(
        current_user.id,
        cartao_id,
        fatura_id,
        pagamento.conta_id,
        pagamento.valor,
        data_pagamento=pagamento.data_pagamento,
    )
    return {"message": "Pagamento registrado com sucesso", "status": novo_status}


@router.get("/{cartao_id}/melhor-dia-compra", response_model=MelhorDiaCompra)
def read_melhor_dia_compra(
    cartao_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    db_cartao = _obter_cartao(db, current_user.id, cartao_id)
    return melhor_dia_compra(db_cartao)
