# -*- coding: utf-8 -*-
"""
Rotas FastAPI para a Wishlist (lista de desejos com projeção de compra).
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from financas.auth import get_current_user
from financas.database import get_db
from financas.dependencias import get_servico_liquidacoes
from financas.exceptions import ItemNaoEncontrado
from financas.models.usuario import Usuario
from financas.models.wishlist import STATUS_WISHLIST, ItemWishlist
from financas.schemas.wishlist import CompraWishlist, ItemWishlistCreate, ItemWishlistRead, ItemWishlistUpdate
from financas.services.caixinhas import obter_caixinha_do_usuario
from financas.services.liquidacoes import ServicoLiquidacoes

router = APIRouter(
    tags=["Wishlist"],
    responses={404: {"description": "Item não encontrado"}},
)


def _obter_item(db: Session, usuario_id: int, item_id: int) -> ItemWishlist:
    db_item = db.query(ItemWishlist).filter(ItemWishlist.id == item_id, ItemWishlist.user_id == usuario_id).first()
    if db_item is None:
        raise ItemNaoEncontrado(item_id=item_id)
    return db_item


@router.post("", response_model=ItemWishlistRead, status_code=status.HTTP_201_CREATED)
def create_item(
    item: ItemWishlistCreate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    if item.caixinha_id:
        obter_caixinha_do_usuario(db, current_user.id, item.caixinha_id)

    try:
        db_item = ItemWishlist(**item.dict(), user_id=current_user.id, status="desejando")
        db.add(db_item)
        db.commit()
        db.refresh(db_item)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Erro ao adicionar item.")
    return db_item


@router.get("", response_model=List[ItemWishlistRead])
def read_itens(
    status_item: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    """
    Lista os itens ordenados por prioridade (necessidade + desejo), maiores primeiro.
    """
    query = db.query(ItemWishlist).filter(ItemWishlist.user_id == current_user.id)
    if status_item:
        query = query.filter(ItemWishlist.status == status_item)
    return query.order_by((ItemWishlist.necessidade + ItemWishlist.desejo).desc(), ItemWishlist.id).all()


@router.put("/{item_id}", response_model=ItemWishlistRead)
def update_item(
    item_id: int,
    item_update: ItemWishlistUpdate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    db_item = _obter_item(db, current_user.id, item_id)
    update_data = item_update.dict(exclude_unset=True)

    if "status" in update_data and update_data["status"] not in STATUS_WISHLIST:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Status inválido. Use: {', '.join(STATUS_WISHLIST)}",
        )
    if update_data.get("caixinha_id"):
        obter_caixinha_do_usuario(db, current_user.id, update_data["caixinha_id"])

    for key, value in update_data.items():
        setattr(db_item, key, value)
    db.commit()
    db.refresh(db_item)
    return db_item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(item_id: int, db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    db_item = _obter_item(db, current_user.id, item_id)
    db.delete(db_item)
    db.commit()
    return None


@router.post("/{item_id}/comprar", response_model=ItemWishlistRead)
def comprar_item(
    item_id: int,
    compra: CompraWishlist,
    db: Session = Depends(get_db),
    servico: ServicoLiquidacoes = Depends(get_servico_liquidacoes),
    current_user: Usuario = Depends(get_current_user),
):
    """
    Marca o item como comprado; com caixinha, registra a saída e debita o valor.
    """
    if compra.caixinha_id:
        obter_caixinha_do_usuario(db, current_user.id, compra.caixinha_id)

    return servico.comprar_item_wishlist(
        current_user.id,
        item_id,
        caixinha_id=compra.caixinha_id,
        valor_real=compra.valor_real,
    )
