# -*- coding: utf-8 -*-
"""
Rotas FastAPI para Metas de economia e seus Aportes.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from financas.auth import get_current_user
from financas.database import get_db
from financas.dependencias import get_servico_liquidacoes
from financas.exceptions import MetaNaoEncontrada
from financas.models.meta import STATUS_META, Aporte, Meta
from financas.models.usuario import Usuario
from financas.schemas.meta import (AporteCreate, AporteRead, AporteResposta, MetaCreate, MetaRead, MetaUpdate,
                                   ResumoMetas)
from financas.services.caixinhas import obter_caixinha_do_usuario
from financas.services.liquidacoes import ServicoLiquidacoes

router = APIRouter(
    tags=["Metas"],
    responses={404: {"description": "Meta não encontrada"}},
)


def _obter_meta(db: Session, usuario_id: int, meta_id: int) -> Meta:
    db_meta = db.query(Meta).filter(Meta.id == meta_id, Meta.user_id == usuario_id).first()
    if db_meta is None:
        raise MetaNaoEncontrada(meta_id=meta_id)
    return db_meta


@router.post("", response_model=MetaRead, status_code=status.HTTP_201_CREATED)
def create_meta(
    meta: MetaCreate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    if meta.caixinha_id:
        obter_caixinha_do_usuario(db, current_user.id, meta.caixinha_id)

    try:
        db_meta = Meta(**meta.dict(), user_id=current_user.id, valor_atual=0.0, status="ativa")
        db.add(db_meta)
        db.commit()
        db.refresh(db_meta)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Erro ao criar meta.")
    return db_meta


@router.get("", response_model=List[MetaRead])
def read_metas(db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    """
    Lista as metas do usuário, das mais prioritárias para as menos.
    """
    return (
        db.query(Meta)
        .filter(Meta.user_id == current_user.id)
        .order_by(Meta.prioridade.desc(), Meta.data_limite)
        .all()
    )


@router.get("/estatisticas/resumo", response_model=ResumoMetas)
def read_resumo_metas(db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    metas = db.query(Meta).filter(Meta.user_id == current_user.id)
    ativas = metas.filter(Meta.status == "ativa")
    return {
        "total_metas": metas.count(),
        "ativas": ativas.count(),
        "concluidas": metas.filter(Meta.status == "concluida").count(),
        "total_alvo_ativas": ativas.with_entities(func.sum(Meta.valor_alvo)).scalar() or 0.0,
        "total_poupado_ativas": ativas.with_entities(func.sum(Meta.valor_atual)).scalar() or 0.0,
    }


@router.put("/{meta_id}", response_model=MetaRead)
def update_meta(
    meta_id: int,
    meta_update: MetaUpdate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    db_meta = _obter_meta(db, current_user.id, meta_id)
    update_data = meta_update.dict(exclude_unset=True)

    if update_data.get("status") and update_data["status"] not in STATUS_META:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Status inválido. Use: {', '.join(STATUS_META)}",
        )
    if update_data.get("caixinha_id"):
        obter_caixinha_do_usuario(db, current_user.id, update_data["caixinha_id"])

    try:
        for key, value in update_data.items():
            setattr(db_meta, key, value)
        db.commit()
        db.refresh(db_meta)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Erro de integridade ao atualizar a meta.")
    return db_meta


@router.delete("/{meta_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meta(
    meta_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    db_meta = _obter_meta(db, current_user.id, meta_id)
    db.delete(db_meta)
    db.commit()
    return None


@router.post("/{meta_id}/aportar", response_model=AporteResposta)
def aportar_meta(
    meta_id: int,
    dados: AporteCreate,
    db: Session = Depends(get_db),
    servico: ServicoLiquidacoes = Depends(get_servico_liquidacoes),
    current_user: Usuario = Depends(get_current_user),
):
    """
    Registra um aporte. Com caixinha informada, o valor também é debitado dela.
    """
    if dados.caixinha_id:
        obter_caixinha_do_usuario(db, current_user.id, dados.caixinha_id)

    meta, concluida = servico.aportar_meta(
        current_user.id,
        meta_id,
        dados.valor,
        data_aporte=dados.data_aporte,
        caixinha_id=dados.caixinha_id,
        observacao=dados.observacao,
    )
    message = "Meta concluída!" if concluida else "Aporte registrado com sucesso"
    return {"message": message, "concluida": concluida, "meta": meta}


@router.get("/{meta_id}/aportes", response_model=List[AporteRead])
def read_aportes(
    meta_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    _obter_meta(db, current_user.id, meta_id)
    return (
        db.query(Aporte)
        .filter(Aporte.meta_id == meta_id)
        .order_by(Aporte.data_aporte.desc(), Aporte.id.desc())
        .all()
    )
