# financas/routes/recorrencias_fastapi.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from financas.auth import get_current_user
from financas.database import get_db
from financas.exceptions import ItemNaoEncontrado
from financas.models.recorrencia import Parcelada, Recorrencia
from financas.models.transacao import TIPOS_TRANSACAO
from financas.models.usuario import Usuario
from financas.schemas.recorrencia import (ParceladaCreate, ParceladaRead, RecorrenciaCreate, RecorrenciaRead,
                                          RecorrenciaUpdate)
from financas.services.caixinhas import obter_caixinha_do_usuario

FREQUENCIAS = ("mensal", "anual")

router = APIRouter(
    tags=["Recorrências"],
    responses={404: {"description": "Recorrência não encontrada"}},
)


def _obter_recorrencia(db: Session, usuario_id: int, recorrencia_id: int) -> Recorrencia:
    db_rec = db.query(Recorrencia).filter(Recorrencia.id == recorrencia_id, Recorrencia.user_id == usuario_id).first()
    if db_rec is None:
        raise ItemNaoEncontrado(recorrencia_id=recorrencia_id)
    return db_rec


# --- Parceladas ---

@router.get("/parceladas", response_model=List[ParceladaRead])
def read_parceladas(db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    return (
        db.query(Parcelada)
        .filter(Parcelada.user_id == current_user.id)
        .order_by(Parcelada.ativo.desc(), Parcelada.data_inicio.desc())
        .all()
    )


@router.post("/parceladas", response_model=ParceladaRead, status_code=status.HTTP_201_CREATED)
def create_parcelada(
    parcelada: ParceladaCreate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    if parcelada.caixinha_id:
        obter_caixinha_do_usuario(db, current_user.id, parcelada.caixinha_id)

    valor_parcela = round(parcelada.valor_total / parcelada.num_parcelas, 2)
    try:
        db_parcelada = Parcelada(
            **parcelada.dict(),
            user_id=current_user.id,
            valor_parcela=valor_parcela,
            parcela_atual=1,
            ativo=True,
        )
        db.add(db_parcelada)
        db.commit()
        db.refresh(db_parcelada)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Erro ao cadastrar compra parcelada.")
    return db_parcelada


@router.delete("/parceladas/{parcelada_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_parcelada(parcelada_id: int, db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    db_parcelada = (
        db.query(Parcelada)
        .filter(Parcelada.id == parcelada_id, Parcelada.user_id == current_user.id)
        .first()
    )
    if db_parcelada is None:
        raise ItemNaoEncontrado(parcelada_id=parcelada_id)
    db.delete(db_parcelada)
    db.commit()
    return None


# --- Recorrências ---

@router.get("", response_model=List[RecorrenciaRead])
def read_recorrencias(db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    return (
        db.query(Recorrencia)
        .filter(Recorrencia.user_id == current_user.id)
        .order_by(Recorrencia.dia_vencimento)
        .all()
    )


@router.post("", response_model=RecorrenciaRead, status_code=status.HTTP_201_CREATED)
def create_recorrencia(
    recorrencia: RecorrenciaCreate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    if recorrencia.tipo not in TIPOS_TRANSACAO:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Tipo deve ser 'entrada' ou 'saida'")
    if recorrencia.frequencia not in FREQUENCIAS:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Frequência deve ser 'mensal' ou 'anual'")
    if recorrencia.caixinha_id:
        obter_caixinha_do_usuario(db, current_user.id, recorrencia.caixinha_id)

    try:
        db_rec = Recorrencia(**recorrencia.dict(), user_id=current_user.id, ativo=True)
        db.add(db_rec)
        db.commit()
        db.refresh(db_rec)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Erro ao cadastrar recorrência.")
    return db_rec


@router.put("/{recorrencia_id}", response_model=RecorrenciaRead)
def update_recorrencia(
    recorrencia_id: int,
    recorrencia_update: RecorrenciaUpdate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    db_rec = _obter_recorrencia(db, current_user.id, recorrencia_id)
    update_data = recorrencia_update.dict(exclude_unset=True)

    if "frequencia" in update_data and update_data["frequencia"] not in FREQUENCIAS:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Frequência deve ser 'mensal' ou 'anual'")
    if update_data.get("caixinha_id"):
        obter_caixinha_do_usuario(db, current_user.id, update_data["caixinha_id"])

    for key, value in update_data.items():
        setattr(db_rec, key, value)
    db.commit()
    db.refresh(db_rec)
    return db_rec


@router.delete("/{recorrencia_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recorrencia(recorrencia_id: int, db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    db_rec = _obter_recorrencia(db, current_user.id, recorrencia_id)
    db.delete(db_rec)
    db.commit()
    return None
