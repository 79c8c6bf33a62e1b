# financas/routes/contas_fastapi.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from financas.auth import get_current_user
from financas.database import get_db
from financas.exceptions import ContaNaoEncontrada
from financas.models.conta import TIPOS_CONTA, Conta
from financas.models.usuario import Usuario
from financas.schemas.conta import ContaCreate, ContaRead, ContaUpdate, SaldoTotal

router = APIRouter(
    tags=["Contas"],
    responses={404: {"description": "Conta não encontrada"}},
)


def _validar_tipo(tipo: str):
    if tipo not in TIPOS_CONTA:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Tipo de conta inválido. Use: {', '.join(TIPOS_CONTA)}",
        )


def _obter_conta(db: Session, usuario_id: int, conta_id: int) -> Conta:
    db_conta = db.query(Conta).filter(Conta.id == conta_id, Conta.user_id == usuario_id).first()
    if db_conta is None:
        raise ContaNaoEncontrada(conta_id=conta_id)
    return db_conta


@router.post("", response_model=ContaRead, status_code=status.HTTP_201_CREATED)
def create_conta(conta: ContaCreate, db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    _validar_tipo(conta.tipo)
    try:
        db_conta = Conta(**conta.dict(), user_id=current_user.id, saldo_atual=conta.saldo_inicial, ativo=True)
        db.add(db_conta)
        db.commit()
        db.refresh(db_conta)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Erro ao criar conta.")
    return db_conta


@router.get("", response_model=List[ContaRead])
def read_contas(db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    return db.query(Conta).filter(Conta.user_id == current_user.id).order_by(Conta.nome).all()


@router.get("/saldo-total", response_model=SaldoTotal)
def read_saldo_total(db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    """Saldo consolidado das contas ativas."""
    ativas = db.query(Conta).filter(Conta.user_id == current_user.id, Conta.ativo.is_(True))
    return {
        "saldo_total": ativas.with_entities(func.sum(Conta.saldo_atual)).scalar() or 0.0,
        "total_contas": ativas.count(),
    }


@router.put("/{conta_id}", response_model=ContaRead)
def update_conta(
    conta_id: int,
    conta_update: ContaUpdate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    # saldo_atual só muda por pagamentos de fatura
    db_conta = _obter_conta(db, current_user.id, conta_id)
    update_data = conta_update.dict(exclude_unset=True)
    if "tipo" in update_data:
        _validar_tipo(update_data["tipo"])

    for key, value in update_data.items():
        setattr(db_conta, key, value)
    db.commit()
    db.refresh(db_conta)
    return db_conta


@router.delete("/{conta_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_conta(conta_id: int, db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    db_conta = _obter_conta(db, current_user.id, conta_id)
    db.delete(db_conta)
    db.commit()
    return None
