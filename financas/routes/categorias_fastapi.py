# financas/routes/categorias_fastapi.py
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from financas.auth import get_current_user
from financas.database import get_db
from financas.exceptions import CategoriaNaoEncontrada
from financas.models.categoria import TIPOS_CATEGORIA, Categoria
from financas.models.usuario import Usuario
from financas.schemas.categoria import CategoriaCreate, CategoriaRead

router = APIRouter(
    tags=["Categorias"],
    responses={404: {"description": "Categoria não encontrada"}},
)


def _validar_tipo(tipo: str):
    if tipo not in TIPOS_CATEGORIA:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Tipo de categoria inválido. Use: {', '.join(TIPOS_CATEGORIA)}",
        )


@router.get("", response_model=List[CategoriaRead])
def read_categorias(
    tipo: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    """
    Lista as categorias do sistema e as personalizadas do usuário, as do
    sistema primeiro.
    """
    query = db.query(Categoria).filter(or_(Categoria.user_id.is_(None), Categoria.user_id == current_user.id))
    if tipo:
        query = query.filter(Categoria.tipo == tipo)
    return query.order_by(Categoria.is_sistema.desc(), Categoria.nome).all()


@router.post("", response_model=CategoriaRead, status_code=status.HTTP_201_CREATED)
def create_categoria(
    categoria: CategoriaCreate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    _validar_tipo(categoria.tipo)
    try:
        db_categoria = Categoria(**categoria.dict(), user_id=current_user.id, is_sistema=False)
        db.add(db_categoria)
        db.commit()
        db.refresh(db_categoria)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Erro ao criar categoria.")
    return db_categoria


@router.delete("/{categoria_id}")
def delete_categoria(
    categoria_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    # Categorias do sistema não pertencem a ninguém e nunca casam com este filtro
    db_categoria = (
        db.query(Categoria)
        .filter(
            Categoria.id == categoria_id,
            Categoria.user_id == current_user.id,
            Categoria.is_sistema.is_(False),
        )
        .first()
    )
    if db_categoria is None:
        raise CategoriaNaoEncontrada(categoria_id=categoria_id)
    db.delete(db_categoria)
    db.commit()
    return {"message": "Categoria deletada com sucesso"}
