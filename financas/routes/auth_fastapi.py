# financas/routes/auth_fastapi.py
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from financas import auth, database
from financas.models.usuario import Usuario
from financas.schemas import usuario as schemas_usuario


router = APIRouter(
    prefix="/api/v1/auth",
    tags=["Authentication"]
)


@router.post("/registrar", response_model=schemas_usuario.UsuarioRead, status_code=status.HTTP_201_CREATED)
def registrar(dados: schemas_usuario.UsuarioCreate, db: Session = Depends(database.get_db)):
    if auth.get_user(db, email=dados.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="E-mail já cadastrado")

    user = Usuario(
        nome=dados.nome,
        email=dados.email,
        hashed_password=auth.get_password_hash(dados.password),
    )
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="E-mail já cadastrado")
    return user


@router.post("/token", response_model=schemas_usuario.Token)
async def login_for_access_token(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(database.get_db)):
    user = auth.authenticate_user(db, email=form_data.username, password=form_data.password)  # Usamos email como username
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Email ou senha incorretos",
            headers={"WWW-Authenticate": "Bearer"},
        )
    access_token = auth.create_access_token(data={"sub": user.email})

    user_info = schemas_usuario.UsuarioRead.model_validate(user)
    return {"access_token": access_token, "token_type": "bearer", "user_info": user_info}


@router.get("/me", response_model=schemas_usuario.UsuarioRead)
async def read_users_me(current_user: Usuario = Depends(auth.get_current_user)):
    """
    Retorna os dados do usuário atualmente logado.
    """
    return current_user
