from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class UsuarioBase(BaseModel):
    email: EmailStr
    nome: str = Field(..., min_length=1, max_length=100)


class UsuarioCreate(UsuarioBase):
    password: str = Field(..., min_length=6, max_length=72)


class UsuarioRead(UsuarioBase):
    id: int
    criado_em: Optional[datetime] = None

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str
    user_info: UsuarioRead
