from pydantic import BaseModel, Field
from typing import Optional


class CategoriaCreate(BaseModel):
    nome: str = Field(..., min_length=1, max_length=100)
    tipo: str
    icone: Optional[str] = Field(None, max_length=50)
    cor: Optional[str] = Field("#6B7280", max_length=7)


class CategoriaRead(BaseModel):
    id: int
    nome: str
    tipo: str
    icone: Optional[str] = None
    cor: Optional[str] = None
    is_sistema: bool

    class Config:
        from_attributes = True
