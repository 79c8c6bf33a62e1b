# -*- coding: utf-8 -*-
"""
Rotas FastAPI para configuração e distribuição das Caixinhas.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, status

from financas.auth import get_current_user
from financas.dependencias import get_servico_alocacao, get_servico_caixinhas
from financas.models.usuario import Usuario
from financas.schemas.caixinha import CaixinhaRead, CaixinhasConfigurar, CaixinhasDistribuir, CaixinhasResposta
from financas.services.alocacao import ServicoAlocacao
from financas.services.caixinhas import ServicoCaixinhas

router = APIRouter(
    tags=["Caixinhas"],
    responses={404: {"description": "Caixinha não encontrada"}},
)


@router.get("", response_model=List[CaixinhaRead])
def read_caixinhas(
    mes: Optional[str] = None,
    servico: ServicoCaixinhas = Depends(get_servico_caixinhas),
    current_user: Usuario = Depends(get_current_user),
):
    """Lista as caixinhas do mês (padrão: mês atual), ordenadas por nome."""
    return servico.listar(current_user.id, mes)


@router.post("/configurar", response_model=CaixinhasResposta)
def configurar_caixinhas(
    dados: CaixinhasConfigurar,
    servico: ServicoCaixinhas = Depends(get_servico_caixinhas),
    current_user: Usuario = Depends(get_current_user),
):
    caixinhas = servico.configurar(
        current_user.id,
        dados.mes_referencia,
        [item.dict() for item in dados.caixinhas],
    )
    return {"message": "Caixinhas configuradas com sucesso", "caixinhas": caixinhas}


@router.post("/distribuir", response_model=CaixinhasResposta)
def distribuir_entrada(
    dados: CaixinhasDistribuir,
    servico: ServicoAlocacao = Depends(get_servico_alocacao),
    current_user: Usuario = Depends(get_current_user),
):
    """Distribui um valor entre as caixinhas do mês conforme as porcentagens."""
    caixinhas = servico.alocar_entrada(current_user.id, dados.valor, dados.mes_referencia)
    return {"message": "Valor distribuído com sucesso", "caixinhas": caixinhas}


@router.delete("/{caixinha_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_caixinha(
    caixinha_id: int,
    servico: ServicoCaixinhas = Depends(get_servico_caixinhas),
    current_user: Usuario = Depends(get_current_user),
):
    """
    Exclui a caixinha e as transações vinculadas; os demais vínculos são desfeitos.
    """
    servico.excluir(current_user.id, caixinha_id)
    return None
