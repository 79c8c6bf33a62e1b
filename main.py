# -*- coding: utf-8 -*-
"""
Arquivo principal da aplicação FastAPI do sistema de finanças pessoais (caixinhas).
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from financas import config
from financas.database import get_database
from financas.exceptions import ErroArmazenamento, ErroFinancas, NaoEncontrado
from financas.routes import (auth_fastapi, caixinhas_fastapi, cartoes_fastapi, categorias_fastapi, contas_fastapi,
                             dividas_fastapi, metas_fastapi, recorrencias_fastapi, transacoes_fastapi,
                             wishlist_fastapi)
from financas.services.categorias import garantir_categorias_sistema

import logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    filename=config.LOG_FILE,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Cria as tabelas no banco de dados
    get_database().criar_tabelas()
    logger.info("Tabelas criadas/verificadas com sucesso")
    garantir_categorias_sistema(get_database())
    yield
    get_database().dispose()


env = config.ENVIRONMENT

docs_url = "/docs" if env != "production" else None
redoc_url = "/redoc" if env != "production" else None

# Inicializa a aplicação FastAPI
app = FastAPI(
    title="API Finanças Pessoais",
    description="API de orçamento por caixinhas: distribuição de entradas, gastos, dívidas, metas e cartões",
    version="1.0.0",
    docs_url=docs_url,
    redoc_url=redoc_url,
    openapi_url="/openapi.json" if env != "production" else None,
    lifespan=lifespan,
)

origins = [
    config.FRONTEND_URL,
    "http://localhost:3001",
    "http://localhost",
    "http://127.0.0.1",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Tratamento de erros ---

def status_do_erro(erro: ErroFinancas) -> int:
    if isinstance(erro, NaoEncontrado):
        return status.HTTP_404_NOT_FOUND
    if isinstance(erro, ErroArmazenamento):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


@app.exception_handler(ErroFinancas)
async def erro_financas_handler(request: Request, exc: ErroFinancas):
    codigo_http = status_do_erro(exc)
    if codigo_http >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.codigo} ({exc.mensagem})")
    else:
        logger.info(f"{request.method} {request.url.path}: {exc.codigo} {exc.detalhes}")
    return JSONResponse(status_code=codigo_http, content={"codigo": exc.codigo, "detail": exc.mensagem})


def jsonable_errors(exc: RequestValidationError):
    return [{"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")} for err in exc.errors()]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"codigo": "entrada_invalida", "detail": jsonable_errors(exc)},
    )


# Montagem dos routers
app.include_router(auth_fastapi.router)
app.include_router(caixinhas_fastapi.router, prefix="/api/v1/caixinhas")
app.include_router(transacoes_fastapi.router, prefix="/api/v1/transacoes")
app.include_router(dividas_fastapi.router, prefix="/api/v1/dividas")
app.include_router(metas_fastapi.router, prefix="/api/v1/metas")
app.include_router(contas_fastapi.router, prefix="/api/v1/contas")
app.include_router(cartoes_fastapi.router, prefix="/api/v1/cartoes")
app.include_router(wishlist_fastapi.router, prefix="/api/v1/wishlist")
app.include_router(recorrencias_fastapi.router, prefix="/api/v1/recorrencias")
app.include_router(categorias_fastapi.router, prefix="/api/v1/categorias")


@app.get("/", tags=["Root"])
async def root():
    return {
        "mensagem": "API Finanças Pessoais - Orçamento por Caixinhas",
        "documentacao": "/docs",
        "endpoints": [
            {"caixinhas": "/api/v1/caixinhas"},
            {"transacoes": "/api/v1/transacoes"},
            {"dividas": "/api/v1/dividas"},
            {"metas": "/api/v1/metas"},
            {"contas": "/api/v1/contas"},
            {"cartoes": "/api/v1/cartoes"},
            {"wishlist": "/api/v1/wishlist"},
            {"recorrencias": "/api/v1/recorrencias"},
            {"categorias": "/api/v1/categorias"},
        ]
    }
