import pytest
from fastapi.testclient import TestClient

from financas.auth import get_current_user, get_password_hash
from financas.database import Database, get_database
from financas.models.caixinha import Caixinha
from financas.models.usuario import Usuario
from financas.services.caixinhas import ServicoCaixinhas

MES = "2024-05"

CAIXINHAS_PADRAO = [
    {"nome": "Custos", "porcentagem": 55},
    {"nome": "Lazer", "porcentagem": 15},
    {"nome": "Reserva", "porcentagem": 30},
]


@pytest.fixture
def database(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'financas_teste.db'}")
    db.criar_tabelas()
    yield db
    db.dispose()


def _criar_usuario(database, email, nome="Teste"):
    with database.transacao() as session:
        usuario = Usuario(nome=nome, email=email, hashed_password=get_password_hash("segredo123"))
        session.add(usuario)
        session.flush()
    return usuario


@pytest.fixture
def usuario(database):
    return _criar_usuario(database, "ana@example.com", nome="Ana")


@pytest.fixture
def outro_usuario(database):
    return _criar_usuario(database, "bruno@example.com", nome="Bruno")


@pytest.fixture
def caixinhas(database, usuario):
    """Caixinhas 55/15/30 configuradas em MES, indexadas pelo nome."""
    resultado = ServicoCaixinhas(database).configurar(usuario.id, MES, CAIXINHAS_PADRAO)
    return {c.nome_caixinha: c for c in resultado}


@pytest.fixture
def client(database, usuario):
    from main import app

    app.dependency_overrides[get_database] = lambda: database
    app.dependency_overrides[get_current_user] = lambda: usuario
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def ler_caixinha(database):
    """Relê a caixinha direto do banco."""
    def _ler(caixinha_id):
        with database.transacao() as session:
            return session.get(Caixinha, caixinha_id)
    return _ler
