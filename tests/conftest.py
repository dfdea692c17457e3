from __future__ import annotations

import os

# banco em memória para toda a suíte (precisa vir antes do import de clinica)
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from clinica.api_main import app
from clinica.db import Base, engine
from clinica.seed import seed_base
from clinica.services import init_db


@pytest.fixture()
def db():
    Base.metadata.drop_all(bind=engine)
    init_db()
    seed_base()
    yield engine


@pytest.fixture()
def client(db):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def paciente_payload():
    return {
        "nome": "João Silva",
        "cpf": "123.456.789-00",
        "telefone": "(11) 99999-9999",
        "email": "joao@email.com",
        "endereco": "Rua das Flores, 123",
        "data_nascimento": "1990-01-15",
        "id_convenio": 1,
    }
