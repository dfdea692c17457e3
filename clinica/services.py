from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from sqlalchemy import Select, delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .db import Base, db_session, engine
from .models import Convenio, Paciente, Pessoa

logger = logging.getLogger(__name__)


# =========================
# Bootstrap DB
# =========================
def init_db() -> None:
    """Cria as tabelas que ainda não existem."""
    Base.metadata.create_all(bind=engine)


# =========================
# Erros de domínio
# =========================
class DadosObrigatoriosAusentes(ValueError):
    def __init__(self) -> None:
        super().__init__("Nome, CPF e data_nascimento são obrigatórios")


class PacienteNaoEncontrado(LookupError):
    def __init__(self, id_paciente: int) -> None:
        super().__init__(f"Paciente {id_paciente} não encontrado")
        self.id_paciente = id_paciente


class CpfDuplicado(ValueError):
    def __init__(self, cpf: str) -> None:
        super().__init__(f"CPF {cpf} já existe")
        self.cpf = cpf


class PacienteComConsultas(ValueError):
    def __init__(self, id_paciente: int) -> None:
        super().__init__(f"Paciente {id_paciente} possui consultas registradas")
        self.id_paciente = id_paciente


# =========================
# Helper / DTO
# =========================
@dataclass(frozen=True)
class DadosPaciente:
    nome: str | None = None
    cpf: str | None = None
    telefone: str | None = None
    email: str | None = None
    endereco: str | None = None
    data_nascimento: date | None = None
    id_convenio: int | None = None

    def valida(self) -> None:
        if not self.nome or not self.cpf or not self.data_nascimento:
            raise DadosObrigatoriosAusentes()


# SQLSTATE do PostgreSQL e mensagens equivalentes do SQLite
_UNIQUE = ("23505", "UNIQUE constraint failed")
_FOREIGN_KEY = ("23503", "FOREIGN KEY constraint failed")


def _violou(exc: IntegrityError, tipo: tuple[str, str]) -> bool:
    codigo, mensagem = tipo
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return sqlstate == codigo
    return mensagem in str(orig)


def _query_pacientes() -> Select:
    return (
        select(
            Pessoa.id_pessoa,
            Pessoa.nome,
            Pessoa.cpf,
            Pessoa.telefone,
            Pessoa.email,
            Pessoa.endereco,
            Paciente.data_nascimento,
            Paciente.id_convenio,
            Convenio.nome.label("convenio_nome"),
        )
        .join(Paciente, Paciente.id_paciente == Pessoa.id_pessoa)
        .outerjoin(Convenio, Convenio.id_convenio == Paciente.id_convenio)
    )


def _flat(r) -> dict[str, Any]:
    return {
        "id_pessoa": r.id_pessoa,
        "nome": r.nome,
        "cpf": r.cpf,
        "telefone": r.telefone,
        "email": r.email,
        "endereco": r.endereco,
        "data_nascimento": r.data_nascimento,
        "id_convenio": r.id_convenio,
        "convenio_nome": r.convenio_nome,
    }


def _busca(s: Session, id_paciente: int) -> dict[str, Any] | None:
    r = s.execute(_query_pacientes().where(Pessoa.id_pessoa == id_paciente)).first()
    return _flat(r) if r else None


# =========================
# Consultas
# =========================
def lista_pacientes() -> list[dict]:
    with db_session() as s:
        rows = s.execute(_query_pacientes().order_by(Pessoa.nome)).all()
        return [_flat(r) for r in rows]


def busca_paciente(id_paciente: int) -> dict | None:
    with db_session() as s:
        return _busca(s, id_paciente)


def lista_convenios() -> list[dict]:
    with db_session() as s:
        rows = s.execute(select(Convenio.id_convenio, Convenio.nome).order_by(Convenio.nome)).all()
        return [{"id_convenio": r.id_convenio, "nome": r.nome} for r in rows]


# =========================
# CRUD paciente
# =========================
def cria_paciente(dados: DadosPaciente) -> dict:
    """
    Grava Pessoa e Paciente na mesma transação.
    O id vem do autoincrement do banco (lido após o flush).
    """
    dados.valida()

    try:
        with db_session() as s:
            pessoa = Pessoa(
                nome=dados.nome,
                cpf=dados.cpf,
                telefone=dados.telefone,
                email=dados.email,
                endereco=dados.endereco,
            )
            s.add(pessoa)
            s.flush()

            s.add(
                Paciente(
                    id_paciente=pessoa.id_pessoa,
                    data_nascimento=dados.data_nascimento,
                    id_convenio=dados.id_convenio or None,
                )
            )
            s.flush()

            criado = _busca(s, pessoa.id_pessoa)
    except IntegrityError as e:
        if _violou(e, _UNIQUE):
            raise CpfDuplicado(dados.cpf) from e
        raise

    logger.info("Paciente %s criado.", criado["id_pessoa"])
    return criado


def atualiza_paciente(id_paciente: int, dados: DadosPaciente) -> dict:
    try:
        with db_session() as s:
            pessoa = s.get(Pessoa, id_paciente)
            paciente = s.get(Paciente, id_paciente)
            if pessoa is None or paciente is None:
                raise PacienteNaoEncontrado(id_paciente)

            dados.valida()

            pessoa.nome = dados.nome
            pessoa.cpf = dados.cpf
            pessoa.telefone = dados.telefone
            pessoa.email = dados.email
            pessoa.endereco = dados.endereco
            s.flush()

            paciente.data_nascimento = dados.data_nascimento
            paciente.id_convenio = dados.id_convenio or None
            s.flush()

            atualizado = _busca(s, id_paciente)
    except IntegrityError as e:
        if _violou(e, _UNIQUE):
            raise CpfDuplicado(dados.cpf) from e
        raise

    logger.info("Paciente %s atualizado.", id_paciente)
    return atualizado


def remove_paciente(id_paciente: int) -> None:
    """Apaga Paciente antes de Pessoa (FK paciente -> pessoa)."""
    try:
        with db_session() as s:
            if _busca(s, id_paciente) is None:
                raise PacienteNaoEncontrado(id_paciente)

            s.execute(delete(Paciente).where(Paciente.id_paciente == id_paciente))
            s.execute(delete(Pessoa).where(Pessoa.id_pessoa == id_paciente))
    except IntegrityError as e:
        if _violou(e, _FOREIGN_KEY):
            raise PacienteComConsultas(id_paciente) from e
        raise

    logger.info("Paciente %s removido.", id_paciente)
