from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base


class Pessoa(Base):
    __tablename__ = "pessoa"

    # id gerado pelo banco (autoincrement), nunca MAX()+1 na aplicação
    id_pessoa: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nome: Mapped[str] = mapped_column(String(150), nullable=False)
    cpf: Mapped[str] = mapped_column(String(14), nullable=False, unique=True)
    telefone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(120), nullable=True)
    endereco: Mapped[str | None] = mapped_column(Text, nullable=True)

    paciente: Mapped["Paciente"] = relationship(back_populates="pessoa", uselist=False)

    def __repr__(self) -> str:
        return f"Pessoa({self.id_pessoa}, {self.nome})"


class Convenio(Base):
    __tablename__ = "convenio"

    id_convenio: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nome: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    pacientes: Mapped[list["Paciente"]] = relationship(back_populates="convenio")


class Paciente(Base):
    __tablename__ = "paciente"

    id_paciente: Mapped[int] = mapped_column(
        ForeignKey("pessoa.id_pessoa"), primary_key=True, autoincrement=False
    )
    data_nascimento: Mapped[date] = mapped_column(Date, nullable=False)
    id_convenio: Mapped[int | None] = mapped_column(ForeignKey("convenio.id_convenio"), nullable=True)

    pessoa: Mapped["Pessoa"] = relationship(back_populates="paciente")
    convenio: Mapped["Convenio"] = relationship(back_populates="pacientes")

    def __repr__(self) -> str:
        return f"Paciente({self.id_paciente})"


class Consulta(Base):
    """
    Consultas são gravadas por outro sistema. A tabela existe aqui só pela FK
    que impede a exclusão de pacientes com atendimentos registrados.
    """
    __tablename__ = "consulta"

    id_consulta: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_paciente: Mapped[int] = mapped_column(ForeignKey("paciente.id_paciente"), nullable=False)
    data_hora: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    observacoes: Mapped[str | None] = mapped_column(Text, nullable=True)
