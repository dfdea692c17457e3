from __future__ import annotations

from sqlalchemy import select

from .db import db_session
from .models import Convenio

CONVENIOS = ("Unimed", "Bradesco Saúde", "SulAmérica", "Amil")


def seed_base() -> None:
    """Popula os convênios básicos (idempotente)."""
    with db_session() as s:
        for nome in CONVENIOS:
            if s.execute(select(Convenio).where(Convenio.nome == nome)).scalar_one_or_none() is None:
                s.add(Convenio(nome=nome))
