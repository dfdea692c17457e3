from __future__ import annotations

from datetime import datetime

from clinica.cli import main
from clinica.db import db_session
from clinica.models import Consulta
from clinica.seed import CONVENIOS, seed_base
from clinica.services import lista_convenios, lista_pacientes


def test_seed_is_idempotent(db):
    seed_base()
    seed_base()
    assert sorted(c["nome"] for c in lista_convenios()) == sorted(CONVENIOS)


def test_cli_add_list_remove(db, capsys):
    assert main(["init"]) == 0
    assert main(["add-patient", "--nome", "Ana Lima", "--cpf", "222", "--data-nascimento", "1985-06-30",
                 "--id-convenio", "1"]) == 0
    out = capsys.readouterr().out
    assert "Paciente criado:" in out

    assert main(["list", "pacientes"]) == 0
    out = capsys.readouterr().out
    assert "Ana Lima | 222 | Unimed" in out

    id_ = lista_pacientes()[0]["id_pessoa"]
    assert main(["remove-patient", str(id_)]) == 0
    assert lista_pacientes() == []


def test_cli_duplicate_and_missing(db, capsys):
    args = ["add-patient", "--nome", "Ana", "--cpf", "333", "--data-nascimento", "1985-06-30"]
    assert main(args) == 0
    assert main(args) == 1
    assert "CPF já existe." in capsys.readouterr().out

    assert main(["remove-patient", "999"]) == 1
    assert "Paciente não encontrado." in capsys.readouterr().out


def test_cli_remove_with_consultas(db, capsys):
    main(["add-patient", "--nome", "Bia", "--cpf", "444", "--data-nascimento", "1990-01-01"])
    id_ = lista_pacientes()[0]["id_pessoa"]
    with db_session() as s:
        s.add(Consulta(id_paciente=id_, data_hora=datetime(2024, 5, 2, 14, 0)))

    assert main(["remove-patient", str(id_)]) == 1
    assert "consultas existentes" in capsys.readouterr().out
    assert len(lista_pacientes()) == 1


def test_cli_list_convenios(db, capsys):
    main(["list", "convenios"])
    out = capsys.readouterr().out
    for nome in CONVENIOS:
        assert nome in out


def test_cli_rejects_bad_input(db, capsys):
    assert main(["add-patient", "--nome", "", "--cpf", "555", "--data-nascimento", "1990-01-01"]) == 1
    assert "obrigatórios" in capsys.readouterr().out

    assert main(["add-patient", "--nome", "Caio", "--cpf", "", "--data-nascimento", "1990-01-01"]) == 1
    assert "obrigatórios" in capsys.readouterr().out

    assert main(["add-patient", "--nome", "Caio", "--cpf", "556", "--data-nascimento", "01/02/1990"]) == 1
    assert "data_nascimento inválida" in capsys.readouterr().out

    assert lista_pacientes() == []
