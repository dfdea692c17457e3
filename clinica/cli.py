from __future__ import annotations

import argparse
from datetime import date

from clinica.seed import seed_base
from clinica.services import (
    CpfDuplicado,
    DadosObrigatoriosAusentes,
    DadosPaciente,
    PacienteComConsultas,
    PacienteNaoEncontrado,
    cria_paciente,
    init_db,
    lista_convenios,
    lista_pacientes,
    remove_paciente,
)


def cmd_init(args: argparse.Namespace) -> None:
    init_db()
    seed_base()
    print("Banco inicializado e convênios carregados.")


def cmd_list(args: argparse.Namespace) -> None:
    if args.entity == "pacientes":
        for p in lista_pacientes():
            print(f"{p['id_pessoa']} | {p['nome']} | {p['cpf']} | {p['convenio_nome'] or '-'}")
    elif args.entity == "convenios":
        for c in lista_convenios():
            print(f"{c['id_convenio']} | {c['nome']}")


def cmd_add_patient(args: argparse.Namespace) -> int:
    try:
        nascimento = date.fromisoformat(args.data_nascimento)
    except ValueError:
        print("data_nascimento inválida (use AAAA-MM-DD).")
        return 1

    dados = DadosPaciente(
        nome=args.nome,
        cpf=args.cpf,
        telefone=args.telefone,
        email=args.email,
        endereco=args.endereco,
        data_nascimento=nascimento,
        id_convenio=args.id_convenio,
    )
    try:
        p = cria_paciente(dados)
    except DadosObrigatoriosAusentes as e:
        print(f"{e}.")
        return 1
    except CpfDuplicado:
        print("CPF já existe.")
        return 1
    print(f"Paciente criado: {p['id_pessoa']}")
    return 0


def cmd_remove_patient(args: argparse.Namespace) -> int:
    try:
        remove_paciente(args.id)
    except PacienteNaoEncontrado:
        print("Paciente não encontrado.")
        return 1
    except PacienteComConsultas:
        print("Não é possível deletar paciente com consultas existentes.")
        return 1
    print("Removido.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="clinica_cli", description="CLI da Clínica (administração local)")
    sub = p.add_subparsers(required=True)

    p_init = sub.add_parser("init", help="Cria as tabelas e carrega os convênios")
    p_init.set_defaults(func=cmd_init)

    p_list = sub.add_parser("list", help="Lista entidades")
    p_list.add_argument("entity", choices=["pacientes", "convenios"])
    p_list.set_defaults(func=cmd_list)

    p_add = sub.add_parser("add-patient", help="Cria paciente")
    p_add.add_argument("--nome", required=True)
    p_add.add_argument("--cpf", required=True)
    p_add.add_argument("--data-nascimento", required=True, help="Data ISO, ex: 1990-01-15")
    p_add.add_argument("--telefone", default=None)
    p_add.add_argument("--email", default=None)
    p_add.add_argument("--endereco", default=None)
    p_add.add_argument("--id-convenio", type=int, default=None)
    p_add.set_defaults(func=cmd_add_patient)

    p_rm = sub.add_parser("remove-patient", help="Remove paciente (sem consultas)")
    p_rm.add_argument("id", type=int)
    p_rm.set_defaults(func=cmd_remove_patient)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    init_db()  # garante as tabelas
    return args.func(args) or 0


if __name__ == "__main__":
    raise SystemExit(main())
