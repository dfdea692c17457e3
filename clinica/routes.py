from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Response, status
from sqlalchemy.exc import SQLAlchemyError

from .schemas import ErroOut, PacienteIn, PacienteOut
from .services import (
    CpfDuplicado,
    DadosObrigatoriosAusentes,
    PacienteComConsultas,
    PacienteNaoEncontrado,
    atualiza_paciente,
    busca_paciente,
    cria_paciente,
    lista_pacientes,
    remove_paciente,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pacientes", tags=["Pacientes"])

NAO_ENCONTRADO = "Paciente não encontrado"
CPF_EXISTE = "CPF já existe"
COM_CONSULTAS = "Não é possível deletar paciente com consultas existentes"

_ERRO_500 = {500: {"model": ErroOut, "description": "Erro interno do servidor"}}
_ERRO_404 = {404: {"model": ErroOut, "description": "Paciente não encontrado"}}
_ERRO_400 = {400: {"model": ErroOut, "description": "Dados de entrada inválidos ou CPF já existe"}}


def _falha(mensagem: str, exc: Exception) -> HTTPException:
    logger.exception("%s: %s", mensagem, exc)
    return HTTPException(status_code=500, detail=mensagem)


@router.get(
    "",
    response_model=list[PacienteOut],
    summary="Busca todos os pacientes",
    description="Retorna todos os pacientes com informações pessoais e do convênio, ordenados por nome.",
    responses=_ERRO_500,
)
@router.get("/", response_model=list[PacienteOut], include_in_schema=False)
def listar_pacientes() -> list[dict]:
    try:
        return lista_pacientes()
    except SQLAlchemyError as e:
        raise _falha("Falha ao buscar pacientes", e) from e


@router.get(
    "/{id_paciente}",
    response_model=PacienteOut,
    summary="Busca um paciente por ID",
    responses={**_ERRO_404, **_ERRO_500},
)
def obter_paciente(id_paciente: int) -> dict:
    try:
        paciente = busca_paciente(id_paciente)
    except SQLAlchemyError as e:
        raise _falha("Falha ao buscar paciente", e) from e

    if paciente is None:
        raise HTTPException(status_code=404, detail=NAO_ENCONTRADO)
    return paciente


@router.post(
    "",
    response_model=PacienteOut,
    status_code=status.HTTP_201_CREATED,
    summary="Cria um novo paciente",
    description="Cria Pessoa e Paciente na mesma transação, com convênio opcional.",
    responses={**_ERRO_400, **_ERRO_500},
)
@router.post("/", response_model=PacienteOut, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def criar_paciente(payload: PacienteIn) -> dict:
    try:
        return cria_paciente(payload.to_dados())
    except DadosObrigatoriosAusentes as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except CpfDuplicado as e:
        logger.warning("Criação recusada: %s", e)
        raise HTTPException(status_code=400, detail=CPF_EXISTE) from e
    except SQLAlchemyError as e:
        raise _falha("Falha ao criar paciente", e) from e


@router.put(
    "/{id_paciente}",
    response_model=PacienteOut,
    summary="Atualiza um paciente existente",
    responses={**_ERRO_400, **_ERRO_404, **_ERRO_500},
)
def atualizar_paciente(id_paciente: int, payload: PacienteIn) -> dict:
    try:
        return atualiza_paciente(id_paciente, payload.to_dados())
    except PacienteNaoEncontrado as e:
        raise HTTPException(status_code=404, detail=NAO_ENCONTRADO) from e
    except DadosObrigatoriosAusentes as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except CpfDuplicado as e:
        logger.warning("Atualização recusada: %s", e)
        raise HTTPException(status_code=400, detail=CPF_EXISTE) from e
    except SQLAlchemyError as e:
        raise _falha("Falha ao atualizar paciente", e) from e


@router.delete(
    "/{id_paciente}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Deleta um paciente",
    description="Não é possível deletar pacientes com consultas existentes.",
    responses={
        400: {"model": ErroOut, "description": COM_CONSULTAS},
        **_ERRO_404,
        **_ERRO_500,
    },
)
def deletar_paciente(id_paciente: int) -> Response:
    try:
        remove_paciente(id_paciente)
    except PacienteNaoEncontrado as e:
        raise HTTPException(status_code=404, detail=NAO_ENCONTRADO) from e
    except PacienteComConsultas as e:
        logger.warning("Exclusão recusada: %s", e)
        raise HTTPException(status_code=400, detail=COM_CONSULTAS) from e
    except SQLAlchemyError as e:
        raise _falha("Falha ao deletar paciente", e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
