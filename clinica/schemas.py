from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from .services import DadosPaciente


class PacienteIn(BaseModel):
    """Entrada de criação/atualização. A presença dos obrigatórios é checada no serviço."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "nome": "João Silva",
                "cpf": "123.456.789-00",
                "telefone": "(11) 99999-9999",
                "email": "joao@email.com",
                "endereco": "Rua das Flores, 123",
                "data_nascimento": "1990-01-15",
                "id_convenio": 1,
            }
        }
    )

    nome: str | None = Field(None, description="Nome completo do paciente (obrigatório)")
    cpf: str | None = Field(None, description="CPF do paciente (obrigatório, único)")
    telefone: str | None = Field(None, description="Número de telefone do paciente")
    email: str | None = Field(None, description="Endereço de e-mail do paciente")
    endereco: str | None = Field(None, description="Endereço do paciente")
    data_nascimento: date | None = Field(None, description="Data de nascimento (obrigatória)")
    id_convenio: int | None = Field(None, description="ID do convênio (opcional)")

    def to_dados(self) -> DadosPaciente:
        return DadosPaciente(**self.model_dump())


class PacienteOut(BaseModel):
    id_pessoa: int = Field(..., description="ID do paciente (gerado automaticamente)", examples=[1])
    nome: str = Field(..., examples=["João Silva"])
    cpf: str = Field(..., examples=["123.456.789-00"])
    telefone: str | None = Field(None, examples=["(11) 99999-9999"])
    email: str | None = Field(None, examples=["joao@email.com"])
    endereco: str | None = Field(None, examples=["Rua das Flores, 123"])
    data_nascimento: date = Field(..., examples=["1990-01-15"])
    id_convenio: int | None = Field(None, examples=[1])
    convenio_nome: str | None = Field(None, description="Nome do convênio", examples=["Unimed"])


class ErroOut(BaseModel):
    error: str = Field(..., description="Mensagem de erro", examples=["Paciente não encontrado"])


class HealthOut(BaseModel):
    status: str = Field(..., examples=["OK"])
    message: str = Field(..., examples=["API is running"])
