"""
Backend da API da Clínica Médica (cadastro de pacientes).

Estrutura:
- config.py         : variáveis de ambiente (.env)
- logging_config.py : configuração do logging
- db.py             : engine e sessões SQLAlchemy
- models.py         : modelos ORM (Pessoa, Paciente, Convenio, Consulta)
- services.py       : CRUD de pacientes e erros de domínio
- schemas.py        : modelos pydantic de entrada/saída
- routes.py         : rotas /api/pacientes
- api_main.py       : aplicação FastAPI, middlewares, handlers de erro
- seed.py           : convênios iniciais
- cli.py            : administração via linha de comando
"""
