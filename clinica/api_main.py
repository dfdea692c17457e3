from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import config
from .logging_config import configure_logging
from .routes import router as pacientes_router
from .schemas import HealthOut
from .seed import seed_base
from .services import init_db

logger = logging.getLogger(__name__)

# Cabeçalhos padrão do helmet, sem Content-Security-Policy (a página /api-docs usa CDN)
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "X-XSS-Protection": "0",
}



# Startup

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # Cria tabelas e convênios básicos (idempotente)
    init_db()
    seed_base()
    logger.info("Banco pronto em %s", config.DATABASE_URL)
    logger.info("Health check: /health, documentação: /api-docs")
    yield


app = FastAPI(
    lifespan=lifespan,
    title="API do Sistema de Gestão de Clínica Médica",
    description="Uma API simples e direta para gerenciar uma clínica médica",
    version="1.0.0",
    contact={"name": "Suporte da API", "email": "support@clinica-medica.com"},
    docs_url="/api-docs",
    redoc_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    for nome, valor in SECURITY_HEADERS.items():
        response.headers.setdefault(nome, valor)
    return response



# Handlers de erro

_SEM_ROTA = (
    (status.HTTP_404_NOT_FOUND, "Not Found"),
    (status.HTTP_405_METHOD_NOT_ALLOWED, "Method Not Allowed"),
)


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # 404/405 do roteador (método ou caminho sem rota) x 404 levantado por um endpoint
    if (exc.status_code, exc.detail) in _SEM_ROTA:
        return JSONResponse(status_code=404, content={"error": "Route not found"})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Entrada inválida em %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Dados de entrada inválidos"})


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Erro não tratado em %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Something went wrong!"}, headers=SECURITY_HEADERS)



# Rotas

app.include_router(pacientes_router)


@app.get("/health", response_model=HealthOut, tags=["Health"], summary="Health check endpoint")
def health() -> dict[str, str]:
    return {"status": "OK", "message": "API is running"}


def main() -> None:
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_config=None)


if __name__ == "__main__":
    main()
