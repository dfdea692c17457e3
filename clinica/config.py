from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# DB SQLite em arquivo na raiz do projeto, se DATABASE_URL não for definida
DB_PATH = Path(__file__).resolve().parents[1] / "clinica.sqlite"

DEFAULT_CORS_ORIGINS = (
    "http://localhost:8080",
    "http://127.0.0.1:8080",
    "https://dcc060-clinica-medica-front.onrender.com",
)


def _lista(valore: str | None, padrao: tuple[str, ...]) -> list[str]:
    if not valore:
        return list(padrao)
    return [v.strip() for v in valore.split(",") if v.strip()]


HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DB_PATH}")
SQL_ECHO = os.getenv("SQL_ECHO", "0") == "1"

CORS_ORIGINS = _lista(os.getenv("CORS_ORIGINS"), DEFAULT_CORS_ORIGINS)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR") or None
