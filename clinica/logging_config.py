from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

from . import config

FORMATO = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d %(message)s"


def configure_logging(level: str | None = None, log_dir: str | None = None) -> None:
    """
    Configura o root logger uma única vez na inicialização:
    - console sempre
    - app.log (INFO+) e error.log (ERROR+) somente se LOG_DIR estiver definida
    """
    level = (level or config.LOG_LEVEL).upper()
    log_dir = log_dir if log_dir is not None else config.LOG_DIR

    formatter = logging.Formatter(FORMATO)

    root = logging.getLogger()
    for h in root.handlers[:]:
        root.removeHandler(h)
    root.setLevel(getattr(logging, level, logging.INFO))

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

        def _rot(nome: str, nivel: int) -> RotatingFileHandler:
            h = RotatingFileHandler(
                os.path.join(log_dir, nome),
                maxBytes=2 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
            h.setLevel(nivel)
            h.setFormatter(formatter)
            return h

        root.addHandler(_rot("app.log", logging.INFO))
        root.addHandler(_rot("error.log", logging.ERROR))

    # uvicorn instala handlers próprios: repassa tudo ao root
    for nome in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(nome)
        lg.handlers = []
        lg.propagate = True

    logging.getLogger(__name__).info("Logging inicializado (level=%s, log_dir=%s).", level, log_dir or "-")
