"""
Módulo de logging configurado para a CLI e uso como biblioteca
"""
import logging
import os
import sys
from typing import Optional


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Configura logger com saída em stdout

    Args:
        name: Nome do logger (geralmente __name__ ou o pacote raiz)
        level: Nível de log (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Logger configurado
    """
    logger = logging.getLogger(name)

    if level is None:
        level = os.getenv('PM_LOG_LEVEL', 'INFO')
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Evita duplicação de handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Não propaga para root logger (evita duplicação)
    logger.propagate = False

    return logger
