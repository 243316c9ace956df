# pmapi/auth.py
import os
import logging
from typing import Optional

import requests
from dotenv import load_dotenv

from config.loader import load_config

load_dotenv()

logger = logging.getLogger(__name__)

SIGNIN_PATH = "/api/auth/signin"
SIGNOUT_PATH = "/api/auth/signout"

# Cache em memória (a API não informa expiração)
_cached_token: Optional[str] = None


class AuthError(RuntimeError):
    pass


def _base_url() -> str:
    return load_config()["api"]["base_url"].rstrip("/")


def sign_in(email: str, password: str, timeout: int = 30) -> str:
    """
    Faz login e guarda o token em cache.
    O token volta no campo ``Authentication`` da resposta.
    """
    global _cached_token

    url = _base_url() + SIGNIN_PATH
    try:
        resp = requests.post(
            url,
            json={"email": email, "password": password},
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise AuthError(f"Falha de conexão no login ({url}): {e}") from e
    if resp.status_code >= 400:
        raise AuthError(f"Falha no login ({resp.status_code}): {resp.text[:500]}")
    try:
        data = resp.json()
    except ValueError:
        raise AuthError("Resposta de login não JSON")
    token = data.get("Authentication") if isinstance(data, dict) else None
    if not token:
        raise AuthError(f"Resposta sem token Authentication: {data}")

    _cached_token = token
    logger.debug("Login OK para %s", email)
    return _cached_token


def get_token(force: bool = False) -> str:
    """
    Token para o header ``Authentication``.
    Ordem: cache -> login com PM_EMAIL/PM_PASSWORD -> PM_TOKEN.
    """
    if not force and _cached_token:
        return _cached_token

    email = os.getenv("PM_EMAIL")
    password = os.getenv("PM_PASSWORD")
    if email and password:
        return sign_in(email, password)

    token = os.getenv("PM_TOKEN")
    if token:
        return token
    raise AuthError("Sem credenciais: defina PM_EMAIL/PM_PASSWORD ou PM_TOKEN")


def sign_out(timeout: int = 30) -> None:
    """Encerra a sessão no servidor e limpa o cache (mesmo se o servidor falhar)."""
    global _cached_token

    token = _cached_token
    _cached_token = None
    if not token:
        return
    try:
        resp = requests.post(_base_url() + SIGNOUT_PATH, json={},
                             headers={"Authentication": token}, timeout=timeout)
        if resp.status_code >= 400:
            logger.warning("Logout retornou %s", resp.status_code)
    except requests.RequestException as e:
        logger.warning("Erro ao encerrar sessão: %s", e)
