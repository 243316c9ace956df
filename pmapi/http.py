import time
import logging
from typing import Any, Dict, Optional

import requests

from config.loader import load_config
from .auth import get_token

logger = logging.getLogger(__name__)

TRANSIENT_STATUS = (500, 502, 503, 504)


class ApiHTTPError(RuntimeError):
    def __init__(self, message, status=None, url=None, body=None):
        super().__init__(message)
        self.status = status
        self.url = url
        self.body = body


def _full_url(path: str, base_url: str) -> str:
    if path.startswith("http"):
        return path
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def api_post(path: str, payload: Optional[Dict[str, Any]] = None, retry: bool = True,
             max_retries: Optional[int] = None, backoff: Optional[float] = None) -> Any:
    """
    POST autenticado com:
      - renovação de token em 401/403 (uma vez)
      - tentativas extras para 500/502/503/504 e falhas de rede, com backoff linear
    """
    api_cfg = load_config()["api"]
    if max_retries is None:
        max_retries = int(api_cfg.get("max_retries", 2))
    if backoff is None:
        backoff = float(api_cfg.get("backoff", 1.5))
    timeout = api_cfg.get("timeout", 40)

    url = _full_url(path, api_cfg["base_url"])
    attempt = 0
    renewed = False
    while True:
        attempt += 1
        headers = {
            "Authentication": get_token(),
            "Accept": "application/json",
        }
        try:
            resp = requests.post(url, json=payload or {}, headers=headers, timeout=timeout)
        except requests.RequestException as e:
            logger.debug("Falha de rede POST %s: %s", url, e)
            if retry and attempt <= max_retries:
                time.sleep(backoff * attempt)
                continue
            raise ApiHTTPError(f"Falha de conexão em {url}: {e}", url=url) from e

        if resp.status_code in (401, 403) and retry and not renewed:
            logger.debug("Renovando token após %s em %s", resp.status_code, url)
            renewed = True
            get_token(force=True)
            continue

        if resp.status_code >= 400:
            try:
                body = resp.json()
            except ValueError:
                body = resp.text

            logger.debug("Falha POST %s status=%s body=%s", url, resp.status_code, body)

            if resp.status_code in TRANSIENT_STATUS and retry and attempt <= max_retries:
                time.sleep(backoff * attempt)
                continue

            raise ApiHTTPError(
                f"Erro {resp.status_code} em {url}",
                status=resp.status_code,
                url=url,
                body=body,
            )

        try:
            data = resp.json()
        except ValueError:
            raise ApiHTTPError("Resposta não JSON", status=resp.status_code, url=url, body=resp.text)

        logger.debug("OK POST %s -> %s", url,
                     list(data.keys())[:6] if isinstance(data, dict) else type(data).__name__)
        return data
