import copy
import os
from functools import lru_cache
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

load_dotenv()

DEFAULT_CONFIG_PATH = os.environ.get("PM_CONFIG_FILE", "config/config.yaml")

DEFAULTS: Dict[str, Any] = {
    "api": {
        "base_url": "http://localhost:8383",
        "timeout": 40,
        "max_retries": 2,
        "backoff": 1.5,
    },
    "project": {"id": ""},
    "classification": {"soon_days": 3, "timezone": ""},
    "view": {"sort_field": "", "sort_direction": "asc", "detail_limit": 50},
}


class ConfigError(ValueError):
    pass


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def _apply_env(data: Dict[str, Any]) -> Dict[str, Any]:
    base_url = os.getenv("PM_API_BASE_URL")
    if base_url:
        data["api"]["base_url"] = base_url
    project_id = os.getenv("PM_PROJECT_ID")
    if project_id:
        data["project"]["id"] = project_id
    tz = os.getenv("PM_TIMEZONE")
    if tz:
        data["classification"]["timezone"] = tz
    soon = os.getenv("PM_SOON_DAYS")
    if soon:
        try:
            data["classification"]["soon_days"] = int(soon)
        except ValueError:
            raise ConfigError(f"PM_SOON_DAYS deve ser inteiro, recebido {soon!r}")
    return data


@lru_cache(maxsize=1)
def load_config(path: Optional[str] = None) -> dict:
    """
    Carrega config YAML sobre os DEFAULTS. Arquivo ausente -> só defaults
    (+ overrides de ambiente).
    """
    path = path or DEFAULT_CONFIG_PATH
    data: Dict[str, Any] = {}
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"YAML inválido em {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config em {path} deve ser um mapeamento, não {type(data).__name__}")
    return _apply_env(_merge(DEFAULTS, data))
