import pytest

import pmapi.auth
from config.loader import load_config


@pytest.fixture(autouse=True)
def ambiente_limpo(monkeypatch):
    """Isola cada teste de variáveis PM_* reais, do cache de config e do token."""
    for var in ("PM_API_BASE_URL", "PM_PROJECT_ID", "PM_TIMEZONE", "PM_SOON_DAYS",
                "PM_EMAIL", "PM_PASSWORD", "PM_TOKEN", "PM_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    load_config.cache_clear()
    monkeypatch.setattr(pmapi.auth, "_cached_token", None)
    yield
    load_config.cache_clear()
