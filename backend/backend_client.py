# backend/backend_client.py
# -----------------------------------------------------------------------------
# Cliente REST do banco externo (Supabase / PostgREST).
#
# - create_client(settings)  → BackendClient ou None (sem URL/chave)
# - require_client(settings) → BackendClient ou ConfigError
#
# Não existe instância global: quem precisa do cliente recebe por parâmetro.
# -----------------------------------------------------------------------------

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import requests

from config import BackendSettings, ConfigError

logger = logging.getLogger(__name__)

REST_PREFIX = "/rest/v1"


class BackendClient:
    def __init__(self, settings: BackendSettings, session: Optional[requests.Session] = None, timeout: float = 10):
        self.base_url = settings.url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "apikey": settings.anon_key,
            "Authorization": f"Bearer {settings.anon_key}",
            "Accept": "application/json",
        })

    def select(self, table: str, columns: str = "*", **filters: Any) -> List[Dict[str, Any]]:
        """
        SELECT simples via PostgREST. Filtros viram igualdade:
          client.select("boletos", "id,due_date", status="pendente")
          → GET /rest/v1/boletos?select=id,due_date&status=eq.pendente
        """
        params = {"select": columns}
        for column, value in filters.items():
            params[column] = f"eq.{value}"

        resp = self.session.get(f"{self.base_url}{REST_PREFIX}/{table}", params=params, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()


def create_client(settings: BackendSettings, session: Optional[requests.Session] = None) -> Optional[BackendClient]:
    if not settings.is_configured():
        logger.warning("Backend externo sem chave. Defina VITE_SUPABASE_ANON_KEY no ambiente ou no .env.")
        return None
    logger.info("Conectado ao backend externo: %s", urlparse(settings.url).netloc)
    return BackendClient(settings, session=session)


def require_client(settings: BackendSettings, session: Optional[requests.Session] = None) -> BackendClient:
    client = create_client(settings, session=session)
    if client is None:
        raise ConfigError("Backend externo não configurado (URL/chave ausentes)")
    return client
