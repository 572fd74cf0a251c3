# backend/config.py
# -----------------------------------------------------------------------------
# Configuração da aplicação.
#
# Cada configuração pode ter vários nomes aceitos (ex.: VITE_SUPABASE_URL ou
# NEXT_PUBLIC_SUPABASE_URL), testados em ordem de prioridade. Para cada nome,
# as fontes são consultadas em ordem:
# - variáveis de ambiente do processo
# - arquivo .env (python-dotenv)
#
# Observações:
# - Nada aqui é global: quem precisa das settings chama load_*_settings e
#   repassa o objeto (cliente, app Flask, scripts).
# -----------------------------------------------------------------------------

import logging
import os
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from dotenv import dotenv_values

# Fonte nomeada: ("environment", os.environ), ("dotenv", {...}), ...
Source = Tuple[str, Mapping[str, Optional[str]]]

BASE_DIR = os.path.dirname(__file__)

DEFAULT_PROJECT_ID = "shfdjkaosykgaikfazgl"
DEFAULT_BACKEND_URL = f"https://{DEFAULT_PROJECT_ID}.supabase.co"

BACKEND_URL_NAMES = ("VITE_SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL")
BACKEND_KEY_NAMES = (
    "VITE_SUPABASE_ANON_KEY",
    "NEXT_PUBLIC_SUPABASE_PUBLISHABLE_DEFAULT_KEY",
    "SUPABASE_ANON_KEY",
)

# Tamanhos mínimos para considerar URL/chave preenchidas
MIN_URL_LENGTH = 10
MIN_KEY_LENGTH = 20

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class ConfigError(RuntimeError):
    """Configuração obrigatória ausente ou inválida."""


def default_sources(env_file: str = ".env") -> List[Source]:
    sources: List[Source] = [("environment", os.environ)]
    if os.path.exists(env_file):
        sources.append(("dotenv", dotenv_values(env_file)))
    return sources


def first_match(names: Sequence[str], sources: Iterable[Source], default: str = "") -> str:
    """
    Percorre os nomes em ordem e, para cada nome, as fontes em ordem:
    VITE_SUPABASE_URL no .env ganha de NEXT_PUBLIC_SUPABASE_URL no ambiente.
    Retorna o primeiro valor não vazio (ou o default).
    """
    sources = list(sources)
    for name in names:
        for _source_name, values in sources:
            value = values.get(name)
            if value:
                return value.strip()
    return default


# ----------- BACKEND (database-as-a-service) -----------

@dataclass(frozen=True)
class BackendSettings:
    url: str
    anon_key: str

    def is_configured(self) -> bool:
        has_url = isinstance(self.url, str) and len(self.url) > MIN_URL_LENGTH
        has_key = isinstance(self.anon_key, str) and len(self.anon_key) > MIN_KEY_LENGTH
        return has_url and has_key


def load_backend_settings(sources: Optional[List[Source]] = None) -> BackendSettings:
    sources = default_sources() if sources is None else sources
    return BackendSettings(
        url=first_match(BACKEND_URL_NAMES, sources, DEFAULT_BACKEND_URL),
        anon_key=first_match(BACKEND_KEY_NAMES, sources),
    )


# ----------- APLICAÇÃO -----------

@dataclass(frozen=True)
class AppSettings:
    backups_dir: str
    api_base_url: str
    secret_key: str
    log_level: str


def load_app_settings(sources: Optional[List[Source]] = None) -> AppSettings:
    sources = default_sources() if sources is None else sources
    return AppSettings(
        backups_dir=first_match(
            ["BELAFARMA_BACKUPS_DIR"], sources, os.path.join(BASE_DIR, "..", "backups_dev_simulated")
        ),
        api_base_url=first_match(["BELAFARMA_API_URL"], sources, "http://localhost:3001").rstrip("/"),
        secret_key=first_match(["SECRET_KEY"], sources, "dev-secret-key-change-me"),
        log_level=first_match(["LOG_LEVEL"], sources, "INFO").upper(),
    )


def setup_logging(level: str = "INFO") -> None:
    """
    Formato: DATA | MÓDULO | NÍVEL | MENSAGEM
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ConfigError(f"LOG_LEVEL inválido: {level}")
    logging.basicConfig(level=numeric, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
