# backend/smoke_api.py
# -----------------------------------------------------------------------------
# Smoke test manual dos endpoints de boletos do servidor local.
#
# Verifica:
# 1) GET /api/boletos    → lista de boletos
# 2) GET /api/all-data   → boletos inclusos no payload completo
#
# Para cada endpoint imprime o total e os boletos com vencimento no mês
# informado (padrão: mês atual), com a data já formatada em pt-BR.
#
# Uso:
#   python backend/smoke_api.py            (BELAFARMA_API_URL ou localhost:3001)
#   python backend/smoke_api.py 2026-06
# -----------------------------------------------------------------------------

import logging
import sys
from datetime import date
from typing import Any, Dict, List, Optional

import requests

from config import load_app_settings, setup_logging
from utils import format_date_in_brazil, get_day_from_date

logger = logging.getLogger(__name__)

ENDPOINTS = ("/api/boletos", "/api/all-data")


class SmokeError(RuntimeError):
    pass


def fetch_json(base_url: str, path: str, session: Optional[requests.Session] = None, timeout: float = 10) -> Any:
    http = session or requests
    try:
        r = http.get(f"{base_url}{path}", timeout=timeout)
    except requests.RequestException as e:
        raise SmokeError(f"GET {path} falhou: {e}") from e
    if r.status_code != 200:
        raise SmokeError(f"GET {path} -> {r.status_code}: {r.text[:200]}")
    try:
        return r.json()
    except ValueError as e:
        raise SmokeError(f"GET {path} não retornou JSON: {r.text[:200]}") from e


def extract_boletos(payload: Any) -> List[Dict[str, Any]]:
    """
    /api/boletos devolve a lista direto; /api/all-data devolve
    {"boletos": {"documents": [...]}} (ou {"boletos": [...]} nas versões antigas).
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        boletos = payload.get("boletos")
        if isinstance(boletos, dict):
            boletos = boletos.get("documents")
        if isinstance(boletos, list):
            return boletos
    raise SmokeError("Resposta sem lista de boletos")


def boletos_due_in_month(boletos: List[Dict[str, Any]], month: str) -> List[Dict[str, Any]]:
    """month no formato YYYY-MM"""
    return [b for b in boletos if (b.get("due_date") or "").startswith(month)]


def summarize_boletos(boletos: List[Dict[str, Any]], month: Optional[str] = None) -> Dict[str, Any]:
    selected = boletos_due_in_month(boletos, month) if month else boletos
    rows = [
        {
            "id": b.get("id"),
            "supplier": b.get("supplierName"),
            "value": b.get("value"),
            "status": b.get("status"),
            "due_date": format_date_in_brazil(b.get("due_date")),
            "due_day": get_day_from_date(b.get("due_date")),
        }
        for b in selected
    ]
    return {"total": len(boletos), "in_month": len(selected), "rows": rows}


def check_endpoint(base_url: str, path: str, month: str, session: Optional[requests.Session] = None) -> Dict[str, Any]:
    boletos = extract_boletos(fetch_json(base_url, path, session=session))
    summary = summarize_boletos(boletos, month)
    logger.info("%s: %d boletos, %d em %s", path, summary["total"], summary["in_month"], month)
    return summary


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    settings = load_app_settings()
    setup_logging(settings.log_level)
    month = argv[0] if argv else date.today().strftime("%Y-%m")

    for path in ENDPOINTS:
        print(f"Testando {settings.api_base_url}{path} ...")
        try:
            summary = check_endpoint(settings.api_base_url, path, month)
        except SmokeError as e:
            print(f"ERRO: {e}")
            return 1

        print(f"  Total de boletos: {summary['total']}")
        print(f"  Vencendo em {month}: {summary['in_month']}")
        for i, row in enumerate(summary["rows"], start=1):
            print(f"  {i}. {row['supplier']} - R$ {row['value']} - {row['due_date']} - {row['status']}")

    print("\nSMOKE OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())
