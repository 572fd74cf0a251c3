# backend/backup_checker.py
# -----------------------------------------------------------------------------
# Verificação de integridade de backups do SQLite.
#
# Uso:
#   python backend/backup_checker.py                 → usa o backup mais recente
#   python backend/backup_checker.py belafarma_X.db  → usa o arquivo informado
#
# Observações:
# - O arquivo é aberto somente leitura (mode=ro): um caminho errado nunca
#   cria um banco vazio no lugar do backup.
# - Os nomes seguem belafarma_YYYY-MM-DD..., então a ordem alfabética é a
#   ordem cronológica.
# -----------------------------------------------------------------------------

import json
import logging
import os
import sqlite3
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from config import load_app_settings, setup_logging

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".db"


def find_latest_backup(backup_dir: str) -> Optional[str]:
    files = [f for f in os.listdir(backup_dir) if f.endswith(BACKUP_SUFFIX)]
    if not files:
        return None
    return sorted(files)[-1]


def _connect_readonly(path: str) -> sqlite3.Connection:
    uri = Path(path).resolve().as_uri() + "?mode=ro"
    return sqlite3.connect(uri, uri=True)


def check_backup(path: str) -> Dict[str, Any]:
    """
    Lê o backup e retorna um relatório:
      { path, ok, users, user_count, order_count, error }
    order_count fica None se a tabela orders não existir/não puder ser lida.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Backup não encontrado: {path}")

    report: Dict[str, Any] = {
        "path": path,
        "ok": False,
        "users": [],
        "user_count": 0,
        "order_count": None,
        "error": None,
    }

    conn = _connect_readonly(path)
    try:
        try:
            df = pd.read_sql_query("SELECT id, name, role FROM users", conn)
        except (sqlite3.Error, pd.errors.DatabaseError) as e:
            logger.error("Falha ao ler users em %s: %s", path, e)
            report["error"] = str(e)
            return report

        users: List[Dict[str, Any]] = json.loads(df.to_json(orient="records"))
        report["users"] = users
        report["user_count"] = len(users)

        try:
            (count,) = conn.execute("SELECT COUNT(*) FROM orders").fetchone()
            report["order_count"] = int(count)
        except sqlite3.Error as e:
            logger.warning("Tabela orders indisponível em %s: %s", path, e)

        report["ok"] = True
        return report
    finally:
        conn.close()


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    settings = load_app_settings()
    setup_logging(settings.log_level)
    backup_dir = settings.backups_dir

    backup_file = argv[0] if argv else None
    if not backup_file:
        try:
            backup_file = find_latest_backup(backup_dir)
        except OSError as e:
            print(f"Não foi possível listar backups: {e}")
            return 1
        if backup_file:
            print(f"Nenhum arquivo informado, usando o mais recente: {backup_file}")

    if not backup_file:
        print("Nenhum backup encontrado para verificar.")
        return 1

    backup_path = os.path.join(backup_dir, backup_file)
    print("--- Verificando integridade do backup ---")
    print(f"Alvo: {backup_path}")

    try:
        report = check_backup(backup_path)
    except (FileNotFoundError, sqlite3.Error) as e:
        print(f"\nCRÍTICO: erro ao ler backup: {e}")
        return 1

    if not report["ok"]:
        print(f"\nCRÍTICO: erro ao ler backup: {report['error']}")
        return 1

    print(f"\n[Tabela users] Total: {report['user_count']}")
    if report["users"]:
        print(pd.DataFrame(report["users"]).to_string(index=False))
    if report["order_count"] is None:
        print("\n[Tabela orders] indisponível ou vazia")
    else:
        print(f"\n[Tabela orders] Total de pedidos: {report['order_count']}")

    print("\nBackup lido com sucesso.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
