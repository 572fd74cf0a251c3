import sqlite3

import pytest


@pytest.fixture
def make_backup(tmp_path):
    """Cria um SQLite de backup em tmp_path com users (e orders, opcional)."""

    def _make(name="belafarma_2026-01-10T08-00-00.db", users=None, orders=3, with_users=True):
        path = tmp_path / name
        conn = sqlite3.connect(path)
        try:
            if with_users:
                conn.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, role TEXT, password TEXT)")
                for u in users if users is not None else [(1, "Ana", "admin"), (2, "Bruno", "caixa")]:
                    conn.execute("INSERT INTO users (id, name, role, password) VALUES (?, ?, ?, 'x')", u)
            if orders is not None:
                conn.execute("CREATE TABLE orders (id INTEGER PRIMARY KEY, orderDate TEXT)")
                for i in range(orders):
                    conn.execute("INSERT INTO orders (orderDate) VALUES (?)", (f"2026-01-{i + 1:02d}",))
            conn.commit()
        finally:
            conn.close()
        return path

    return _make
