# backend/app.py
# -----------------------------------------------------------------------------
# API Flask
#
# Rotas:
# - /api/dates/format?value=&strict=     → data formatada (DD/MM/YYYY) + dia
# - /api/dates/normalize (POST)          → mesma coisa para uma lista de datas
# - /api/backups/latest?file=            → relatório de integridade do backup
# - /api/backend/status                  → backend externo configurado?
#
# Observações:
# - Settings carregadas uma vez em app.config; testes podem sobrescrever
#   BACKUPS_DIR / BACKEND_SETTINGS direto em app.config.
# - Em produção, rodar com waitress/uwsgi/gunicorn e SECRET_KEY via ambiente.
# -----------------------------------------------------------------------------

import os

from flask import Flask, request, jsonify
from flask_cors import CORS
from flask_compress import Compress
from werkzeug.utils import secure_filename

from backup_checker import check_backup, find_latest_backup
from config import load_app_settings, load_backend_settings, setup_logging
from utils import DateParseError, format_date_in_brazil, get_day_from_date

settings = load_app_settings()
setup_logging(settings.log_level)

app = Flask(__name__)
CORS(app, supports_credentials=True)
Compress(app)
app.secret_key = settings.secret_key
app.config["BACKUPS_DIR"] = settings.backups_dir
app.config["BACKEND_SETTINGS"] = load_backend_settings()


def _normalize(value, strict=False):
    return {
        "value": value,
        "display": format_date_in_brazil(value, strict=strict),
        "day": get_day_from_date(value, strict=strict),
    }


def _is_truthy(flag):
    return str(flag or "").lower() in ("1", "true", "yes", "sim")


# ---------------- DATAS ----------------

@app.route("/api/dates/format", methods=["GET"])
def format_date():
    value = request.args.get("value", "")
    strict = _is_truthy(request.args.get("strict"))
    try:
        return jsonify(_normalize(value, strict=strict)), 200
    except DateParseError as e:
        return jsonify({"error": str(e)}), 400


@app.route("/api/dates/normalize", methods=["POST"])
def normalize_dates():
    """
    Body: {"dates": ["2026-06-01", "2024-05-20T03:00:00.000Z", ""], "strict": false}
    Retorna {"items": [{"value", "display", "day"}, ...]} na mesma ordem.
    """
    data = request.get_json(force=True, silent=True) or {}
    dates = data.get("dates")
    if not isinstance(dates, list):
        return jsonify({"error": "Envie {'dates': [...]} com uma lista de datas"}), 400

    strict = _is_truthy(data.get("strict"))
    try:
        items = [_normalize(v, strict=strict) for v in dates]
    except DateParseError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify({"items": items}), 200


# ---------------- BACKUPS ----------------

@app.route("/api/backups/latest", methods=["GET"])
def latest_backup():
    """
    Sem ?file= usa o backup mais recente do diretório configurado.
    """
    backup_dir = app.config["BACKUPS_DIR"]
    requested = request.args.get("file", "")

    try:
        backup_file = secure_filename(requested) if requested else find_latest_backup(backup_dir)
    except FileNotFoundError:
        return jsonify({"error": f"Diretório de backups não encontrado: {backup_dir}"}), 404
    if not backup_file:
        return jsonify({"error": "Nenhum backup encontrado"}), 404

    try:
        report = check_backup(os.path.join(backup_dir, backup_file))
    except FileNotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception as e:
        app.logger.exception("Falha ao verificar backup %s", backup_file)
        return jsonify({"error": f"{type(e).__name__}: {e}"}), 500

    report["file"] = backup_file
    return jsonify(report), 200 if report["ok"] else 500


# ---------------- BACKEND EXTERNO ----------------

@app.route("/api/backend/status", methods=["GET"])
def backend_status():
    backend = app.config["BACKEND_SETTINGS"]
    return jsonify({"configured": backend.is_configured(), "url": backend.url}), 200


if __name__ == "__main__":
    # Em produção, prefira waitress/uwsgi/gunicorn (ex.: waitress-serve app:app)
    app.run(host="0.0.0.0", port=8000, debug=False)
