# backend/utils.py
# -----------------------------------------------------------------------------
# Normalização de datas sem deslocamento de fuso.
#
# Formatos aceitos:
# - ""                      → sem data (retorna "" / 0)
# - "YYYY-MM-DD"            → data civil, campos lidos literalmente
# - qualquer texto com "T"  → instante; o dia é lido no calendário UTC
#
# Observações:
# - Nunca usar o fuso local do processo: em America/Sao_Paulo um
#   "2024-05-20" lido como meia-noite local vira 19/05 em UTC (e vice-versa).
# - strict=True levanta DateParseError para entrada malformada; no modo
#   padrão a entrada malformada vira "" / 0 com um warning no log.
# -----------------------------------------------------------------------------

import logging
from datetime import date
from typing import Optional

import pandas as pd

logger = logging.getLogger(__name__)

DATE_TIME_SEPARATOR = "T"


class DateParseError(ValueError):
    """Texto de data que não é nem YYYY-MM-DD nem um timestamp válido."""


def _from_timestamp(value: str) -> date:
    try:
        ts = pd.to_datetime(value, utc=True, format="ISO8601")
    except (ValueError, TypeError, OverflowError) as e:
        raise DateParseError(f"Timestamp inválido: {value!r}") from e
    if pd.isna(ts):
        raise DateParseError(f"Timestamp inválido: {value!r}")
    return date(ts.year, ts.month, ts.day)


def _from_date_only(value: str) -> date:
    parts = value.split("-")
    if len(parts) != 3:
        raise DateParseError(f"Data fora do formato YYYY-MM-DD: {value!r}")
    try:
        year, month, day = (int(p, 10) for p in parts)
        return date(year, month, day)
    except ValueError as e:
        raise DateParseError(f"Data inválida: {value!r}") from e


def parse_calendar_date(value: str) -> date:
    """
    Converte o texto na data civil que um humano leria nos dígitos.
    Levanta DateParseError para entrada vazia ou malformada.
    """
    if not value:
        raise DateParseError("Data vazia")
    if not isinstance(value, str):
        raise DateParseError(f"Esperado texto, recebido {type(value).__name__}")
    if DATE_TIME_SEPARATOR in value:
        return _from_timestamp(value)
    return _from_date_only(value)


def parse_date_safe(value) -> Optional[date]:
    try:
        return parse_calendar_date(value)
    except DateParseError:
        return None


def format_date_in_brazil(value: Optional[str], strict: bool = False) -> str:
    """
    Formata a data como DD/MM/YYYY (pt-BR).

    Exemplos:
      "2026-06-01"               → "01/06/2026"
      "2024-05-20T00:00:00Z"     → "20/05/2024"
      ""                         → ""
    """
    if not value:
        return ""
    try:
        d = parse_calendar_date(value)
    except DateParseError:
        if strict:
            raise
        logger.warning("Data ignorada na formatação: %r", value)
        return ""
    # f-string e não strftime: %Y não completa com zeros anos < 1000
    return f"{d.day:02d}/{d.month:02d}/{d.year:04d}"


def get_day_from_date(value: Optional[str], strict: bool = False) -> int:
    """
    Dia do mês (1-31) da data; 0 apenas quando não há data.
    """
    if not value:
        return 0
    try:
        return parse_calendar_date(value).day
    except DateParseError:
        if strict:
            raise
        logger.warning("Data ignorada na extração do dia: %r", value)
        return 0
