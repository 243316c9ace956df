"""
Normalização de datas de vencimento.

Converte o valor bruto vindo da API (string ISO, string livre, date, datetime
ou lixo) em uma data de calendário ou no sentinela ``ABSENT``. Nunca levanta
exceção: data malformada é tratada exatamente como data ausente.
"""
from __future__ import annotations
import logging
import re
from datetime import date, datetime, timezone
from typing import Any, Optional

from dateutil import parser as date_parser

from engine.models import ABSENT, NormalizedDate

logger = logging.getLogger(__name__)

# Placeholders gravados pelas páginas de lista no lugar da data
NO_DUE_DATE_PLACEHOLDERS = {"no due date", "none", "null", "undefined"}

_ISO_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})"
    r"(?:[T ](\d{2}):(\d{2})(?::(\d{2})(?:\.\d+)?)?)?"
    r"(?:Z|[+-](\d{2}):?(\d{2}))?$"
)


def _hora_valida(hh, mm, ss, off_h, off_m) -> bool:
    # Grupos ausentes vêm como None
    limites = ((hh, 24), (mm, 60), (ss, 60), (off_h, 24), (off_m, 60))
    return all(v is None or int(v) < lim for v, lim in limites)


# Default fixo: strings parciais ("June 2025") não dependem do relógio
_PARSER_DEFAULT = datetime(2000, 1, 1)


def _from_iso(text: str) -> Optional[NormalizedDate]:
    """Dia escrito na string ISO; ABSENT para data ou hora impossível; None se não for ISO."""
    m = _ISO_RE.match(text)
    if not m:
        return None
    if not _hora_valida(*m.groups()[3:]):
        logger.debug("Hora/fuso inválido em data ISO: %r", text)
        return ABSENT
    y, mo, d = (int(g) for g in m.groups()[:3])
    try:
        return date(y, mo, d)
    except ValueError:
        logger.debug("Data ISO inexistente: %r", text)
        return ABSENT


def normalize(raw: Any) -> NormalizedDate:
    """
    Normaliza um vencimento para ``date`` (sem hora) ou ``ABSENT``.

    - None / vazio / "No Due Date" -> ABSENT
    - datetime -> .date() (hora e fuso descartados)
    - "YYYY-MM-DD[THH:MM[:SS[.fff]]][Z|±HH:MM]" -> o dia escrito na string
    - outros formatos aceitos pelo dateutil -> o dia correspondente
    - qualquer outra coisa -> ABSENT
    """
    if raw is None or raw is ABSENT:
        return ABSENT
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        logger.debug("Tipo de vencimento não suportado: %s", type(raw).__name__)
        return ABSENT

    text = raw.strip()
    if not text or text.lower() in NO_DUE_DATE_PLACEHOLDERS:
        return ABSENT

    iso = _from_iso(text)
    if iso is not None:
        return iso

    try:
        return date_parser.parse(text, default=_PARSER_DEFAULT).date()
    except (ValueError, OverflowError, TypeError):
        logger.debug("Formato de data não reconhecido: %r", text)
        return ABSENT


def normalize_timestamp(raw: Any) -> Optional[datetime]:
    """
    Parse de timestamps (created_at). Retorna datetime naive em UTC ou None.
    Naive para que listas mistas (com e sem fuso) continuem comparáveis.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        dt = raw
    elif isinstance(raw, date):
        dt = datetime(raw.year, raw.month, raw.day)
    elif isinstance(raw, str) and raw.strip():
        try:
            dt = date_parser.parse(raw.strip(), default=_PARSER_DEFAULT)
        except (ValueError, OverflowError, TypeError):
            logger.debug("Timestamp não reconhecido: %r", raw)
            return None
    else:
        return None

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt
