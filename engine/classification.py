from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, Optional
import logging

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from engine.models import ABSENT, NormalizedDate, UrgencyLabel

logger = logging.getLogger(__name__)

DEFAULT_SOON_DAYS = 3


def current_date(tz_name: Optional[str] = None) -> date:
    """
    Data de hoje no fuso configurado (ou local, se None).
    Só a camada de view/CLI chama isto; o engine recebe ``today`` pronto.
    """
    if tz_name:
        try:
            return datetime.now(ZoneInfo(tz_name)).date()
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Timezone desconhecido %r, usando data local", tz_name)
    return date.today()


def classify(due_date: NormalizedDate, today: date, soon_days: int = DEFAULT_SOON_DAYS) -> UrgencyLabel:
    """
    Rótulo de urgência para um vencimento já normalizado:
      ABSENT                          -> NO_DUE_DATE
      due < hoje                      -> OVERDUE
      due == hoje                     -> DUE_TODAY
      hoje < due <= hoje + soon_days  -> DUE_SOON
      due > hoje + soon_days          -> UPCOMING
    """
    if due_date is ABSENT or due_date is None:
        return UrgencyLabel.NO_DUE_DATE
    if due_date < today:
        return UrgencyLabel.OVERDUE
    if due_date == today:
        return UrgencyLabel.DUE_TODAY
    if due_date <= today + timedelta(days=soon_days):
        return UrgencyLabel.DUE_SOON
    return UrgencyLabel.UPCOMING


def summarize(rows: Iterable[Any]) -> Dict[str, int]:
    """Contagem por rótulo a partir de ViewRows (ou qualquer objeto com ``.label``)."""
    counts = {label.name.lower(): 0 for label in UrgencyLabel}
    for row in rows:
        counts[row.label.name.lower()] += 1
    return counts
