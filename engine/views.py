"""
Pipeline de uma tela de lista/card: filtrar -> ordenar -> rotular.

Dois modos de ordenação:
  - ``sort=None``: ordenação dos cards (vence hoje primeiro, prioridade, estável)
  - ``SortOrder(field, direction)``: ordenação por coluna da página de lista
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, List, Optional
import logging

from engine.classification import DEFAULT_SOON_DAYS, classify
from engine.filters import RecordFilter, apply_filters
from engine.models import ABSENT, Priority, Record, UrgencyLabel
from engine.ordering import sort_records

logger = logging.getLogger(__name__)

ASC = "asc"
DESC = "desc"

# Peso usado pela ordenação por coluna (maior = mais urgente)
PRIORITY_WEIGHT = {Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1}


@dataclass(frozen=True)
class SortOrder:
    field: str = "due_date"
    direction: str = ASC

    def __post_init__(self):
        if self.direction not in (ASC, DESC):
            raise ValueError(f"direction deve ser '{ASC}' ou '{DESC}', recebido {self.direction!r}")

    def toggled(self, field: str) -> "SortOrder":
        """Mesmo campo inverte a direção; campo novo começa em asc."""
        if field == self.field:
            return SortOrder(field, DESC if self.direction == ASC else ASC)
        return SortOrder(field, ASC)


@dataclass(frozen=True)
class ViewRow:
    record: Record
    label: UrgencyLabel

    @property
    def id(self) -> str:
        return self.record.id


def _field_key(field: str):
    if field == "due_date":
        return lambda r: r.due_date if r.due_date is not ABSENT else date.max
    if field == "priority":
        return lambda r: PRIORITY_WEIGHT.get(r.priority, 0)
    if field == "created_at":
        return lambda r: r.created_at or datetime.min

    def text_key(r: Record) -> str:
        value: Any = getattr(r, field, None)
        if value is None:
            value = r.raw.get(field)
        if value is None:
            return ""
        if hasattr(value, "value"):  # enums
            value = value.value
        return str(value).lower()

    return text_key


def sort_by_field(records: Iterable[Record], order: SortOrder) -> List[Record]:
    # reverse=True mantém a estabilidade dos empates
    return sorted(records, key=_field_key(order.field), reverse=order.direction == DESC)


def build_view(
    records: Iterable[Record],
    today: date,
    flt: Optional[RecordFilter] = None,
    sort: Optional[SortOrder] = None,
    soon_days: int = DEFAULT_SOON_DAYS,
) -> List[ViewRow]:
    """
    Monta as linhas de uma tela. ``today`` é calculado uma única vez pelo
    chamador e usado em filtro, ordenação e rotulagem.
    """
    items = list(records)
    filtered = apply_filters(items, flt, today)
    if sort is None:
        ordered = sort_records(filtered, today)
    else:
        ordered = sort_by_field(filtered, sort)
    rows = [ViewRow(r, classify(r.due_date, today, soon_days)) for r in ordered]
    logger.debug("view: %d registros -> %d após filtro (sort=%s)", len(items), len(rows), sort)
    return rows
