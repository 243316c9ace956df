"""
Ordenação de tarefas/tickets para exibição nos cards.

Precedência (cada passo desempata o anterior):
  1. com vencimento antes de sem vencimento
  2. vence hoje antes de qualquer outra data (inclusive vencidas)
  3. prioridade High < Medium < Low < desconhecida
  4. ordem original (sort estável)

``today`` é sempre recebido como parâmetro e calculado uma vez por ordenação.
"""
from __future__ import annotations
from datetime import date
from typing import Iterable, List, Tuple, TypeVar

from engine.models import ABSENT, UNKNOWN_PRIORITY_RANK, Sortable

T = TypeVar("T", bound=Sortable)

SortKey = Tuple[int, int, int]


def priority_rank(item: Sortable) -> int:
    p = getattr(item, "priority", None)
    if p is None:
        return UNKNOWN_PRIORITY_RANK
    try:
        return p.rank
    except AttributeError:
        return UNKNOWN_PRIORITY_RANK


def sort_key(item: Sortable, today: date) -> SortKey:
    due = getattr(item, "due_date", ABSENT)
    if due is ABSENT or due is None:
        return (1, 1, priority_rank(item))
    return (0, 0 if due == today else 1, priority_rank(item))


def compare(a: Sortable, b: Sortable, today: date) -> int:
    """-1 se ``a`` vem antes de ``b``, 1 se depois, 0 se empatam (ordem original decide)."""
    ka, kb = sort_key(a, today), sort_key(b, today)
    if ka < kb:
        return -1
    if ka > kb:
        return 1
    return 0


def sort_records(records: Iterable[T], today: date) -> List[T]:
    """Retorna nova lista ordenada; a entrada não é alterada."""
    items = list(records)
    # sorted() é estável: empates mantêm a ordem de chegada
    return sorted(items, key=lambda r: sort_key(r, today))
