"""
Mapeamento fixo de rótulo de urgência / prioridade para texto, cor e ícone.

O engine devolve apenas ``UrgencyLabel``; a apresentação decide como mostrar.
"""
from dataclasses import dataclass
from typing import Optional

from engine.models import ABSENT, NormalizedDate, Priority, UrgencyLabel


@dataclass(frozen=True)
class Badge:
    text: str
    color: str
    icon: str


URGENCY_BADGES = {
    UrgencyLabel.NO_DUE_DATE: Badge("No due date", "gray", "📋"),
    UrgencyLabel.OVERDUE: Badge("Overdue", "red", "🔴"),
    UrgencyLabel.DUE_TODAY: Badge("Due today", "amber", "🟡"),
    UrgencyLabel.DUE_SOON: Badge("Due soon", "amber", "🟠"),
    UrgencyLabel.UPCOMING: Badge("Upcoming", "blue", "📅"),
}

PRIORITY_COLORS = {
    Priority.HIGH: "red",
    Priority.MEDIUM: "amber",
    Priority.LOW: "teal",
}
UNKNOWN_PRIORITY_COLOR = "gray"


def urgency_badge(label: UrgencyLabel) -> Badge:
    return URGENCY_BADGES[label]


def priority_color(priority: Optional[Priority]) -> str:
    return PRIORITY_COLORS.get(priority, UNKNOWN_PRIORITY_COLOR)


def priority_text(priority: Optional[Priority]) -> str:
    return priority.value if priority else "Unknown"


def format_due_date(due: NormalizedDate) -> str:
    """'Jun 10, 2025' ou 'No due date'."""
    if due is ABSENT or due is None:
        return "No due date"
    return f"{due.strftime('%b')} {due.day}, {due.year}"
