from datetime import date

from engine.classification import classify, current_date, summarize
from engine.models import ABSENT, Record, UrgencyLabel
from engine.views import ViewRow

HOJE = date(2025, 6, 10)


def test_rotulos_basicos():
    assert classify(ABSENT, HOJE) is UrgencyLabel.NO_DUE_DATE
    assert classify(date(2025, 6, 5), HOJE) is UrgencyLabel.OVERDUE
    assert classify(date(2025, 6, 9), HOJE) is UrgencyLabel.OVERDUE
    assert classify(date(2025, 6, 10), HOJE) is UrgencyLabel.DUE_TODAY
    assert classify(date(2025, 6, 11), HOJE) is UrgencyLabel.DUE_SOON
    assert classify(date(2025, 6, 13), HOJE) is UrgencyLabel.DUE_SOON
    assert classify(date(2025, 6, 14), HOJE) is UrgencyLabel.UPCOMING


def test_janela_configuravel():
    assert classify(date(2025, 6, 14), HOJE, soon_days=7) is UrgencyLabel.DUE_SOON
    assert classify(date(2025, 6, 11), HOJE, soon_days=0) is UrgencyLabel.UPCOMING


def test_virada_de_mes_e_ano():
    assert classify(date(2026, 1, 2), date(2025, 12, 31)) is UrgencyLabel.DUE_SOON
    assert classify(date(2025, 2, 28), date(2025, 3, 1)) is UrgencyLabel.OVERDUE


def test_summarize_a_partir_de_linhas():
    rows = [
        ViewRow(Record(id="1"), UrgencyLabel.NO_DUE_DATE),
        ViewRow(Record(id="2"), UrgencyLabel.DUE_SOON),
        ViewRow(Record(id="3"), UrgencyLabel.DUE_SOON),
    ]
    assert summarize(rows)["due_soon"] == 2
    assert summarize([]) == {label.name.lower(): 0 for label in UrgencyLabel}


def test_current_date():
    assert isinstance(current_date("UTC"), date)
    assert isinstance(current_date("America/Sao_Paulo"), date)
    # fuso inválido cai na data local
    assert current_date("Nao/Existe") == date.today()
    assert current_date(None) == date.today()
