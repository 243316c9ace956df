from datetime import date

from engine.models import RecordKind
from engine.validation import validate_payload

HOJE = date(2025, 6, 10)


def test_tarefa_valida():
    payload = {"title": "Nova", "priority": "Medium", "due_date": "2025-06-10"}
    assert validate_payload(payload, RecordKind.TASK, HOJE) == {}


def test_tarefa_sem_descricao_e_sem_data_e_valida():
    assert validate_payload({"title": "x"}, RecordKind.TASK, HOJE) == {}


def test_ticket_exige_titulo_e_descricao():
    erros = validate_payload({"title": "  ", "description": ""}, RecordKind.TICKET, HOJE)
    assert erros == {"title": "Title is required", "description": "Description is required"}


def test_data_no_passado_ou_invalida():
    assert validate_payload({"title": "x", "due_date": "2025-06-09"}, RecordKind.TASK, HOJE) == {
        "due_date": "Due date cannot be in the past"}
    assert "due_date" in validate_payload({"title": "x", "due_date": "banana"}, RecordKind.TASK, HOJE)


def test_prioridade_invalida():
    assert "priority" in validate_payload({"title": "x", "priority": "Urgent"}, RecordKind.TASK, HOJE)
