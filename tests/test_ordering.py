from datetime import date
from itertools import permutations
from types import SimpleNamespace

from engine.models import ABSENT, Priority, Record
from engine.ordering import compare, sort_key, sort_records

HOJE = date(2025, 6, 10)


def _r(rid, due=ABSENT, priority=None):
    return Record(id=rid, title=f"Tarefa {rid}", priority=priority, due_date=due)


def _ids(records):
    return [r.id for r in records]


def test_vence_hoje_antes_de_vencida():
    hoje = _r("hoje", date(2025, 6, 10), Priority.LOW)
    vencida = _r("vencida", date(2025, 6, 1), Priority.HIGH)
    assert _ids(sort_records([vencida, hoje], HOJE)) == ["hoje", "vencida"]
    assert compare(hoje, vencida, HOJE) == -1
    assert compare(vencida, hoje, HOJE) == 1


def test_prioridade_com_empate_estavel():
    h1 = _r("h1", date(2025, 6, 15), Priority.HIGH)
    m = _r("m", date(2025, 6, 15), Priority.MEDIUM)
    h2 = _r("h2", date(2025, 6, 15), Priority.HIGH)
    assert _ids(sort_records([h1, m, h2], HOJE)) == ["h1", "h2", "m"]
    assert _ids(sort_records([h2, m, h1], HOJE)) == ["h2", "h1", "m"]


def test_prioridade_desconhecida_por_ultimo():
    sem = _r("sem", date(2025, 6, 20), None)
    low = _r("low", date(2025, 6, 20), Priority.LOW)
    med = _r("med", date(2025, 6, 20), Priority.MEDIUM)
    high = _r("high", date(2025, 6, 20), Priority.HIGH)
    assert _ids(sort_records([sem, low, med, high], HOJE)) == ["high", "med", "low", "sem"]


def test_sem_vencimento_depois_de_qualquer_data():
    sem_data_high = _r("a", ABSENT, Priority.HIGH)
    com_data_low = _r("b", date(2030, 1, 1), Priority.LOW)
    com_data_sem_prio = _r("c", date(2020, 1, 1), None)
    assert _ids(sort_records([sem_data_high, com_data_low, com_data_sem_prio], HOJE)) == ["b", "c", "a"]


def test_datas_diferentes_fora_de_hoje_nao_reordenam_por_data():
    # Fora do bucket "hoje" só a prioridade desempata; datas não contam
    futura = _r("futura", date(2025, 7, 1), Priority.HIGH)
    vencida = _r("vencida", date(2025, 5, 1), Priority.HIGH)
    assert _ids(sort_records([futura, vencida], HOJE)) == ["futura", "vencida"]
    assert compare(futura, vencida, HOJE) == 0


def test_dois_ausentes_prioridade_depois_ordem_original():
    a = _r("a", ABSENT, Priority.LOW)
    b = _r("b", ABSENT, Priority.HIGH)
    c = _r("c", ABSENT, Priority.LOW)
    assert _ids(sort_records([a, b, c], HOJE)) == ["b", "a", "c"]


def test_lista_vazia():
    assert sort_records([], HOJE) == []


def test_nao_altera_entrada_e_e_deterministico():
    entrada = [
        _r("1", ABSENT, Priority.HIGH),
        _r("2", date(2025, 6, 10), None),
        _r("3", date(2025, 6, 12), Priority.MEDIUM),
        _r("4", date(2025, 6, 1), Priority.HIGH),
        _r("5", date(2025, 6, 10), Priority.HIGH),
    ]
    copia = list(entrada)
    primeira = sort_records(entrada, HOJE)
    assert entrada == copia
    assert sort_records(entrada, HOJE) == primeira
    assert sort_records(primeira, HOJE) == primeira
    assert _ids(primeira) == ["5", "2", "4", "3", "1"]


def test_compare_transitivo_e_consistente_com_a_chave():
    amostra = [
        _r("a", ABSENT, None),
        _r("b", ABSENT, Priority.HIGH),
        _r("c", HOJE, Priority.LOW),
        _r("d", HOJE, None),
        _r("e", date(2025, 6, 9), Priority.HIGH),
        _r("f", date(2025, 6, 30), Priority.MEDIUM),
    ]
    for x, y, z in permutations(amostra, 3):
        if compare(x, y, HOJE) <= 0 and compare(y, z, HOJE) <= 0:
            assert compare(x, z, HOJE) <= 0
        assert compare(x, y, HOJE) == -compare(y, x, HOJE)
        assert (compare(x, y, HOJE) < 0) == (sort_key(x, HOJE) < sort_key(y, HOJE))


def test_aceita_qualquer_objeto_com_priority_e_due_date():
    ticket = SimpleNamespace(priority=Priority.MEDIUM, due_date=HOJE)
    task = SimpleNamespace(priority=Priority.HIGH, due_date=date(2025, 6, 11))
    assert sort_records([task, ticket], HOJE) == [ticket, task]
