import datetime as dt
import random

from historiales.services.aggregation import (
    ACTIVITY_WINDOW_DAYS,
    activity_status,
    consultation_period_stats,
    listing_stats,
    merge_patient_listing,
    summarize_consultations,
)

TODAY = dt.date(2024, 6, 1)


def row(pid, fecha, hora='09:00:00', cid=None, motivo=None, diagnostico=None):
    return {
        'id': cid,
        'paciente_id': pid,
        'fecha': fecha,
        'hora': hora,
        'motivo_consulta': motivo,
        'diagnostico': diagnostico,
    }


def test_one_summary_per_patient_with_counts():
    rows = [
        row(1, '2024-03-01', cid=3),
        row(2, '2024-02-20', cid=5),
        row(1, '2024-01-10', cid=1),
        row(2, '2024-02-01', cid=4),
        row(2, '2024-01-15', cid=2),
    ]
    summaries = summarize_consultations(rows)
    assert [s['paciente_id'] for s in summaries] == [1, 2]
    assert {s['paciente_id']: s['total_consultas'] for s in summaries} == {1: 2, 2: 3}


def test_p1_scenario_presorted():
    rows = [
        row(1, '2024-03-01', motivo='Control', diagnostico='Sano'),
        row(1, '2024-01-10', motivo='Fiebre', diagnostico='Gripe'),
    ]
    (summary,) = summarize_consultations(rows)
    assert summary['total_consultas'] == 2
    assert summary['ultima_consulta'] == dt.date(2024, 3, 1)
    assert summary['ultimo_motivo'] == 'Control'
    assert summary['ultimo_diagnostico'] == 'Sano'


def test_fold_does_not_depend_on_input_order():
    rows = [
        row(1, '2024-01-10', cid=1),
        row(1, '2024-03-01', '08:00:00', cid=2),
        row(1, '2024-03-01', '17:30:00', cid=3),
        row(2, '2023-12-24', cid=4),
        row(1, '2024-02-11', cid=5),
    ]
    expected = {s['paciente_id']: s for s in summarize_consultations(rows)}
    rng = random.Random(7)
    for _ in range(10):
        shuffled = rows[:]
        rng.shuffle(shuffled)
        got = {s['paciente_id']: s for s in summarize_consultations(shuffled)}
        assert got == expected
    assert expected[1]['id_ultima_consulta'] == 3
    assert expected[1]['ultima_hora'] == '17:30:00'


def test_tie_keeps_first_seen_row():
    rows = [row(1, '2024-03-01', cid=10), row(1, '2024-03-01', cid=11)]
    (summary,) = summarize_consultations(rows)
    assert summary['id_ultima_consulta'] == 10


def test_accepts_date_objects():
    rows = [row(1, dt.date(2024, 1, 10), dt.time(10, 0)), row(1, dt.date(2024, 3, 1), dt.time(9, 0))]
    (summary,) = summarize_consultations(rows)
    assert summary['ultima_consulta'] == dt.date(2024, 3, 1)


def test_malformed_date_counts_but_never_becomes_latest(caplog):
    rows = [row(1, 'not-a-date', cid=1), row(1, '2024-01-10', cid=2), row(2, '2024-99-99', cid=3)]
    by_patient = {s['paciente_id']: s for s in summarize_consultations(rows)}
    assert by_patient[1]['total_consultas'] == 2
    assert by_patient[1]['id_ultima_consulta'] == 2
    assert by_patient[2]['total_consultas'] == 1
    assert by_patient[2]['ultima_consulta'] is None
    assert 'malformed' in caplog.text


def test_extra_patient_fields_are_carried():
    rows = [dict(row(1, '2024-01-10'), paciente_nombre='Ana', paciente_dni='12345678')]
    (summary,) = summarize_consultations(rows)
    assert summary['paciente_nombre'] == 'Ana'
    assert summary['paciente_dni'] == '12345678'


def test_empty_input():
    assert summarize_consultations([]) == []


def test_activity_window_boundary():
    assert ACTIVITY_WINDOW_DAYS == 90
    assert activity_status(TODAY - dt.timedelta(days=90), TODAY) == 'Activo'
    assert activity_status(TODAY - dt.timedelta(days=91), TODAY) == 'Inactivo'
    assert activity_status(TODAY, TODAY) == 'Activo'


def test_no_consultation_is_inactive():
    assert activity_status(None, TODAY) == 'Inactivo'
    assert activity_status('garbage', TODAY) == 'Inactivo'


def test_merge_listing_includes_patients_without_consultations():
    patients = [
        {'id': 1, 'nombre': 'Ana', 'dni': '11111111', 'edad': 30, 'estado': 'Activo'},
        {'id': 2, 'nombre': 'Luis', 'dni': '22222222', 'edad': 41, 'estado': 'Activo'},
        {'id': 3, 'nombre': 'Rosa', 'dni': '33333333', 'edad': 52, 'estado': 'Activo'},
    ]
    consultations = [
        {'id': 1, 'paciente_id': 1, 'fecha': '2024-05-20'},
        {'id': 2, 'paciente_id': 1, 'fecha': '2024-01-02'},
        {'id': 3, 'paciente_id': 2, 'fecha': '2023-11-01'},
    ]
    listing = merge_patient_listing(patients, consultations, TODAY)
    by_id = {p['id']: p for p in listing}
    assert [p['id'] for p in listing] == [1, 2, 3]
    assert by_id[1]['total_consultas'] == 2
    assert by_id[1]['ultima_consulta'] == dt.date(2024, 5, 20)
    assert by_id[1]['estado_calculado'] == 'Activo'
    assert by_id[2]['estado_calculado'] == 'Inactivo'
    assert by_id[3]['total_consultas'] == 0
    assert by_id[3]['ultima_consulta'] is None
    assert by_id[3]['estado_calculado'] == 'Inactivo'

    stats = listing_stats(listing, len(consultations))
    assert stats == {'totalPacientes': 3, 'activos': 1, 'totalConsultas': 3, 'promedioPorPaciente': 1}


def test_listing_stats_empty_and_rounding():
    assert listing_stats([]) == {'totalPacientes': 0, 'activos': 0, 'totalConsultas': 0, 'promedioPorPaciente': 0}
    listing = [{'total_consultas': 2, 'estado_calculado': 'Activo'},
               {'total_consultas': 1, 'estado_calculado': 'Inactivo'}]
    # 3 / 2 rounds half up
    assert listing_stats(listing)['promedioPorPaciente'] == 2


def test_consultation_period_stats():
    rows = [
        {'fecha': TODAY},
        {'fecha': TODAY - dt.timedelta(days=3)},
        {'fecha': TODAY - dt.timedelta(days=7)},
        {'fecha': TODAY - dt.timedelta(days=20)},
        {'fecha': TODAY - dt.timedelta(days=45)},
        {'fecha': 'bad'},
    ]
    assert consultation_period_stats(rows, TODAY) == {'hoy': 1, 'semana': 3, 'mes': 4}
