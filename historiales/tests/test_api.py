"""
Integration tests for the clinical history API.

These tests exercise patient registration, consultation logging, the
aggregated history listing and the document exports.  They use Django
REST Framework's APIClient within the APITestCase base class.

To run the tests:

```
pytest -q historiales/tests
```
"""
import datetime as dt
import io
from unittest import mock

from django.db import DatabaseError
from django.urls import reverse
from django.utils import timezone
from docx import Document
from rest_framework import status
from rest_framework.test import APITestCase

from historiales.models import Antecedent, Consultation, Patient, User
from historiales.services.consultations import consultations_for_patients


def registration_payload(**overrides):
    data = {
        'nombre': 'María Flores',
        'dni': '45678912',
        'fecha_nacimiento': '1990-05-17',
        'sexo': 'Femenino',
        'telefono': '987654321',
        'tipo_seguro': 'SIS',
        'persona_responsable': 'Juan Flores',
        'dni_responsable': '12345678',
        'ocupacion': 'Docente',
        'enfermedades_infancia': 'Varicela, Sarampión',
        'alergias': 'Penicilina',
        'menarca': '12 años',
        'ritmo_menstrual': '28/5',
        'uso_anticonceptivos': 'No',
        'numero_embarazos': 2,
    }
    data.update(overrides)
    return data


class ClinicalHistoryAPITests(APITestCase):
    def setUp(self) -> None:
        """Create a doctor account and log in with its token."""
        self.user = User.objects.create_user(username='medico1', password='S3gura!2024', role='medico')
        r = self.client.post(reverse('login_view'), {'username': 'medico1', 'password': 'S3gura!2024'}, format='json')
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.token = r.data['token']
        self.client.credentials(HTTP_AUTHORIZATION=f'Token {self.token}')

    def make_patient(self, nombre, dni, **kwargs):
        return Patient.objects.create(nombre=nombre, dni=dni, sexo=kwargs.pop('sexo', 'Masculino'), **kwargs)

    def make_consultation(self, patient, fecha, hora=dt.time(9, 0), **kwargs):
        return Consultation.objects.create(
            paciente=patient,
            fecha=fecha,
            hora=hora,
            motivo_consulta=kwargs.pop('motivo_consulta', 'Control'),
            diagnostico=kwargs.pop('diagnostico', 'Sano'),
            **kwargs,
        )

    # -- registration -------------------------------------------------------
    def test_register_female_persists_gyneco_fields(self):
        r = self.client.post(reverse('patient_register'), registration_payload(), format='json')
        self.assertEqual(r.status_code, status.HTTP_201_CREATED, r.data)
        patient = Patient.objects.get(id=r.data['id'])
        self.assertEqual(patient.dni, '45678912')
        self.assertEqual(patient.persona_responsable, 'Juan Flores')
        ante = Antecedent.objects.get(paciente=patient)
        self.assertEqual(ante.menarca, '12 años')
        self.assertEqual(ante.ritmo_menstrual, '28/5')
        self.assertEqual(ante.uso_anticonceptivos, 'No')
        self.assertEqual(ante.numero_embarazos, 2)
        self.assertEqual(ante.enfermedades_infancia, 'Varicela, Sarampión')

    def test_register_male_never_persists_gyneco_fields(self):
        r = self.client.post(reverse('patient_register'),
                             registration_payload(nombre='Pedro Ramos', sexo='Masculino'), format='json')
        self.assertEqual(r.status_code, status.HTTP_201_CREATED, r.data)
        ante = Antecedent.objects.get(paciente_id=r.data['id'])
        self.assertIsNone(ante.menarca)
        self.assertIsNone(ante.ritmo_menstrual)
        self.assertIsNone(ante.uso_anticonceptivos)
        self.assertIsNone(ante.numero_embarazos)
        self.assertEqual(ante.ocupacion, 'Docente')

    def test_register_computes_age_from_birth_date(self):
        born = dt.date(timezone.localdate().year - 30, 1, 1)
        r = self.client.post(reverse('patient_register'),
                             registration_payload(fecha_nacimiento=born.isoformat(), edad=99), format='json')
        self.assertEqual(r.status_code, status.HTTP_201_CREATED, r.data)
        self.assertEqual(Patient.objects.get(id=r.data['id']).edad, 30)

    def test_register_rejects_short_dni_before_touching_database(self):
        r = self.client.post(reverse('patient_register'), registration_payload(dni='1234567'), format='json')
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(r.data['ok'])
        self.assertIn('dni', r.data['error']['message'])
        self.assertEqual(Patient.objects.count(), 0)

    def test_register_requires_mandatory_fields(self):
        payload = registration_payload()
        del payload['fecha_nacimiento']
        r = self.client.post(reverse('patient_register'), payload, format='json')
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Patient.objects.count(), 0)

    def test_register_rolls_back_patient_when_antecedent_insert_fails(self):
        with mock.patch.object(Antecedent.objects, 'create', side_effect=DatabaseError('insert failed')):
            r = self.client.post(reverse('patient_register'), registration_payload(), format='json')
        self.assertEqual(r.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(r.data['error']['code'], 'backend_error')
        self.assertEqual(r.data['error']['message'], 'insert failed')
        self.assertEqual(Patient.objects.count(), 0)

    # -- patients & consultations -------------------------------------------
    def test_list_patients_returns_latest_ten_and_total(self):
        for i in range(12):
            self.make_patient(f'Paciente {i}', f'{i:08d}')
        r = self.client.get(reverse('list_patients'))
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(len(r.data['pacientes']), 10)
        self.assertEqual(r.data['total'], 12)
        self.assertEqual(r.data['pacientes'][0]['nombre'], 'Paciente 11')

    def test_new_consultation_stamps_date_and_time(self):
        p = self.make_patient('Rosa Díaz', '11112222')
        r = self.client.post(reverse('new_consultation', args=[p.id]), {
            'motivo_consulta': 'Tos persistente',
            'diagnostico': 'Bronquitis',
            'presion_arterial': '118/76',
            'pulso': 80,
            'temperatura': '37.2',
        }, format='json')
        self.assertEqual(r.status_code, status.HTTP_201_CREATED, r.data)
        c = Consultation.objects.get(id=r.data['id'])
        self.assertEqual(c.fecha, timezone.localdate())
        self.assertEqual(c.presion_arterial, '118/76')

    def test_new_consultation_requires_motive_and_diagnosis(self):
        p = self.make_patient('Rosa Díaz', '11112222')
        r = self.client.post(reverse('new_consultation', args=[p.id]), {'motivo_consulta': 'Tos'}, format='json')
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Consultation.objects.count(), 0)

    def test_new_consultation_rejects_bad_blood_pressure(self):
        p = self.make_patient('Rosa Díaz', '11112222')
        r = self.client.post(reverse('new_consultation', args=[p.id]), {
            'motivo_consulta': 'Tos', 'diagnostico': 'Bronquitis', 'presion_arterial': '120-80',
        }, format='json')
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)

    def test_new_consultation_unknown_patient(self):
        r = self.client.post(reverse('new_consultation', args=[9999]),
                             {'motivo_consulta': 'Tos', 'diagnostico': 'Bronquitis'}, format='json')
        self.assertEqual(r.status_code, status.HTTP_404_NOT_FOUND)

    def test_patient_detail_lists_consultations_newest_first(self):
        p = self.make_patient('Rosa Díaz', '11112222')
        self.make_consultation(p, dt.date(2024, 1, 10))
        self.make_consultation(p, dt.date(2024, 3, 1))
        r = self.client.get(reverse('patient_detail', args=[p.id]))
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data['paciente']['dni'], '11112222')
        self.assertEqual([c['fecha'] for c in r.data['consultas']], [dt.date(2024, 3, 1), dt.date(2024, 1, 10)])

    def test_consultation_overview_groups_per_patient(self):
        p1 = self.make_patient('Ana', '10000001')
        p2 = self.make_patient('Luis', '10000002')
        today = timezone.localdate()
        self.make_consultation(p1, today - dt.timedelta(days=40), motivo_consulta='Antiguo')
        self.make_consultation(p1, today, motivo_consulta='Reciente')
        self.make_consultation(p2, today - dt.timedelta(days=5))
        r = self.client.get(reverse('list_consultations'))
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        by_patient = {c['paciente_id']: c for c in r.data['consultas']}
        self.assertEqual(by_patient[p1.id]['total_consultas'], 2)
        self.assertEqual(by_patient[p1.id]['ultimo_motivo'], 'Reciente')
        self.assertEqual(by_patient[p1.id]['paciente_nombre'], 'Ana')
        self.assertEqual(r.data['stats'], {'hoy': 1, 'semana': 2, 'mes': 2})

    def test_empty_membership_filter_matches_nothing(self):
        p = self.make_patient('Ana', '10000001')
        self.make_consultation(p, dt.date(2024, 1, 10))
        self.assertEqual(list(consultations_for_patients([])), [])
        self.assertEqual(len(list(consultations_for_patients([p.id]))), 1)

    # -- histories ------------------------------------------------------------
    def test_history_listing_with_blank_query_lists_everyone(self):
        p1 = self.make_patient('Ana Quispe', '10000001')
        self.make_patient('Luis Mamani', '10000002')
        self.make_consultation(p1, timezone.localdate() - dt.timedelta(days=10))
        self.make_consultation(p1, timezone.localdate() - dt.timedelta(days=200))
        r = self.client.get(reverse('list_histories'), {'q': '   ', 'seq': 4})
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data['seq'], 4)
        self.assertEqual(len(r.data['pacientes']), 2)
        by_id = {p['id']: p for p in r.data['pacientes']}
        self.assertEqual(by_id[p1.id]['total_consultas'], 2)
        self.assertEqual(by_id[p1.id]['estado_calculado'], 'Activo')
        self.assertEqual(r.data['stats'], {
            'totalPacientes': 2, 'activos': 1, 'totalConsultas': 2, 'promedioPorPaciente': 1,
        })

    def test_history_search_matches_name_or_dni(self):
        p1 = self.make_patient('Ana Quispe', '10000001')
        p2 = self.make_patient('Luis Mamani', '20000002')
        self.make_consultation(p2, timezone.localdate())
        r = self.client.get(reverse('list_histories'), {'q': 'quispe'})
        self.assertEqual([p['id'] for p in r.data['pacientes']], [p1.id])
        self.assertEqual(r.data['pacientes'][0]['estado_calculado'], 'Inactivo')
        r = self.client.get(reverse('list_histories'), {'q': '2000'})
        self.assertEqual([p['id'] for p in r.data['pacientes']], [p2.id])
        self.assertEqual(r.data['stats']['totalConsultas'], 1)

    def test_history_search_without_matches_returns_no_consultations(self):
        p = self.make_patient('Ana Quispe', '10000001')
        self.make_consultation(p, timezone.localdate())
        r = self.client.get(reverse('list_histories'), {'q': 'zzz'})
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data['pacientes'], [])
        self.assertEqual(r.data['stats']['totalConsultas'], 0)

    def failing_queryset(self):
        qs = mock.MagicMock()
        qs.__iter__.side_effect = DatabaseError('connection lost')
        return qs

    def test_history_listing_fails_whole_when_one_query_fails(self):
        p = self.make_patient('Ana Quispe', '10000001')
        self.make_consultation(p, timezone.localdate())
        with mock.patch('historiales.services.history.all_consultations', return_value=self.failing_queryset()):
            r = self.client.get(reverse('list_histories'))
        self.assertEqual(r.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertFalse(r.data['ok'])
        self.assertEqual(r.data['error']['code'], 'backend_error')
        self.assertNotIn('pacientes', r.data)
        self.assertNotIn('stats', r.data)

    def test_history_search_fails_when_consultation_query_fails(self):
        self.make_patient('Ana Quispe', '10000001')
        with mock.patch('historiales.services.history.consultations_for_patients',
                        return_value=self.failing_queryset()):
            r = self.client.get(reverse('list_histories'), {'q': 'ana'})
        self.assertEqual(r.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(r.data['error']['code'], 'backend_error')
        self.assertNotIn('pacientes', r.data)

    def test_history_detail(self):
        p = self.make_patient('Ana Quispe', '10000001')
        Antecedent.objects.create(paciente=p, alergias='Polen')
        self.make_consultation(p, timezone.localdate() - dt.timedelta(days=91))
        r = self.client.get(reverse('history_detail', args=[p.id]))
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        h = r.data['historial']
        self.assertEqual(h['total_consultas'], 1)
        self.assertEqual(h['estado_calculado'], 'Inactivo')
        self.assertEqual(h['antecedentes'][0]['alergias'], 'Polen')

    def test_history_detail_unknown_patient(self):
        r = self.client.get(reverse('history_detail', args=[404]))
        self.assertEqual(r.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(r.data['ok'])

    # -- exports --------------------------------------------------------------
    def test_export_pdf_for_patient_without_history(self):
        p = self.make_patient('Ana Quispe', '10000001')
        r = self.client.get(reverse('export_history_pdf', args=[p.id]))
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r['Content-Type'], 'application/pdf')
        self.assertIn('historial_10000001.pdf', r['Content-Disposition'])
        self.assertTrue(r.content.startswith(b'%PDF'))

    def test_export_word(self):
        p = self.make_patient('Ana Quispe', '10000001')
        Antecedent.objects.create(paciente=p, ocupacion='Docente')
        self.make_consultation(p, dt.date(2024, 1, 10))
        self.make_consultation(p, dt.date(2024, 3, 1))
        r = self.client.get(reverse('export_history_word', args=[p.id]))
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertIn('Historial_Ana Quispe.docx', r['Content-Disposition'])
        doc = Document(io.BytesIO(r.content))
        self.assertEqual(len(doc.tables), 2)
        self.assertEqual(len(doc.sections), 1)
        texts = [para.text for para in doc.paragraphs]
        self.assertIn('Consulta 1 - 2024-01-10', texts)
        self.assertIn('Consulta 2 - 2024-03-01', texts)

    def test_export_failure_returns_generic_error(self):
        p = self.make_patient('Ana Quispe', '10000001')
        with mock.patch('historiales.services.history.render_pdf', side_effect=ValueError('boom')):
            r = self.client.get(reverse('export_history_pdf', args=[p.id]))
        self.assertEqual(r.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(r.data['error']['code'], 'export_error')
        self.assertNotIn('boom', str(r.data['error']['message']))

    def test_export_unknown_patient(self):
        r = self.client.get(reverse('export_history_word', args=[404]))
        self.assertEqual(r.status_code, status.HTTP_404_NOT_FOUND)
