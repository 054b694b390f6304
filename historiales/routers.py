"""
URL mappings for the clinical history API.

Paths follow the screens of the front-end (``pacientes``, ``consultas``,
``historiales``).  Trailing slashes are deliberately omitted.
"""
from django.urls import path, include

from .auth_views import login_view, logout_view, session_view
from .views import health
from .views.consultations import list_consultations, new_consultation
from .views.history import export_history_pdf, export_history_word, history_detail, list_histories
from .views.patients import list_patients, patient_detail, patient_register


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),
    # Authentication
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/logout', logout_view, name='logout_view'),
    path('api/auth/session', session_view, name='session_view'),
    # Patients
    path('api/pacientes', list_patients, name='list_patients'),
    path('api/pacientes/registrar', patient_register, name='patient_register'),
    path('api/pacientes/<int:pk>', patient_detail, name='patient_detail'),
    # Consultations
    path('api/consultas', list_consultations, name='list_consultations'),
    path('api/consultas/nueva/<int:pk>', new_consultation, name='new_consultation'),
    # Clinical histories
    path('api/historiales', list_histories, name='list_histories'),
    path('api/historiales/<int:pk>', history_detail, name='history_detail'),
    path('api/historiales/<int:pk>/exportar/pdf', export_history_pdf, name='export_history_pdf'),
    path('api/historiales/<int:pk>/exportar/word', export_history_word, name='export_history_word'),
]
