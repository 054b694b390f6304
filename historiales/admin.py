"""
Django admin registrations for the clinical history models.

Consultations are append-only, so their admin is read-only; patients
show their antecedents inline.
"""

from django.contrib import admin

from .models import Antecedent, Consultation, Patient, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'role', 'is_staff', 'is_superuser')
    list_filter = ('role',)
    search_fields = ('username', 'first_name', 'last_name')


class AntecedentInline(admin.StackedInline):
    model = Antecedent
    extra = 0


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'nombre', 'dni', 'edad', 'sexo', 'tipo_seguro', 'estado', 'created_at')
    list_filter = ('sexo', 'estado', 'tipo_seguro')
    search_fields = ('nombre', 'dni')
    inlines = [AntecedentInline]


@admin.register(Consultation)
class ConsultationAdmin(admin.ModelAdmin):
    list_display = ('id', 'paciente', 'fecha', 'hora', 'motivo_consulta')
    list_filter = ('fecha',)
    search_fields = ('paciente__nombre', 'paciente__dni', 'motivo_consulta', 'diagnostico')

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
