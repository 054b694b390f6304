"""Clinical history application.

This package contains models, serializers, services, exporters, views and
route registrations for patients, consultations and clinical histories.
"""
