"""
ASGI config for the clinica project.

Only HTTP is served; configure settings before importing Django.
"""
import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "clinica.settings")

from django.core.asgi import get_asgi_application  # noqa: E402

application = get_asgi_application()
