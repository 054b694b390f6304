from django.apps import AppConfig


class HistorialesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'historiales'
    verbose_name = 'Historiales clínicos'

    def ready(self) -> None:
        # Connect the auth signal receivers that drive the session state
        from . import signals  # noqa: F401
