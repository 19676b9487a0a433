from django.apps import AppConfig


class EcorideMainAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'ecoride_main_app'

    def ready(self):
        import ecoride_main_app.signals  # Register signals
