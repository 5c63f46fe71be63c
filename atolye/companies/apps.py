from django.apps import AppConfig


class CompaniesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'atolye.companies'

    def ready(self):
        """Import signals when app is ready"""
        import atolye.companies.signals  # noqa: F401
