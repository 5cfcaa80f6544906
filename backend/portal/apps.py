from django.apps import AppConfig


class PortalConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'portal'
    verbose_name = 'Ready to Work'

    def ready(self):
        # Register auth logging and cache revalidation receivers.
        from . import signals  # noqa: F401
