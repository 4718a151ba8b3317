from django.apps import AppConfig


class PreviewConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'preview'

    def ready(self):
        """Validate the MULTIMARKDOWN setting at startup instead of on first render."""
        from .conf import get_preview_settings

        get_preview_settings()
