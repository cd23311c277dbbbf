from django.apps import AppConfig


class DiningConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "dining"
