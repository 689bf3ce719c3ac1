from django.apps import AppConfig


class ChambersConfig(AppConfig):
    name = 'apps.chambers'
    verbose_name = 'Chambers & Scheduling'
