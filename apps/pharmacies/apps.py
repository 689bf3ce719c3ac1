from django.apps import AppConfig


class PharmaciesConfig(AppConfig):
    name = 'apps.pharmacies'
    verbose_name = 'Pharmacies'
