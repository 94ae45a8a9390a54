from django.apps import AppConfig


class PersistenceConfig(AppConfig):
    name = 'infrastructure.persistence'
    label = 'persistence'
    verbose_name = 'Хранилище BOM'
