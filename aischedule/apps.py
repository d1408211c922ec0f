from django.apps import AppConfig


class AiScheduleConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'aischedule'
    verbose_name = 'AI schedule'
