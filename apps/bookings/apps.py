from django.apps import AppConfig  # type: ignore


class BookingsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.bookings"
    verbose_name = "Бронирования"

    def ready(self):
        from config.bootstrap import bootstrap

        bootstrap()
