import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("items", "0001_initial"),
        ("users", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start", models.DateTimeField(verbose_name="Начало")),
                ("end", models.DateTimeField(verbose_name="Окончание")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("WAITING", "Ожидает подтверждения"),
                            ("APPROVED", "Подтверждено"),
                            ("REJECTED", "Отклонено"),
                        ],
                        default="WAITING",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "booker",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to="users.user",
                    ),
                ),
                (
                    "item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to="items.item",
                    ),
                ),
            ],
            options={
                "verbose_name": "Бронирование",
                "verbose_name_plural": "Бронирования",
                "ordering": ["-start", "-id"],
                "indexes": [
                    models.Index(fields=["item", "start"], name="booking_item_start_idx"),
                    models.Index(fields=["booker", "start"], name="booking_booker_start_idx"),
                    models.Index(fields=["status"], name="booking_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(end__gt=models.F("start")),
                        name="booking_start_before_end",
                    ),
                ],
            },
        ),
    ]
