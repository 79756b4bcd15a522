"""Booking persistence models for ShareIt."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Booking(models.Model):
    """Бронирование вещи арендатором на интервал времени."""

    class Status(models.TextChoices):
        WAITING = "WAITING", _("Ожидает подтверждения")
        APPROVED = "APPROVED", _("Подтверждено")
        REJECTED = "REJECTED", _("Отклонено")

    item = models.ForeignKey(
        "items.Item",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    booker = models.ForeignKey(
        "users.User",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    start = models.DateTimeField(_("Начало"))
    end = models.DateTimeField(_("Окончание"))
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.WAITING,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Бронирование")
        verbose_name_plural = _("Бронирования")
        ordering = ["-start", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end__gt=models.F("start")),
                name="booking_start_before_end",
            ),
        ]
        indexes = [
            models.Index(fields=["item", "start"], name="booking_item_start_idx"),
            models.Index(fields=["booker", "start"], name="booking_booker_start_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} of item {self.item_id} ({self.status})"
