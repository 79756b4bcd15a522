"""Item and comment models for ShareIt."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Item(models.Model):
    """Вещь, которую владелец предоставляет в аренду."""

    owner = models.ForeignKey(
        "users.User",
        on_delete=models.CASCADE,
        related_name="items",
    )
    name = models.CharField(_("Название"), max_length=255)
    description = models.TextField(_("Описание"), blank=True)
    available = models.BooleanField(
        _("Доступна"),
        default=True,
        help_text=_("Можно ли сейчас забронировать вещь."),
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Вещь")
        verbose_name_plural = _("Вещи")
        ordering = ["id"]
        indexes = [
            models.Index(fields=["owner", "id"], name="item_owner_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} (#{self.pk})"


class Comment(models.Model):
    """Отзыв арендатора о вещи после завершённой аренды."""

    item = models.ForeignKey(
        Item,
        on_delete=models.CASCADE,
        related_name="comments",
    )
    author = models.ForeignKey(
        "users.User",
        on_delete=models.CASCADE,
        related_name="comments",
    )
    text = models.TextField()
    created = models.DateTimeField()

    class Meta:
        verbose_name = _("Комментарий")
        verbose_name_plural = _("Комментарии")
        ordering = ["created", "id"]
        indexes = [
            models.Index(fields=["item", "created"], name="comment_item_created_idx"),
        ]

    def __str__(self) -> str:
        return f"Comment #{self.pk} on item {self.item_id}"
