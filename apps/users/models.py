"""User models for ShareIt.

Users are the owners and bookers of shared items. Authentication is
handled upstream; the booking core receives the caller id already
resolved, so the model only keeps identity and contact data.
"""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class User(models.Model):
    """Участник платформы: владелец вещей и/или арендатор."""

    name = models.CharField(_("Имя"), max_length=255)
    email = models.EmailField(_("Email"), unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Пользователь")
        verbose_name_plural = _("Пользователи")
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
