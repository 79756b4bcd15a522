"""Admin registrations for items and comments."""

from __future__ import annotations

from django.contrib import admin

from .models import Comment, Item


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "owner", "available", "created_at")
    list_filter = ("available",)
    search_fields = ("name", "description", "owner__email")
    readonly_fields = ("created_at",)


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ("id", "item", "author", "created")
    search_fields = ("text", "author__email", "item__name")
    readonly_fields = ("created",)
