"""Serializers for item views and comments."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.bookings.serializers import BookingShortSerializer


class CommentSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    text = serializers.CharField()
    authorName = serializers.CharField(source="author_name", read_only=True)
    created = serializers.DateTimeField(read_only=True)


class CommentCreateSerializer(serializers.Serializer):
    """Текст отзыва; пустой текст отклоняется сервисом."""

    text = serializers.CharField(allow_blank=True, trim_whitespace=False)


class ItemSerializer(serializers.Serializer):
    """Вещь с последним/следующим бронированием (только для владельца) и отзывами."""

    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True)
    available = serializers.BooleanField(read_only=True)
    lastBooking = BookingShortSerializer(source="last_booking", read_only=True, allow_null=True)
    nextBooking = BookingShortSerializer(source="next_booking", read_only=True, allow_null=True)
    comments = CommentSerializer(many=True, read_only=True)
