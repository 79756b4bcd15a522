"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore


class BookingCreateSerializer(serializers.Serializer):
    """Заявка на бронирование вещи."""

    itemId = serializers.IntegerField(source="item_id", min_value=1)
    start = serializers.DateTimeField()
    end = serializers.DateTimeField()


class BookerSerializer(serializers.Serializer):
    id = serializers.IntegerField(source="booker_id")


class BookedItemSerializer(serializers.Serializer):
    id = serializers.IntegerField(source="item_id")
    name = serializers.CharField(source="item_name")


class BookingSerializer(serializers.Serializer):
    """Бронирование в ответах API (read-only, поверх доменной сущности)."""

    id = serializers.IntegerField(read_only=True)
    start = serializers.DateTimeField(read_only=True)
    end = serializers.DateTimeField(read_only=True)
    status = serializers.CharField(source="status.value", read_only=True)
    booker = BookerSerializer(source="*", read_only=True)
    item = BookedItemSerializer(source="*", read_only=True)


class BookingShortSerializer(serializers.Serializer):
    """Последнее или ближайшее бронирование вещи."""

    id = serializers.IntegerField(read_only=True)
    bookerId = serializers.IntegerField(source="booker_id", read_only=True)
    start = serializers.DateTimeField(read_only=True)
    end = serializers.DateTimeField(read_only=True)
