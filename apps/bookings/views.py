"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from config.bootstrap import services
from shared.application.message_bus import message_bus
from shared.interfaces.http import bool_param, caller_id, page_request

from .application.command_handlers import CreateBookingCommand, SetApprovalCommand
from .domain.states import BookingState
from .serializers import BookingCreateSerializer, BookingSerializer


class BookingViewSet(viewsets.ViewSet):
    """Создание, подтверждение и просмотр бронирований.

    Идентификатор пользователя приходит в заголовке ``X-Sharer-User-Id``.
    """

    serializer_class = BookingSerializer
    lookup_value_regex = r"\d+"

    def create(self, request):  # type: ignore
        user_id = caller_id(request)
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = message_bus.handle_command(
            CreateBookingCommand(
                booker_id=user_id,
                item_id=serializer.validated_data["item_id"],
                start=serializer.validated_data["start"],
                end=serializer.validated_data["end"],
            )
        )
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):  # type: ignore
        user_id = caller_id(request)
        booking = message_bus.handle_command(
            SetApprovalCommand(
                acting_user_id=user_id,
                booking_id=int(pk),
                approved=bool_param(request, "approved"),
            )
        )
        return Response(BookingSerializer(booking).data)

    def retrieve(self, request, pk=None):  # type: ignore
        booking = services().booking_queries.get_booking(caller_id(request), int(pk))
        return Response(BookingSerializer(booking).data)

    def list(self, request):  # type: ignore
        user_id = caller_id(request)
        bookings = services().booking_queries.list_for_booker(
            user_id,
            request.query_params.get("state", BookingState.ALL.value),
            page_request(request),
        )
        return Response(BookingSerializer(bookings, many=True).data)

    @action(detail=False, methods=["get"])
    def owner(self, request):  # type: ignore
        user_id = caller_id(request)
        bookings = services().booking_queries.list_for_owner(
            user_id,
            request.query_params.get("state", BookingState.ALL.value),
            page_request(request),
        )
        return Response(BookingSerializer(bookings, many=True).data)
