"""API views for items: the owner's list, a single item and comments."""

from __future__ import annotations

from rest_framework import status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from config.bootstrap import services
from shared.application.message_bus import message_bus
from shared.interfaces.http import caller_id, page_request

from .serializers import CommentCreateSerializer, CommentSerializer, ItemSerializer
from .services import CreateCommentCommand


class ItemViewSet(viewsets.ViewSet):
    serializer_class = ItemSerializer
    lookup_value_regex = r"\d+"

    def list(self, request):  # type: ignore
        user_id = caller_id(request)
        items = services().item_queries.list_owner_items(user_id, page_request(request))
        return Response(ItemSerializer(items, many=True).data)

    def retrieve(self, request, pk=None):  # type: ignore
        item = services().item_queries.get_item(caller_id(request), int(pk))
        return Response(ItemSerializer(item).data)

    @action(detail=True, methods=["post"], url_path="comment")
    def comment(self, request, pk=None):  # type: ignore
        user_id = caller_id(request)
        serializer = CommentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        comment = message_bus.handle_command(
            CreateCommentCommand(
                author_id=user_id,
                item_id=int(pk),
                text=serializer.validated_data["text"],
            )
        )
        return Response(CommentSerializer(comment).data, status=status.HTTP_201_CREATED)
