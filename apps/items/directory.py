"""Django-backed item directory."""

from __future__ import annotations

from typing import List

from shared.domain.directories import ItemDirectory, ItemRef
from shared.domain.exceptions import NotFoundError

from .models import Item


def to_item_ref(item: Item) -> ItemRef:
    return ItemRef(
        id=item.id,
        owner_id=item.owner_id,
        available=item.available,
        name=item.name,
        description=item.description,
    )


class DjangoItemDirectory(ItemDirectory):
    """Resolves items from the ``items_item`` table."""

    def find_item(self, item_id: int) -> ItemRef:
        try:
            item = Item.objects.get(pk=item_id)
        except Item.DoesNotExist:
            raise NotFoundError(
                f"Item with id:{item_id} not found", entity="item", entity_id=item_id
            )
        return to_item_ref(item)

    def items_of_owner(self, owner_id: int, offset: int, limit: int) -> List[ItemRef]:
        queryset = Item.objects.filter(owner_id=owner_id).order_by("id")
        return [to_item_ref(item) for item in queryset[offset:offset + limit]]
