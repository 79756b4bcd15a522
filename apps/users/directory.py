"""Django-backed user directory."""

from __future__ import annotations

from shared.domain.directories import UserDirectory, UserRef
from shared.domain.exceptions import NotFoundError

from .models import User


class DjangoUserDirectory(UserDirectory):
    """Resolves users from the ``users_user`` table."""

    def find_user(self, user_id: int) -> UserRef:
        try:
            user = User.objects.only("id", "name").get(pk=user_id)
        except User.DoesNotExist:
            raise NotFoundError(
                f"User with id:{user_id} not found", entity="user", entity_id=user_id
            )
        return UserRef(id=user.id, name=user.name)
