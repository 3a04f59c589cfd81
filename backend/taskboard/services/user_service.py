"""User Service — registration and profile edits. Credentials live outside the core.

Invariants:
    - Email is unique across users (case-insensitive); duplicates raise DuplicateEmailError
    - A user may only edit their own profile
"""

import logging

from taskboard.core.domain_types import ResourceType, Role, UserId
from taskboard.core.entities import User, utcnow
from taskboard.core.errors import DuplicateEmailError, ResourceNotFoundError
from taskboard.core.repository_protocols import BoardStore
from taskboard.schemas.updates import UserUpdate, parse_update, require_text

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, store: BoardStore):
        self.store = store

    def register(
        self,
        name: str,
        email: str,
        username: str | None = None,
        role: Role = Role.USER,
        avatar_url: str | None = None,
    ) -> User:
        email = require_text(email, "email")
        with self.store.transaction():
            if self.store.find_user_by_email(email) is not None:
                raise DuplicateEmailError(email)
            user = User(
                name=require_text(name, "name"),
                email=email,
                username=username,
                role=role,
                avatar_url=avatar_url,
            )
            self.store.save_user(user)
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user

    def get(self, user_id: UserId) -> User:
        with self.store.transaction():
            user = self.store.find_user_by_id(user_id)
            if user is None:
                raise ResourceNotFoundError(ResourceType.USER.value, user_id)
            return user

    def update_profile(self, actor: User, fields: UserUpdate | dict) -> User:
        changes = parse_update(UserUpdate, fields).changes()
        with self.store.transaction():
            user = self.store.find_user_by_id(actor.id)
            if user is None:
                raise ResourceNotFoundError(ResourceType.USER.value, actor.id)
            new_email = changes.get("email")
            if new_email is not None:
                holder = self.store.find_user_by_email(new_email)
                if holder is not None and holder.id != user.id:
                    raise DuplicateEmailError(new_email)
            for key, value in changes.items():
                setattr(user, key, value)
            user.updated_at = utcnow()
            self.store.save_user(user)
        logger.info("User profile updated", extra={"user_id": str(user.id)})
        return user
