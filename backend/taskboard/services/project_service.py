"""Project Service — create, read, update, delete projects and manage their members.

Invariants:
    - project.owner ∈ project.members after every call
    - Owner-only: update, delete, add_member, remove_member; member-only: get
    - add_member / remove_member propagate to every board of the project
    - delete detaches the project's boards (project_id cleared) before removing the project

Design Decisions:
    - Detach over forbid on delete: boards survive as standalone boards with their
      members intact, no dangling project reference is left behind
    - Lookups by email are case-insensitive at the store level
"""

import logging

from taskboard.core import access_guard
from taskboard.core.domain_types import ProjectId, ResourceType, UserId
from taskboard.core.entities import Project, User, utcnow
from taskboard.core.errors import ResourceNotFoundError
from taskboard.core.repository_protocols import BoardStore
from taskboard.schemas.updates import ProjectUpdate, parse_update, require_text
from taskboard.services.membership_sync import MembershipSynchronizer

logger = logging.getLogger(__name__)


class ProjectService:
    """Aggregate mutator for Project roots."""

    def __init__(self, store: BoardStore, synchronizer: MembershipSynchronizer | None = None):
        self.store = store
        self.synchronizer = synchronizer or MembershipSynchronizer(store)

    def _load(self, project_id: ProjectId) -> Project:
        project = self.store.find_project_by_id(project_id)
        if project is None:
            raise ResourceNotFoundError(ResourceType.PROJECT.value, project_id)
        return project

    def create(self, owner: User, name: str, description: str | None = None) -> Project:
        """New project; the creator becomes owner and sole member."""
        with self.store.transaction():
            project = Project(
                name=require_text(name, "name"),
                description=description,
                owner=owner,
                members={owner},
            )
            self.store.save(project)
        logger.info(
            f"Project created: {project.name}",
            extra={"project_id": str(project.id), "actor_id": str(owner.id)},
        )
        return project

    def get(self, project_id: ProjectId, actor: User) -> Project:
        with self.store.transaction():
            project = self._load(project_id)
            access_guard.require_member(actor, project)
            return project

    def list_for(self, actor: User) -> list[Project]:
        """Projects where the actor is a member."""
        with self.store.transaction():
            return self.store.find_projects_by_member_id(actor.id)

    def update(self, project_id: ProjectId, actor: User, fields: ProjectUpdate | dict) -> Project:
        changes = parse_update(ProjectUpdate, fields).changes()
        with self.store.transaction():
            project = self._load(project_id)
            access_guard.require_owner(actor, project)
            for key, value in changes.items():
                setattr(project, key, value)
            project.updated_at = utcnow()
            self.store.save(project)
        logger.info(
            "Project updated",
            extra={"project_id": str(project_id), "actor_id": str(actor.id)},
        )
        return project

    def delete(self, project_id: ProjectId, actor: User) -> None:
        with self.store.transaction():
            project = self._load(project_id)
            access_guard.require_owner(actor, project)
            for board in self.store.find_boards_by_project_id(project.id):
                board.project_id = None
                board.updated_at = utcnow()
                self.store.save(board)
            self.store.delete(project)
        logger.info(
            "Project deleted",
            extra={"project_id": str(project_id), "actor_id": str(actor.id)},
        )

    def add_member(self, project_id: ProjectId, actor: User, email: str) -> Project:
        """Add the user with this email to the project and all of its boards."""
        with self.store.transaction():
            project = self._load(project_id)
            access_guard.require_owner(actor, project)
            user = self.store.find_user_by_email(email)
            if user is None:
                raise ResourceNotFoundError(ResourceType.USER.value, email)
            if self.synchronizer.propagate_add(project, user):
                self.store.save(project)
            project.boards = self.store.find_boards_by_project_id(project.id)
        logger.info(
            "Project member added",
            extra={
                "project_id": str(project_id), "actor_id": str(actor.id),
                "user_id": str(user.id),
            },
        )
        return project

    def remove_member(self, project_id: ProjectId, actor: User, user_id: UserId) -> Project:
        """Remove a member from the project and all of its boards. The owner cannot be removed."""
        with self.store.transaction():
            project = self._load(project_id)
            access_guard.require_owner(actor, project)
            if project.owner.id != user_id and self.store.find_user_by_id(user_id) is None:
                raise ResourceNotFoundError(ResourceType.USER.value, user_id)
            if self.synchronizer.propagate_remove(project, user_id):
                self.store.save(project)
            project.boards = self.store.find_boards_by_project_id(project.id)
        logger.info(
            "Project member removed",
            extra={
                "project_id": str(project_id), "actor_id": str(actor.id),
                "user_id": str(user_id),
            },
        )
        return project
