"""Project Service — tests for project CRUD, ownership rules and member management.

Tests cover:
    - create makes the creator owner and sole member
    - get requires membership; update/delete/add/remove require ownership
    - add_member by email (NotFound for unknown email, idempotent for existing member)
    - remove_member refuses the owner (Conflict) and leaves state unchanged
    - delete detaches the project's boards instead of leaving a dangling reference
"""

from uuid import uuid4

import pytest

from taskboard.core.errors import (
    AccessDeniedError, ConflictError, ResourceNotFoundError, ValidationError,
)


def test_create_sets_owner_and_members(projects, store, alice):
    project = projects.create(alice, "Launch", "Q4 launch")
    loaded = projects.get(project.id, alice)
    assert loaded.owner.id == alice.id
    assert loaded.member_ids == {alice.id}
    assert loaded.description == "Q4 launch"


def test_create_rejects_blank_name(projects, alice):
    with pytest.raises(ValidationError):
        projects.create(alice, "   ")


def test_get_requires_membership(projects, alice, bob):
    project = projects.create(alice, "Launch")
    with pytest.raises(AccessDeniedError):
        projects.get(project.id, bob)


def test_get_unknown_project_is_not_found(projects, alice):
    with pytest.raises(ResourceNotFoundError):
        projects.get(uuid4(), alice)


def test_list_for_returns_member_projects_only(projects, alice, bob):
    mine = projects.create(alice, "Mine")
    projects.create(bob, "Bob's")
    assert [p.id for p in projects.list_for(alice)] == [mine.id]


def test_update_by_owner(projects, alice):
    project = projects.create(alice, "Launch")
    projects.update(project.id, alice, {"name": "Launch v2", "description": "new"})
    loaded = projects.get(project.id, alice)
    assert loaded.name == "Launch v2"
    assert loaded.description == "new"


def test_update_by_member_denied(projects, alice, bob):
    project = projects.create(alice, "Launch")
    projects.add_member(project.id, alice, bob.email)
    with pytest.raises(AccessDeniedError):
        projects.update(project.id, bob, {"name": "Hijack"})
    assert projects.get(project.id, alice).name == "Launch"


def test_delete_by_owner(projects, alice):
    project = projects.create(alice, "Launch")
    projects.delete(project.id, alice)
    with pytest.raises(ResourceNotFoundError):
        projects.get(project.id, alice)


def test_delete_by_non_owner_denied(projects, alice, bob):
    project = projects.create(alice, "Launch")
    with pytest.raises(AccessDeniedError):
        projects.delete(project.id, bob)


def test_delete_detaches_boards(projects, boards, alice):
    project = projects.create(alice, "Launch")
    board = boards.create(alice, "Sprint 1", project_id=project.id)
    projects.delete(project.id, alice)
    detached = boards.get(board.id, alice)
    assert detached.project_id is None
    assert detached.is_member(alice.id)


def test_add_member_by_email(projects, alice, bob):
    project = projects.create(alice, "Launch")
    projects.add_member(project.id, alice, "BOB@example.com")
    assert projects.get(project.id, bob).member_ids == {alice.id, bob.id}


def test_add_member_unknown_email_not_found(projects, alice):
    project = projects.create(alice, "Launch")
    with pytest.raises(ResourceNotFoundError):
        projects.add_member(project.id, alice, "nobody@example.com")


def test_add_member_requires_owner(projects, alice, bob, carol):
    project = projects.create(alice, "Launch")
    projects.add_member(project.id, alice, bob.email)
    with pytest.raises(AccessDeniedError):
        projects.add_member(project.id, bob, carol.email)


def test_add_existing_member_is_idempotent(projects, alice, bob):
    project = projects.create(alice, "Launch")
    projects.add_member(project.id, alice, bob.email)
    projects.add_member(project.id, alice, bob.email)
    assert projects.get(project.id, alice).member_ids == {alice.id, bob.id}


def test_remove_member(projects, alice, bob):
    project = projects.create(alice, "Launch")
    projects.add_member(project.id, alice, bob.email)
    projects.remove_member(project.id, alice, bob.id)
    assert projects.get(project.id, alice).member_ids == {alice.id}


def test_remove_owner_conflicts_and_leaves_state(projects, alice, bob):
    project = projects.create(alice, "Launch")
    projects.add_member(project.id, alice, bob.email)
    with pytest.raises(ConflictError):
        projects.remove_member(project.id, alice, alice.id)
    loaded = projects.get(project.id, alice)
    assert loaded.owner.id in loaded.member_ids
    assert loaded.member_ids == {alice.id, bob.id}


def test_remove_unknown_user_not_found(projects, alice):
    project = projects.create(alice, "Launch")
    with pytest.raises(ResourceNotFoundError):
        projects.remove_member(project.id, alice, uuid4())
