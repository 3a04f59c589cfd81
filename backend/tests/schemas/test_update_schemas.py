"""Update Schemas — tests for partial update parsing and validation.

Tests cover:
    - Only explicitly provided fields appear in changes()
    - None on a required field is ignored, None on an optional field clears it
    - Names are stripped; empty names and unknown fields raise ValidationError
"""

import pytest

from taskboard.core.errors import ValidationError
from taskboard.schemas.updates import (
    BoardUpdate, CardUpdate, ProjectUpdate, UserUpdate, parse_update, require_text,
)


def test_changes_only_contains_set_fields():
    update = parse_update(BoardUpdate, {"is_public": True})
    assert update.changes() == {"is_public": True}


def test_none_on_required_field_is_ignored():
    update = parse_update(ProjectUpdate, {"name": None, "description": None})
    assert update.changes() == {"description": None}


def test_name_is_stripped():
    assert parse_update(ProjectUpdate, {"name": "  Launch  "}).changes() == {"name": "Launch"}


def test_blank_title_rejected():
    with pytest.raises(ValidationError) as exc:
        parse_update(CardUpdate, {"title": "   "})
    assert exc.value.field == "title"


def test_unknown_field_rejected():
    with pytest.raises(ValidationError):
        parse_update(BoardUpdate, {"owner_id": "x"})


def test_model_instance_passes_through():
    update = CardUpdate(description="d")
    assert parse_update(CardUpdate, update) is update


def test_invalid_email_rejected():
    with pytest.raises(ValidationError) as exc:
        parse_update(UserUpdate, {"email": "not-an-email"})
    assert exc.value.field == "email"


def test_card_due_date_parsed_from_iso_string():
    changes = parse_update(CardUpdate, {"due_date": "2026-11-01"}).changes()
    assert changes["due_date"].isoformat() == "2026-11-01"


def test_require_text_strips_and_rejects_empty():
    assert require_text("  Sprint 1 ", "name") == "Sprint 1"
    with pytest.raises(ValidationError):
        require_text("", "name")
    with pytest.raises(ValidationError):
        require_text(None, "name")
