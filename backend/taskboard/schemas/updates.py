"""Update Schemas — Pydantic models for partial updates of projects, boards, cards and users.

Invariants:
    - Only fields explicitly provided are applied (exclude_unset)
    - Names and titles are stripped and may not be empty; None for them means "unchanged"
    - Unknown fields are rejected (extra="forbid")

Design Decisions:
    - field_validator for side-effect-free transforms (strip) — keeps models pure
    - parse_update() maps pydantic errors to core ValidationError so services raise
      one error family only
"""

from datetime import date
from typing import ClassVar, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskboard.core.errors import ValidationError

NAME_MAX_LENGTH = 200

M = TypeVar("M", bound="UpdateModel")


class UpdateModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    #: fields where an explicit None is ignored instead of written
    required_fields: ClassVar[frozenset[str]] = frozenset()

    def changes(self) -> dict:
        """Fields to write: explicitly set, minus None on required fields."""
        return {
            k: v for k, v in self.model_dump(exclude_unset=True).items()
            if not (v is None and k in type(self).required_fields)
        }


def _strip_non_empty(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("cannot be empty or whitespace")
    return v


class ProjectUpdate(UpdateModel):
    required_fields: ClassVar[frozenset[str]] = frozenset({"name"})

    name: str | None = Field(None, max_length=NAME_MAX_LENGTH)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return _strip_non_empty(v)


class BoardUpdate(UpdateModel):
    required_fields: ClassVar[frozenset[str]] = frozenset({"name", "is_public"})

    name: str | None = Field(None, max_length=NAME_MAX_LENGTH)
    description: str | None = None
    is_public: bool | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return _strip_non_empty(v)


class CardUpdate(UpdateModel):
    required_fields: ClassVar[frozenset[str]] = frozenset({"title", "name"})

    title: str | None = Field(None, max_length=NAME_MAX_LENGTH)
    name: str | None = None
    description: str | None = None
    due_date: date | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str | None) -> str | None:
        return _strip_non_empty(v)


class UserUpdate(UpdateModel):
    required_fields: ClassVar[frozenset[str]] = frozenset({"name", "email"})

    name: str | None = Field(None, max_length=NAME_MAX_LENGTH)
    username: str | None = Field(None, max_length=50)
    email: str | None = Field(None, pattern=r"^[^@\s]+@[^@\s]+$")
    avatar_url: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return _strip_non_empty(v)


def parse_update(model: type[M], fields: M | dict) -> M:
    """Accept a model instance or a plain dict; raise ValidationError on bad input."""
    if isinstance(fields, model):
        return fields
    try:
        return model.model_validate(fields)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first["loc"])
        raise ValidationError(f"Invalid {field}: {first['msg']}", field) from e


def require_text(value: str | None, field: str) -> str:
    """Creation-time check for names and titles."""
    if value is None or not value.strip():
        raise ValidationError(f"{field} cannot be empty", field)
    if len(value.strip()) > NAME_MAX_LENGTH:
        raise ValidationError(
            f"{field} exceeds {NAME_MAX_LENGTH} characters", field,
        )
    return value.strip()
