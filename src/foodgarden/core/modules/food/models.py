import copy
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from foodgarden.core.db import MongoModel
from foodgarden.errors import ValidationError

# Keys owned by the server; never taken from a client body.
MANAGED_FIELDS = frozenset({"_id", "id", "userEmail", "user_email", "addedAt", "added_at", "notes"})


class FoodNote(BaseModel):
    """Note appended to a food item, stamped with the poster's identity.

    Fields are optional so that notes written before stamping (client-supplied
    `postedBy`/`postedAt`, possibly null or free-form) still load.
    """

    note: str | None = None
    posted_by: str | None = Field(None, alias="postedBy")
    posted_at: datetime | str | None = Field(None, alias="postedAt")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class Food(MongoModel):
    """Food item: arbitrary user fields plus server-assigned owner stamp and notes."""

    user_email: str | None = Field(None, alias="userEmail")
    added_at: datetime | str | None = Field(None, alias="addedAt")
    notes: list[FoodNote] = Field(default_factory=list)

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        json_schema_serialization_defaults_required=True,
        extra="allow",
    )

    @field_validator("notes", mode="before")
    @classmethod
    def _null_notes(cls, value: Any) -> Any:
        return [] if value is None else value


def strip_managed_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Drop server-owned keys, including dotted paths into them."""
    return {key: value for key, value in fields.items() if key.split(".", 1)[0] not in MANAGED_FIELDS}


def check_field_names(fields: dict[str, Any], *, allow_paths: bool) -> None:
    """Reject names MongoDB would refuse or treat as operators.

    With `allow_paths`, dotted names address nested fields (update); otherwise
    only plain names are accepted (create).
    """
    for key in fields:
        segments = key.split(".")
        if not allow_paths and len(segments) > 1:
            raise ValidationError(f"Invalid field name: {key!r}")
        if any(not segment or segment.startswith("$") for segment in segments):
            raise ValidationError(f"Invalid field name: {key!r}")


def apply_set(doc: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of `doc` with a `$set` of `update` applied (dotted paths, array indexes)."""
    result = copy.deepcopy(doc)
    for path, value in update.items():
        *parents, leaf = path.split(".")
        target: Any = result
        for segment in parents:
            target = _descend(target, segment)
        _assign(target, leaf, copy.deepcopy(value))
    return result


def _descend(container: Any, segment: str) -> Any:
    if isinstance(container, list):
        index = int(segment)
        container.extend([None] * (index + 1 - len(container)))
        if container[index] is None:
            container[index] = {}
        return container[index]
    return container.setdefault(segment, {})


def _assign(container: Any, segment: str, value: Any) -> None:
    if isinstance(container, list):
        index = int(segment)
        container.extend([None] * (index + 1 - len(container)))
        container[index] = value
    else:
        container[segment] = value
