"""Prize entity schema and its stored-document shape."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from extralife.core.constants import EMPTY_STORAGE_KEYS, UNSET_PRIZE_ID


def as_utc(value: datetime) -> datetime:
    """Read naive timestamps as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class Prize(BaseModel):
    """A fundraising prize.

    Stored documents use the camelCase aliases (``storageKey``,
    ``prizeId``, ``dateAdded``, ``dateToDisplay``). Keys the model does
    not know about are kept and written back untouched.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", validate_assignment=True)

    storage_key: str | None = Field(default=None, alias="storageKey")
    prize_id: int = Field(default=UNSET_PRIZE_ID, ge=0, alias="prizeId")
    date_added: datetime | None = Field(default=None, alias="dateAdded")
    date_to_display: datetime | None = Field(default=None, alias="dateToDisplay")

    # Descriptive fields are opaque: stored and returned as given.
    name: Any = None
    sponsor: Any = None
    description: Any = None
    image_url: Any = Field(default=None, alias="imageUrl")
    value: Any = None

    @field_validator("storage_key")
    @classmethod
    def _blank_key_is_unset(cls, v: str | None) -> str | None:
        if v is None or v.strip().lower() in EMPTY_STORAGE_KEYS:
            return None
        return v

    @field_validator("date_added", "date_to_display")
    @classmethod
    def _to_utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v) if v is not None else None

    @property
    def has_storage_key(self) -> bool:
        return self.storage_key is not None

    @property
    def has_prize_id(self) -> bool:
        return self.prize_id != UNSET_PRIZE_ID

    def to_document(self) -> dict[str, Any]:
        """Serialize to the JSON document persisted in the collection."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Prize:
        return cls.model_validate(document)
