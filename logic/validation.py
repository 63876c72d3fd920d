"""Pydantic schemas for validating catalog mutation requests."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, field_validator

from models.taxonomy import validate_category


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


class AddItemRequest(BaseModel):
    """Input contract for adding an item.

    The name is kept exactly as typed; only an all-whitespace name is refused.
    """

    name: str
    category: str
    image_data: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return _require_text(value)

    @field_validator("category")
    @classmethod
    def category_is_canonical(cls, value: str) -> str:
        return validate_category(value)


class AddOutfitRequest(BaseModel):
    """Input contract for saving the current selection as an outfit."""

    name: str
    item_ids: List[str] = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return _require_text(value)


__all__ = ["AddItemRequest", "AddOutfitRequest"]
