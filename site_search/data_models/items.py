# Copyright 2025 Google LLC.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
Content-repository items and item identifiers.

Items are identified by GUIDs. The repository accepts them with or without
braces and hyphens; the index stores the 32-character lowercase hex form
("search id"), which is what `ContentPage.raw_path` holds.
"""

import uuid

from pydantic import BaseModel, Field, field_validator

from site_search.constants import MULTILIST_SEPARATOR


def _parse_uuid(value: str | None) -> uuid.UUID | None:
    if not value or not isinstance(value, str):
        return None
    try:
        return uuid.UUID(value.strip())
    except ValueError:
        return None


def is_item_id(value: str | None) -> bool:
    """Returns True if `value` is a well-formed item identifier."""
    return _parse_uuid(value) is not None


def normalize_item_id(value: str) -> str:
    """
    Converts an item identifier to its canonical braced, upper-case form.

    Examples:
        >>> normalize_item_id("110d559f-dea5-42ea-9c1c-8a5df7e70ef9")
        '{110D559F-DEA5-42EA-9C1C-8A5DF7E70EF9}'

    Raises:
        ValueError: If the identifier is malformed.
    """
    parsed = _parse_uuid(value)
    if parsed is None:
        raise ValueError(f"'{value}' is not a valid item id")
    return "{" + str(parsed).upper() + "}"


def to_search_id(value: str) -> str:
    """
    Converts an item identifier to the short form stored in the index.

    Examples:
        >>> to_search_id("{110D559F-DEA5-42EA-9C1C-8A5DF7E70EF9}")
        '110d559fdea542ea9c1c8a5df7e70ef9'

    Raises:
        ValueError: If the identifier is malformed.
    """
    parsed = _parse_uuid(value)
    if parsed is None:
        raise ValueError(f"'{value}' is not a valid item id")
    return parsed.hex


class Item(BaseModel):
    """A content-repository item as seen by the search service."""

    id: str = Field(description="Item identifier (GUID)")
    name: str = Field(default="", description="Item name")
    path: str = Field(default="", description="Content path, e.g. /sitecore/content/Tenant/Site/Home")
    template_id: str | None = Field(default=None, description="Template identifier")
    language: str = Field(default="en", description="Language of this item version")
    fields: dict[str, str] = Field(
        default_factory=dict, description="Raw field values by field name"
    )

    @field_validator("id")
    def validate_id(cls, v: str) -> str:  # noqa: N805
        return normalize_item_id(v)

    @property
    def short_id(self) -> str:
        return to_search_id(self.id)

    def __getitem__(self, field_name: str) -> str:
        # Missing fields read as empty, like an unset field value.
        return self.fields.get(field_name, "")

    def has_field(self, field_name: str) -> bool:
        return field_name in self.fields

    def get_multilist(self, field_name: str) -> list[str] | None:
        """
        Returns the target ids of a multilist field.

        None means the item has no such field at all, which callers treat
        differently from a present but empty field. Malformed entries are skipped.
        """
        if field_name not in self.fields:
            return None
        targets = []
        for raw in self.fields[field_name].split(MULTILIST_SEPARATOR):
            if is_item_id(raw):
                targets.append(normalize_item_id(raw))
        return targets
