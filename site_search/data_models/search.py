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
Data models for search functionality.

This module defines Pydantic models for the inbound search request, the
index-side `ContentPage` projection that predicates are evaluated against, and
the parsed scope-query tokens (`SearchStringModel`).
"""

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from site_search.constants import DEFAULT_PAGE_SIZE
from site_search.data_models.enums import SearchOperation


class Coordinates(BaseModel):
    """A geographic point in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class SearchRequest(BaseModel):
    """Represents a single search request. Immutable once constructed."""

    model_config = ConfigDict(frozen=True)

    query: str | None = Field(None, description="Free-text query")
    scope_id: str | None = Field(None, description="Scope item id(s) or path(s), pipe-delimited")
    language: str | None = Field(None, description="Language tag(s), delimiter-separated")
    sort_order: str | None = Field(None, description="Sort-order token passed to the sorting service")
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0, description="Number of results to take")
    offset: int = Field(default=0, ge=0, description="Number of results to skip")
    center: Coordinates | None = Field(None, description="Geo-center for distance facets and sorting")
    site: str | None = Field(None, description="Site name; the default site is used when absent")
    item_id: str | None = Field(None, description="Context item id; ignored if malformed")
    query_params: Mapping[str, str] = Field(
        default_factory=dict,
        validate_default=True,
        description="Raw inbound query-string parameters",
    )

    @field_validator("query_params", mode="after")
    @classmethod
    def _freeze_query_params(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_serializer("query_params")
    def _dump_query_params(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)


class ContentPage(BaseModel):
    """
    Read-only projection of an indexed document.

    `raw_path` holds the short ids of the item and all of its ancestors, so a
    "path equals X" test is a subtree-membership test.
    """

    model_config = ConfigDict(frozen=True)

    item_id: str
    name: str = ""
    raw_path: tuple[str, ...] = ()
    is_searchable: bool = True
    is_poi: bool = False
    latest_version: bool = True
    language: str = "en"
    aggregated_content: str = ""
    template_id: str | None = None
    location: Coordinates | None = None
    fields: dict[str, list[str]] = Field(default_factory=dict)


class SearchStringModel(BaseModel):
    """A single parsed entry of a ScopeQuery field, e.g. `+location:{GUID}`."""

    model_config = ConfigDict(frozen=True)

    type: str
    value: str
    operation: SearchOperation = SearchOperation.MUST

    def __str__(self) -> str:
        return f"{self.operation.value} {self.type}:{self.value}"
