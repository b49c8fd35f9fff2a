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
Pydantic models for configuring the search service.
"""

from pydantic import BaseModel, Field, field_validator

from site_search.constants import (
    DEFAULT_DATABASE,
    DEFAULT_INDEX_NAME,
    DEFAULT_LANGUAGE_DELIMITERS,
    DEFAULT_PAGE_SIZE,
    GEOLOCATION_QUERY_KEY,
    PRIVILEGED_SITE,
)


class SearchConfig(BaseModel):
    """Configuration for the search service and its default collaborators."""

    database: str = Field(
        default=DEFAULT_DATABASE,
        description="Content database that scope lookups and context items are read from",
    )
    index_name: str = Field(
        default=DEFAULT_INDEX_NAME,
        description="Search index resolved for each request",
    )
    default_site: str | None = Field(
        default=None,
        description="Site used when a request does not name one",
    )
    privileged_site: str = Field(
        default=PRIVILEGED_SITE,
        description="Site context switched to while the base query is built",
    )
    geolocation_key: str = Field(
        default=GEOLOCATION_QUERY_KEY,
        description="Query-string key whose presence selects geolocation mode",
    )
    default_page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        gt=0,
        description="Page size used by the CLI when none is given",
    )
    language_delimiters: str = Field(
        default=DEFAULT_LANGUAGE_DELIMITERS,
        min_length=1,
        description="Characters separating languages in the language parameter",
    )
    facet_fields: list[str] = Field(
        default_factory=list,
        description="Index fields that may be filtered through query-string parameters",
    )
    name_boost: float = Field(default=2.0, ge=0, description="Boost per query term found in a page name")
    context_boost: float = Field(default=1.0, ge=0, description="Boost for pages near the context item")
    scope_boost: float = Field(default=1.0, ge=0, description="Boost for pages under boosted scope content")

    @field_validator("geolocation_key", "privileged_site", "database", "index_name")
    def validate_not_blank(cls, v: str) -> str:  # noqa: N805
        if not v.strip():
            raise ValueError("value must not be blank")
        return v.strip()
