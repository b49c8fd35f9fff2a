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
Interfaces of the collaborators the search service depends on.

The service never looks collaborators up itself; each one is passed to
`SearchService` explicitly. `site_search.clients` provides in-memory
implementations, and the default policies live in `facets`, `sorting` and
`boosting`.
"""

from collections.abc import Mapping, Sequence
from typing import Protocol

from site_search.data_models.items import Item
from site_search.data_models.search import ContentPage, Coordinates, SearchStringModel
from site_search.query import CompositeQuery


class QueryContext(Protocol):
    def create_query(self, models: Sequence[SearchStringModel]) -> CompositeQuery:
        """Builds the base query over the index restricted by the scope models."""
        ...


class SearchIndex(Protocol):
    name: str

    def create_search_context(self) -> QueryContext: ...

    def get_item(self, page: ContentPage) -> Item | None:
        """Materializes an index hit; None if the backing item no longer exists."""
        ...


class IndexResolver(Protocol):
    def resolve_index(self) -> SearchIndex: ...


class ContentRepository(Protocol):
    def lookup(self, scope_id: str, database: str) -> list[Item]:
        """Resolves a scope (pipe-delimited ids or paths) to datasource items."""
        ...

    def get_item(self, identifier: str) -> Item | None: ...


class TokenResolver(Protocol):
    def resolve(
        self, models: Sequence[SearchStringModel], context_item: Item | None
    ) -> list[SearchStringModel]: ...


class SortingService(Protocol):
    def order(
        self,
        query: CompositeQuery,
        sort_order: str | None,
        center: Coordinates | None,
        site: str | None,
    ) -> CompositeQuery: ...


class FacetService(Protocol):
    def apply_facet_filters(
        self,
        query: CompositeQuery,
        query_params: Mapping[str, str],
        center: Coordinates | None,
        site: str | None,
    ) -> CompositeQuery: ...


class BoostingService(Protocol):
    def boost_query(
        self,
        scope_items: Sequence[Item],
        query: str | None,
        context_item: Item | None,
        composite: CompositeQuery,
    ) -> CompositeQuery: ...


class MultisiteContext(Protocol):
    def get_settings_item(self, home_item: Item) -> Item | None: ...

    def get_site_item(self, home_item: Item) -> Item | None: ...


class SearchContextService(Protocol):
    def get_home_item(self, site: str | None) -> Item | None: ...
