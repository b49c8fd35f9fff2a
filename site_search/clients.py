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
In-memory implementations of the search collaborators.

These back the CLI and the end-to-end tests. A `Snapshot` (a JSON document of
content items, indexed pages and site definitions) is loaded once and wired
into a `SearchService` by `create_search_service`.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from site_search.boosting import DefaultBoostingService
from site_search.constants import MULTILIST_SEPARATOR, SETTINGS_ITEM_NAME
from site_search.data_models.config import SearchConfig
from site_search.data_models.enums import SearchOperation
from site_search.data_models.items import (
    Item,
    is_item_id,
    normalize_item_id,
    to_search_id,
)
from site_search.data_models.search import ContentPage, SearchStringModel
from site_search.exceptions import IndexNotFoundError, SnapshotLoadError
from site_search.facets import DefaultFacetService
from site_search.predicates import (
    FALSE,
    Predicate,
    and_all,
    content_contains,
    field_contains,
    item_id_equals,
    not_,
    or_any,
    path_contains,
    template_equals,
)
from site_search.query import CompositeQuery
from site_search.services import SearchService
from site_search.site_context import get_current_site
from site_search.sorting import DefaultSortingService
from site_search.tokens import SearchQueryTokenResolver
from site_search.utils import split_terms

logger = logging.getLogger(__name__)


class InMemoryContentRepository:
    def __init__(self, items: Iterable[Item] = ()) -> None:
        self._by_id: dict[str, Item] = {}
        self._by_path: dict[str, Item] = {}
        for item in items:
            self.add(item)

    def add(self, item: Item) -> None:
        self._by_id[item.id] = item
        if item.path:
            self._by_path[item.path.rstrip("/").lower()] = item

    def get_item(self, identifier: str) -> Item | None:
        """Returns the item with this id (any GUID form) or content path."""
        if not identifier:
            return None
        if is_item_id(identifier):
            return self._by_id.get(normalize_item_id(identifier))
        if identifier.startswith("/"):
            return self._by_path.get(identifier.rstrip("/").lower())
        return None

    def lookup(self, scope_id: str, database: str) -> list[Item]:
        items = []
        for part in scope_id.split(MULTILIST_SEPARATOR):
            item = self.get_item(part.strip())
            if item is None:
                logger.debug("Scope entry '%s' not found in '%s'", part, database)
                continue
            if item not in items:
                items.append(item)
        return items


class InMemoryQueryContext:
    def __init__(
        self, pages: Sequence[ContentPage], repository: InMemoryContentRepository
    ) -> None:
        self.pages = pages
        self.repository = repository

    def create_query(self, models: Sequence[SearchStringModel]) -> CompositeQuery:
        logger.debug(
            "Creating query from %d model(s) under site context '%s'",
            len(models),
            get_current_site(),
        )
        pages = self.pages
        return CompositeQuery(lambda: iter(pages)).where(self.models_predicate(models))

    def models_predicate(self, models: Sequence[SearchStringModel]) -> Predicate:
        """
        Translates scope models into a predicate.

        Required models are ANDed, excluded models are ANDed in negated, and
        optional models form a single OR group that is ANDed with the rest.
        Models of unknown type are ignored.
        """
        required, excluded, optional = [], [], []
        for model in models:
            predicate = self._model_predicate(model)
            if predicate is None:
                logger.debug("Ignoring unsupported scope model '%s'", model)
                continue
            if model.operation == SearchOperation.NOT:
                excluded.append(not_(predicate))
            elif model.operation == SearchOperation.SHOULD:
                optional.append(predicate)
            else:
                required.append(predicate)

        expression = and_all(required + excluded)
        if optional:
            expression = expression & or_any(optional)
        return expression

    def _model_predicate(self, model: SearchStringModel) -> Predicate | None:
        model_type = model.type.lower()
        if model_type == "location":
            item = self.repository.get_item(model.value)
            if item is None:
                logger.debug("Scope location '%s' does not exist", model.value)
                return FALSE
            return path_contains(item.short_id)
        if model_type == "template":
            if not is_item_id(model.value):
                return FALSE
            return template_equals(to_search_id(model.value))
        if model_type == "id":
            value = model.value
            return item_id_equals(to_search_id(value) if is_item_id(value) else value.lower())
        if model_type == "custom":
            field_name, sep, value = model.value.partition("|")
            if not sep or not field_name.strip():
                return None
            return field_contains(field_name.strip(), value.strip())
        if model_type == "text":
            return and_all(content_contains(term) for term in split_terms(model.value))
        return None


class InMemorySearchIndex:
    def __init__(
        self,
        name: str,
        pages: Iterable[ContentPage],
        repository: InMemoryContentRepository,
    ) -> None:
        self.name = name
        self.pages = tuple(pages)
        self.repository = repository

    def create_search_context(self) -> InMemoryQueryContext:
        return InMemoryQueryContext(self.pages, self.repository)

    def get_item(self, page: ContentPage) -> Item | None:
        return self.repository.get_item(page.item_id)


class InMemoryIndexResolver:
    def __init__(self, indexes: Iterable[InMemorySearchIndex], index_name: str) -> None:
        self.indexes = {index.name: index for index in indexes}
        self.index_name = index_name

    def resolve_index(self) -> InMemorySearchIndex:
        index = self.indexes.get(self.index_name)
        if index is None:
            raise IndexNotFoundError(f"No index named '{self.index_name}'")
        return index


class InMemoryMultisiteContext:
    """
    Site structure convention: the site item is the parent of the home item and
    the settings item is the site item's child named "Settings".
    """

    def __init__(self, repository: InMemoryContentRepository) -> None:
        self.repository = repository

    def get_site_item(self, home_item: Item) -> Item | None:
        parent_path = home_item.path.rstrip("/").rpartition("/")[0]
        if not parent_path:
            return None
        return self.repository.get_item(parent_path)

    def get_settings_item(self, home_item: Item) -> Item | None:
        site_item = self.get_site_item(home_item)
        if site_item is None:
            return None
        return self.repository.get_item(f"{site_item.path.rstrip('/')}/{SETTINGS_ITEM_NAME}")


class InMemorySearchContextService:
    def __init__(
        self,
        repository: InMemoryContentRepository,
        sites: Mapping[str, str],
        default_site: str | None = None,
    ) -> None:
        self.repository = repository
        self.sites = {name.lower(): home for name, home in sites.items()}
        self.default_site = default_site

    def get_home_item(self, site: str | None) -> Item | None:
        site_name = site or self.default_site
        if not site_name:
            return None
        home = self.sites.get(site_name.lower())
        if home is None:
            logger.debug("Unknown site '%s'", site_name)
            return None
        return self.repository.get_item(home)


class Snapshot(BaseModel):
    """Content items, indexed pages and site definitions for in-memory search."""

    items: list[Item] = Field(default_factory=list)
    pages: list[ContentPage] = Field(default_factory=list)
    sites: dict[str, str] = Field(
        default_factory=dict, description="Site name to home item id or path"
    )
    index_name: str | None = Field(default=None, description="Overrides the configured index name")


def load_snapshot(path: str | Path) -> Snapshot:
    """
    Reads a snapshot from a JSON file.

    Raises:
        SnapshotLoadError: If the file cannot be read or is not a valid snapshot.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotLoadError(f"Cannot read snapshot '{path}': {e}") from e
    try:
        return Snapshot.model_validate_json(content)
    except ValidationError as e:
        raise SnapshotLoadError(f"Invalid snapshot '{path}': {e}") from e


def create_search_service(
    snapshot: Snapshot, config: SearchConfig | None = None
) -> SearchService:
    """
    Factory function wiring a SearchService over in-memory collaborators.

    The default facet, sorting, boosting and token-resolution policies are
    configured from `config`.
    """
    config = config or SearchConfig()
    index_name = snapshot.index_name or config.index_name

    repository = InMemoryContentRepository(snapshot.items)
    search_index = InMemorySearchIndex(index_name, snapshot.pages, repository)

    return SearchService(
        index_resolver=InMemoryIndexResolver([search_index], index_name),
        repository=repository,
        token_resolver=SearchQueryTokenResolver(),
        sorting_service=DefaultSortingService(),
        facet_service=DefaultFacetService(config.facet_fields),
        boosting_service=DefaultBoostingService(
            name_boost=config.name_boost,
            context_boost=config.context_boost,
            scope_boost=config.scope_boost,
        ),
        multisite_context=InMemoryMultisiteContext(repository),
        search_context_service=InMemorySearchContextService(
            repository, snapshot.sites, config.default_site
        ),
        config=config,
    )
