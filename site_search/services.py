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

import logging
from collections.abc import Mapping

from site_search.assembler import PredicateAssembler
from site_search.data_models.config import SearchConfig
from site_search.data_models.items import Item, is_item_id, normalize_item_id
from site_search.data_models.search import SearchRequest
from site_search.interfaces import (
    BoostingService,
    ContentRepository,
    FacetService,
    IndexResolver,
    MultisiteContext,
    SearchContextService,
    SearchIndex,
    SortingService,
    TokenResolver,
)
from site_search.query import CompositeQuery
from site_search.scope import ScopeResolver
from site_search.site_context import switch_site

logger = logging.getLogger(__name__)


def is_geolocation_request(query_params: Mapping[str, str], marker_key: str) -> bool:
    """A request is in geolocation mode iff the marker key is present; its value is ignored."""
    return marker_key in query_params


class SearchService:
    """
    Resolves search requests into composed index queries and executes them.

    Every collaborator is passed in explicitly. The service holds no
    per-request state, so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        index_resolver: IndexResolver,
        repository: ContentRepository,
        token_resolver: TokenResolver,
        sorting_service: SortingService,
        facet_service: FacetService,
        boosting_service: BoostingService,
        multisite_context: MultisiteContext,
        search_context_service: SearchContextService,
        config: SearchConfig | None = None,
    ) -> None:
        self.index_resolver = index_resolver
        self.repository = repository
        self.token_resolver = token_resolver
        self.sorting_service = sorting_service
        self.facet_service = facet_service
        self.boosting_service = boosting_service
        self.multisite_context = multisite_context
        self.search_context_service = search_context_service
        self.config = config or SearchConfig()

        self.scope_resolver = ScopeResolver(repository, self.config.database)
        self.assembler = PredicateAssembler(
            search_context_service,
            multisite_context,
            repository,
            language_delimiters=self.config.language_delimiters,
        )

    def search(self, request: SearchRequest) -> list[Item]:
        """Fetches one page of matching content items.

        The composed query is ordered by the sorting service, then `offset`
        hits are skipped before `page_size` hits are taken. Hits whose backing
        item cannot be found (a stale index entry, for instance) are left out
        of the result silently.

        Args:
            request: The search request.

        Returns:
            The items of the requested page, in result order. A request that
            cannot be scoped (no home item for the site, say) returns an empty
            list.

        Raises:
            Whatever the index, repository or policy collaborators raise.
        """
        query, search_index = self._build_query(request)
        query = self.sorting_service.order(
            query, request.sort_order, request.center, request.site
        )
        query = query.skip(request.offset).take(request.page_size)

        items = []
        for hit in query.execute():
            item = search_index.get_item(hit)
            if item is None:
                logger.debug("Skipping hit %s: item could not be resolved", hit.item_id)
                continue
            items.append(item)

        logger.info(
            "Search on '%s' for site '%s' returned %d item(s)",
            search_index.name,
            request.site,
            len(items),
        )
        return items

    def get_query(self, request: SearchRequest) -> tuple[CompositeQuery, str]:
        """Returns the filtered, boosted query before ordering and paging, with the index name."""
        query, search_index = self._build_query(request)
        return query, search_index.name

    def get_context_item(self, item_id: str | None) -> Item | None:
        """Resolves the page the search runs on; absent or malformed ids give None."""
        if not is_item_id(item_id):
            if item_id:
                logger.debug("Ignoring malformed context item id '%s'", item_id)
            return None
        return self.repository.get_item(normalize_item_id(item_id))

    def _build_query(self, request: SearchRequest) -> tuple[CompositeQuery, SearchIndex]:
        search_index = self.index_resolver.resolve_index()

        scope_items = self.scope_resolver.resolve(request.scope_id)
        context_item = self.get_context_item(request.item_id)
        models = self.scope_resolver.scope_models(scope_items)
        models = self.token_resolver.resolve(models, context_item)

        geolocation = is_geolocation_request(
            request.query_params, self.config.geolocation_key
        )

        with switch_site(self.config.privileged_site):
            query_context = search_index.create_search_context()
            query = query_context.create_query(models)

        query = query.where(self.assembler.scope_predicate(request.site, geolocation))
        query = query.where(self.assembler.content_predicate(request.query))
        query = query.where(self.assembler.language_predicate(request.language))
        query = query.where(self.assembler.latest_version_predicate())
        query = self.facet_service.apply_facet_filters(
            query, request.query_params, request.center, request.site
        )

        logger.debug(
            "Built query on '%s' (geolocation=%s, %d scope model(s)): %s",
            search_index.name,
            geolocation,
            len(models),
            query,
        )
        return (
            self.boosting_service.boost_query(
                scope_items, request.query, context_item, query
            ),
            search_index,
        )
