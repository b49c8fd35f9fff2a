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
Assembly of the predicate families that filter a search.

The families are combined with AND; within a family, alternatives (several
associated-content targets, several languages) are combined with OR. Missing
configuration collapses a family to TRUE or FALSE instead of raising.
"""

import logging

from site_search.constants import (
    ASSOCIATED_CONTENT_FIELD,
    ASSOCIATED_MEDIA_FIELD,
    DEFAULT_LANGUAGE_DELIMITERS,
)
from site_search.data_models.items import to_search_id
from site_search.interfaces import (
    ContentRepository,
    MultisiteContext,
    SearchContextService,
)
from site_search.predicates import (
    FALSE,
    TRUE,
    Predicate,
    and_all,
    content_contains,
    is_latest_version,
    is_poi,
    is_searchable,
    language_equals,
    path_contains,
)
from site_search.utils import parse_languages, split_terms

logger = logging.getLogger(__name__)


class PredicateAssembler:
    def __init__(
        self,
        search_context_service: SearchContextService,
        multisite_context: MultisiteContext,
        repository: ContentRepository,
        language_delimiters: str = DEFAULT_LANGUAGE_DELIMITERS,
    ) -> None:
        self.search_context_service = search_context_service
        self.multisite_context = multisite_context
        self.repository = repository
        self.language_delimiters = language_delimiters

    def scope_predicate(self, site: str | None, geolocation: bool) -> Predicate:
        if geolocation:
            return self.geolocation_predicate(site)
        return self.page_or_media_predicate(site)

    def page_or_media_predicate(self, site: str | None) -> Predicate:
        """
        Restricts results to searchable pages under the site's home item.

        Associated content configured on the site settings widens the scope to
        further searchable subtrees. Associated media widens it to media items
        regardless of the searchable flag and ends the assembly of this family.
        """
        home_item = self.search_context_service.get_home_item(site)
        if home_item is None:
            logger.debug("No home item for site '%s'; scope is empty", site)
            return FALSE

        expression = path_contains(home_item.short_id) & is_searchable()

        settings_item = self.multisite_context.get_settings_item(home_item)
        if settings_item is None:
            return expression

        content_targets = settings_item.get_multilist(ASSOCIATED_CONTENT_FIELD)
        if content_targets is not None:
            for target in content_targets:
                expression = expression | (
                    path_contains(to_search_id(target)) & is_searchable()
                )

        media_targets = settings_item.get_multilist(ASSOCIATED_MEDIA_FIELD)
        if media_targets is not None:
            for target in media_targets:
                media_item = self.repository.get_item(target)
                if media_item is None:
                    logger.debug("Associated media %s no longer exists", target)
                    continue
                expression = expression | path_contains(media_item.short_id)
            return expression

        return expression

    def geolocation_predicate(self, site: str | None) -> Predicate:
        """Restricts results to points of interest under the site item."""
        home_item = self.search_context_service.get_home_item(site)
        site_item = (
            self.multisite_context.get_site_item(home_item)
            if home_item is not None
            else None
        )
        if home_item is None or site_item is None:
            logger.debug("No home or site item for site '%s'; scope is empty", site)
            return FALSE

        expression = path_contains(site_item.short_id) & is_poi()

        settings_item = self.multisite_context.get_settings_item(home_item)
        if settings_item is None:
            return expression

        content_targets = settings_item.get_multilist(ASSOCIATED_CONTENT_FIELD)
        if content_targets is not None:
            for target in content_targets:
                expression = expression | (path_contains(to_search_id(target)) & is_poi())
        return expression

    @staticmethod
    def content_predicate(query: str | None) -> Predicate:
        """Requires every whitespace-separated term of the query."""
        return and_all(content_contains(term) for term in split_terms(query))

    def language_predicate(self, language: str | None) -> Predicate:
        languages = parse_languages(language, self.language_delimiters)
        if not languages:
            return TRUE
        expression = FALSE
        for name in languages:
            expression = expression | language_equals(name)
        return expression

    @staticmethod
    def latest_version_predicate() -> Predicate:
        return TRUE & is_latest_version()

