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
Default boosting: re-orders hits by a relevance score without dropping any.
"""

import logging
from collections.abc import Sequence

from site_search.constants import BOOSTED_CONTENT_FIELD
from site_search.data_models.items import Item, to_search_id
from site_search.data_models.search import ContentPage
from site_search.query import CompositeQuery
from site_search.utils import split_terms

logger = logging.getLogger(__name__)


class DefaultBoostingService:
    def __init__(
        self, name_boost: float = 2.0, context_boost: float = 1.0, scope_boost: float = 1.0
    ) -> None:
        self.name_boost = name_boost
        self.context_boost = context_boost
        self.scope_boost = scope_boost

    def boost_query(
        self,
        scope_items: Sequence[Item],
        query: str | None,
        context_item: Item | None,
        composite: CompositeQuery,
    ) -> CompositeQuery:
        """
        Scores each hit and orders the query by descending score.

        A hit scores `name_boost` per query term that is a word of its name,
        `context_boost` if it lies beneath the context item, and `scope_boost`
        if it lies beneath content listed in a scope item's BoostedContent
        field. Equal scores keep their incoming order. When no hint applies the
        query is returned untouched.
        """
        terms = [term.lower() for term in split_terms(query)] if self.name_boost else []
        context_id = context_item.short_id if context_item and self.context_boost else None
        boosted_ids = set()
        if self.scope_boost:
            for item in scope_items:
                for target in item.get_multilist(BOOSTED_CONTENT_FIELD) or []:
                    boosted_ids.add(to_search_id(target))

        if not (terms or context_id or boosted_ids):
            return composite

        def score(page: ContentPage) -> float:
            name_terms = set(split_terms(page.name.lower()))
            total = self.name_boost * sum(1 for term in terms if term in name_terms)
            if context_id and context_id in page.raw_path:
                total += self.context_boost
            if boosted_ids.intersection(page.raw_path):
                total += self.scope_boost
            return total

        logger.debug(
            "Boosting with %d term(s), context=%s, %d boosted target(s)",
            len(terms),
            context_id,
            len(boosted_ids),
        )
        return composite.order_by(score, descending=True, description="boost")
