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
Default ordering of search results.

Sort tokens:
    ""/"relevance"        keep the incoming (boosted) order
    "distance"            nearest to the request center first
    "<field>[,<dir>]"     by a page attribute or facet field; <dir> is
                          asc, ascending, desc or descending (default asc)

Field and distance orderings break ties by item id so pagination sees a total
order; relevance keeps the order of the index, which is already deterministic.
"""

import logging
from typing import Any

from site_search.data_models.enums import SortDirection
from site_search.data_models.search import ContentPage, Coordinates
from site_search.exceptions import InvalidSortOrderError
from site_search.predicates import haversine_km
from site_search.query import CompositeQuery

logger = logging.getLogger(__name__)

RELEVANCE = "relevance"
DISTANCE = "distance"

_SORTABLE_ATTRIBUTES = ("name", "language", "item_id", "template_id")


def _field_value(page: ContentPage, field_name: str) -> str | None:
    if field_name in _SORTABLE_ATTRIBUTES:
        return getattr(page, field_name)
    values = page.fields.get(field_name)
    return values[0] if values else None


class DefaultSortingService:
    def order(
        self,
        query: CompositeQuery,
        sort_order: str | None,
        center: Coordinates | None,
        site: str | None,
    ) -> CompositeQuery:
        token = (sort_order or "").strip()
        if not token or token.lower() == RELEVANCE:
            return query

        if token.lower() == DISTANCE:
            if center is None:
                logger.debug("Distance sort requested without a center; keeping order")
                return query
            return query.order_by(
                lambda page: self._distance_key(page, center), description=DISTANCE
            )

        field_name, _, direction = token.partition(",")
        field_name = field_name.strip()
        if not field_name:
            raise InvalidSortOrderError(f"Sort order '{sort_order}' names no field")
        try:
            parsed = SortDirection.parse(direction) if direction.strip() else SortDirection.ASCENDING
        except ValueError as e:
            raise InvalidSortOrderError(f"Sort order '{sort_order}': {e}") from e

        descending = parsed == SortDirection.DESCENDING
        # Sorting is stable in both directions, so ordering by id first breaks ties.
        query = query.order_by(lambda page: page.item_id, description="item_id")
        return query.order_by(
            lambda page: self._value_key(page, field_name, descending),
            descending=descending,
            description=field_name,
        )

    @staticmethod
    def _distance_key(page: ContentPage, center: Coordinates) -> tuple[Any, ...]:
        if page.location is None:
            return (1, 0.0, page.item_id)
        return (0, haversine_km(center, page.location), page.item_id)

    @staticmethod
    def _value_key(page: ContentPage, field_name: str, descending: bool) -> tuple[int, str]:
        # Pages without a value go last in either direction.
        value = _field_value(page, field_name)
        if value is None:
            return (0 if descending else 1, "")
        return (1 if descending else 0, str(value).lower())
