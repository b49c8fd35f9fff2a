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
Default facet filtering driven by query-string parameters.

`?category=shoes|boots&brand=acme` keeps pages whose `category` field holds
"shoes" or "boots" and whose `brand` field holds "acme". Only fields listed in
the configuration are considered; other parameters are ignored.
"""

import logging
from collections.abc import Iterable, Mapping

from site_search.constants import DISTANCE_FACET, MULTILIST_SEPARATOR
from site_search.data_models.search import Coordinates
from site_search.predicates import field_contains, is_poi, or_any, within_distance
from site_search.query import CompositeQuery

logger = logging.getLogger(__name__)


class DefaultFacetService:
    def __init__(self, facet_fields: Iterable[str] = ()) -> None:
        # Parameter names are matched case-insensitively.
        self.facet_fields = {name.lower(): name for name in facet_fields}

    def apply_facet_filters(
        self,
        query: CompositeQuery,
        query_params: Mapping[str, str],
        center: Coordinates | None,
        site: str | None,
    ) -> CompositeQuery:
        for key, raw_value in query_params.items():
            name = key.lower()
            if name == DISTANCE_FACET:
                query = self._apply_distance(query, raw_value, center)
                continue

            field_name = self.facet_fields.get(name)
            if field_name is None:
                continue
            values = [v.strip() for v in (raw_value or "").split(MULTILIST_SEPARATOR)]
            values = [v for v in values if v]
            if not values:
                continue
            query = query.where(or_any(field_contains(field_name, v) for v in values))

        return query

    @staticmethod
    def _apply_distance(
        query: CompositeQuery, raw_value: str, center: Coordinates | None
    ) -> CompositeQuery:
        if center is None:
            logger.debug("Ignoring distance facet without a center")
            return query
        try:
            radius_km = float(raw_value)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed distance facet '%s'", raw_value)
            return query
        if radius_km < 0:
            logger.warning("Ignoring negative distance facet '%s'", raw_value)
            return query
        return query.where(is_poi() & within_distance(center, radius_km))
