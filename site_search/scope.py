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
Resolution of a search scope to its datasource items and scope-query models.
"""

import logging
from collections.abc import Sequence

from site_search.constants import SCOPE_QUERY_FIELD
from site_search.data_models.items import Item
from site_search.data_models.search import SearchStringModel
from site_search.interfaces import ContentRepository
from site_search.tokens import parse_datasource_string

logger = logging.getLogger(__name__)


class ScopeResolver:
    def __init__(self, repository: ContentRepository, database: str) -> None:
        self.repository = repository
        self.database = database

    def resolve(self, scope_id: str | None) -> list[Item]:
        """
        Looks up the datasource items of a scope.

        A blank scope or a scope that matches nothing yields an empty list.
        Repository failures propagate to the caller.
        """
        if not scope_id or not scope_id.strip():
            return []
        items = list(self.repository.lookup(scope_id.strip(), self.database))
        logger.debug("Scope '%s' resolved to %d item(s)", scope_id, len(items))
        return items

    @staticmethod
    def scope_models(items: Sequence[Item]) -> list[SearchStringModel]:
        """Parses the ScopeQuery field of every item, keeping item order."""
        models = []
        for item in items:
            models.extend(parse_datasource_string(item[SCOPE_QUERY_FIELD]))
        return models
