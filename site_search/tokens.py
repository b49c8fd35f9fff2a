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
Scope-query parsing and token resolution.

A ScopeQuery field holds entries separated by `;`. Each entry is
`[+|-]type:value`, where `+` (or no prefix) makes the entry required and `-`
excludes matches:

    +location:{9C6A5B40-...};-template:{2E4D9A0C-...};custom:ExcludeCurrentItem

Some `custom` entries are tokens relative to the page the search runs on. They
are replaced by concrete entries before the query reaches the index.
"""

import logging
from collections.abc import Sequence

from site_search.data_models.enums import SearchOperation
from site_search.data_models.items import Item, to_search_id
from site_search.data_models.search import SearchStringModel

logger = logging.getLogger(__name__)

ENTRY_SEPARATOR = ";"
CUSTOM_TYPE = "custom"

# Token keywords, compared case-insensitively.
TAGGED_WITH_AT_LEAST_ONE_TAG = "taggedwithatleastonetagfromcurrentcontent"
TAGGED_THE_SAME = "taggedthesameascurrentpage"
SAME_VALUE_IN_FIELD = "itemswiththesamevalueinfield"
EXCLUDE_CURRENT_ITEM = "excludecurrentitem"

_CONTEXT_TOKENS = {
    TAGGED_WITH_AT_LEAST_ONE_TAG,
    TAGGED_THE_SAME,
    SAME_VALUE_IN_FIELD,
    EXCLUDE_CURRENT_ITEM,
}


def parse_datasource_string(value: str | None) -> list[SearchStringModel]:
    """
    Parses a ScopeQuery field value into search models.

    Empty values and malformed entries yield no models; this never raises.
    """
    if not value or not value.strip():
        return []

    models = []
    for entry in value.split(ENTRY_SEPARATOR):
        entry = entry.strip()
        operation = SearchOperation.MUST
        if entry[:1] == "+":
            entry = entry[1:]
        elif entry[:1] == "-":
            operation = SearchOperation.NOT
            entry = entry[1:]

        model_type, sep, model_value = entry.partition(":")
        model_type, model_value = model_type.strip(), model_value.strip()
        if not sep or not model_type or not model_value:
            if entry:
                logger.debug("Skipping malformed scope query entry '%s'", entry)
            continue
        models.append(
            SearchStringModel(type=model_type, value=model_value, operation=operation)
        )
    return models


def _split_token(model: SearchStringModel) -> tuple[str, str]:
    """Returns (keyword, argument) for a custom model such as `Token|FieldName`."""
    keyword, _, argument = model.value.partition("|")
    return keyword.strip().lower(), argument.strip()


def is_context_token(model: SearchStringModel) -> bool:
    if model.type.lower() != CUSTOM_TYPE:
        return False
    keyword, _ = _split_token(model)
    return keyword in _CONTEXT_TOKENS


class SearchQueryTokenResolver:
    """Replaces context-relative tokens with concrete search models."""

    def resolve(
        self, models: Sequence[SearchStringModel], context_item: Item | None
    ) -> list[SearchStringModel]:
        resolved = []
        for model in models:
            if not is_context_token(model):
                resolved.append(model)
                continue
            if context_item is None:
                logger.debug("Dropping token '%s': no context item", model.value)
                continue
            resolved.extend(self._resolve_token(model, context_item))
        return resolved

    def _resolve_token(
        self, model: SearchStringModel, context_item: Item
    ) -> list[SearchStringModel]:
        keyword, field_name = _split_token(model)

        if keyword == EXCLUDE_CURRENT_ITEM:
            return [
                SearchStringModel(
                    type="id",
                    value=context_item.short_id,
                    operation=SearchOperation.NOT,
                )
            ]

        if not field_name:
            logger.debug("Dropping token '%s': no field name given", model.value)
            return []

        if keyword == SAME_VALUE_IN_FIELD:
            field_value = context_item[field_name].strip()
            if not field_value:
                return []
            return [
                SearchStringModel(
                    type=CUSTOM_TYPE,
                    value=f"{field_name}|{field_value.lower()}",
                    operation=SearchOperation.MUST,
                )
            ]

        operation = (
            SearchOperation.SHOULD
            if keyword == TAGGED_WITH_AT_LEAST_ONE_TAG
            else SearchOperation.MUST
        )
        tags = context_item.get_multilist(field_name) or []
        return [
            SearchStringModel(
                type=CUSTOM_TYPE,
                value=f"{field_name}|{to_search_id(tag)}",
                operation=operation,
            )
            for tag in tags
        ]
