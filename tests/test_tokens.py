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

import pytest
from conftest import HOME_ID, TAG_BLUE_ID, TAG_RED_ID, short
from site_search.data_models.enums import SearchOperation
from site_search.data_models.items import Item
from site_search.data_models.search import SearchStringModel
from site_search.tokens import (
    SearchQueryTokenResolver,
    is_context_token,
    parse_datasource_string,
)


class TestParseDatasourceString:
    def test_parses_multiple_entries(self):
        models = parse_datasource_string(
            "+location:{11111111-1111-1111-1111-111111111111};-template:{22222222-2222-2222-2222-222222222222};custom:brand|acme"
        )
        assert [(m.type, m.value, m.operation) for m in models] == [
            ("location", "{11111111-1111-1111-1111-111111111111}", SearchOperation.MUST),
            ("template", "{22222222-2222-2222-2222-222222222222}", SearchOperation.NOT),
            ("custom", "brand|acme", SearchOperation.MUST),
        ]

    @pytest.mark.parametrize("value", [None, "", "   ", ";;"])
    def test_empty_values_yield_nothing(self, value):
        assert parse_datasource_string(value) == []

    def test_malformed_entries_are_skipped(self):
        models = parse_datasource_string("nocolon;:novalue;notype:;+location:/sitecore/content")
        assert len(models) == 1
        assert models[0].type == "location"
        assert models[0].value == "/sitecore/content"

    def test_value_may_contain_colons(self):
        models = parse_datasource_string("text:time: 10:30")
        assert models[0].value == "time: 10:30"


@pytest.fixture
def resolver():
    return SearchQueryTokenResolver()


@pytest.fixture
def context_item():
    return Item(
        id=HOME_ID,
        name="Article",
        fields={"Tags": f"{TAG_RED_ID}|{TAG_BLUE_ID}", "Category": "Footwear"},
    )


def custom(value, operation=SearchOperation.MUST):
    return SearchStringModel(type="custom", value=value, operation=operation)


class TestSearchQueryTokenResolver:
    def test_plain_models_pass_through(self, resolver, context_item):
        models = [
            SearchStringModel(type="location", value="/sitecore/content"),
            custom("brand|acme"),
        ]
        assert resolver.resolve(models, context_item) == models

    def test_tagged_with_at_least_one_tag(self, resolver, context_item):
        resolved = resolver.resolve(
            [custom("TaggedWithAtLeastOneTagFromCurrentContent|Tags")], context_item
        )
        assert resolved == [
            custom(f"Tags|{short(TAG_RED_ID)}", SearchOperation.SHOULD),
            custom(f"Tags|{short(TAG_BLUE_ID)}", SearchOperation.SHOULD),
        ]

    def test_tagged_the_same_as_current_page(self, resolver, context_item):
        resolved = resolver.resolve([custom("TaggedTheSameAsCurrentPage|Tags")], context_item)
        assert [m.operation for m in resolved] == [SearchOperation.MUST] * 2

    def test_same_value_in_field(self, resolver, context_item):
        resolved = resolver.resolve(
            [custom("ItemsWithTheSameValueInField|Category")], context_item
        )
        assert resolved == [custom("Category|footwear")]

    def test_exclude_current_item(self, resolver, context_item):
        resolved = resolver.resolve([custom("excludecurrentitem")], context_item)
        assert resolved == [
            SearchStringModel(type="id", value=short(HOME_ID), operation=SearchOperation.NOT)
        ]

    def test_tokens_dropped_without_context_item(self, resolver):
        plain = SearchStringModel(type="template", value="{11111111-1111-1111-1111-111111111111}")
        resolved = resolver.resolve([custom("ExcludeCurrentItem"), plain], None)
        assert resolved == [plain]

    def test_missing_field_yields_nothing(self, resolver, context_item):
        assert resolver.resolve([custom("TaggedTheSameAsCurrentPage|Nope")], context_item) == []
        assert resolver.resolve([custom("TaggedTheSameAsCurrentPage")], context_item) == []

    def test_resolution_is_idempotent(self, resolver, context_item):
        models = [
            custom("TaggedWithAtLeastOneTagFromCurrentContent|Tags"),
            custom("ExcludeCurrentItem"),
            SearchStringModel(type="location", value="/sitecore/content"),
        ]
        once = resolver.resolve(models, context_item)
        twice = resolver.resolve(once, context_item)
        assert twice == once
        assert not any(is_context_token(m) for m in once)

    def test_input_is_not_modified(self, resolver, context_item):
        models = [custom("ExcludeCurrentItem")]
        resolver.resolve(models, context_item)
        assert models == [custom("ExcludeCurrentItem")]
