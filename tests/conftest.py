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
Global pytest configuration and fixtures.

Pytest automatically discovers and loads this file. Fixtures defined here are
available to all tests in this directory and its subdirectories without
needing to import them explicitly.
"""

import os
from unittest.mock import patch

import pytest
from site_search.data_models.items import Item
from site_search.data_models.search import ContentPage

# Fixed ids for a small tenant: /sitecore/content/Tenant/Site/{Home,Settings,...}
SITE_ID = "{11111111-1111-1111-1111-111111111111}"
HOME_ID = "{22222222-2222-2222-2222-222222222222}"
SETTINGS_ID = "{33333333-3333-3333-3333-333333333333}"
SHARED_ID = "{44444444-4444-4444-4444-444444444444}"
MEDIA_ID = "{55555555-5555-5555-5555-555555555555}"
SCOPE_ID = "{66666666-6666-6666-6666-666666666666}"
TAG_RED_ID = "{77777777-7777-7777-7777-777777777777}"
TAG_BLUE_ID = "{88888888-8888-8888-8888-888888888888}"


def short(item_id: str) -> str:
    return item_id.strip("{}").replace("-", "").lower()


@pytest.fixture(autouse=True)
def clean_env():
    """
    Automatically clear environment variables for all tests to ensure
    tests are hermetic and don't depend on the host environment.
    """
    with patch.dict(os.environ, {}, clear=True):
        yield


@pytest.fixture(autouse=True)
def mock_load_dotenv():
    """
    Automatically mock load_dotenv for all tests to prevent
    loading environment variables from local .env files.
    """
    with patch("site_search.config.load_dotenv"):
        yield


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """A fixture to isolate tests from .env files and existing env vars."""
    monkeypatch.chdir(tmp_path)

    # This inner function will be the fixture's return value
    def _patch_env(env_vars):
        return patch.dict(os.environ, env_vars, clear=True)

    return _patch_env


@pytest.fixture
def make_page():
    """Builds a ContentPage with sensible defaults."""

    def _make_page(item_id: str, *ancestors: str, **overrides) -> ContentPage:
        item_short = short(item_id) if item_id.startswith("{") else item_id
        raw_path = tuple(short(a) for a in ancestors) + (item_short,)
        data = {"item_id": item_short, "raw_path": raw_path, "name": item_short}
        data.update(overrides)
        return ContentPage(**data)

    return _make_page


@pytest.fixture
def home_item():
    return Item(id=HOME_ID, name="Home", path="/sitecore/content/Tenant/Site/Home")


@pytest.fixture
def site_item():
    return Item(id=SITE_ID, name="Site", path="/sitecore/content/Tenant/Site")


# Content items backing the indexed pages below.
RED_SHOES_ID = "{a1000000-0000-0000-0000-000000000001}"
BLUE_SHOES_ID = "{a1000000-0000-0000-0000-000000000002}"
RED_HAT_ID = "{a1000000-0000-0000-0000-000000000003}"
HIDDEN_ID = "{a1000000-0000-0000-0000-000000000004}"
OLD_VERSION_ID = "{a1000000-0000-0000-0000-000000000005}"
GUIDE_ID = "{a1000000-0000-0000-0000-000000000006}"
CATALOGUE_ID = "{a1000000-0000-0000-0000-000000000007}"
STORE_ID = "{a1000000-0000-0000-0000-000000000008}"
GERMAN_ID = "{a1000000-0000-0000-0000-000000000009}"
STALE_ID = "{a1000000-0000-0000-0000-00000000000a}"

SITE_PATH = "/sitecore/content/Tenant/Site"


@pytest.fixture
def snapshot():
    """A small site: home pages, shared content, media and one store."""
    from site_search.clients import Snapshot

    def item(item_id, path, **fields):
        return {"id": item_id, "name": path.rsplit("/", 1)[1], "path": path, "fields": fields}

    def page(item_id, ancestors, name, content, **extra):
        data = {
            "item_id": short(item_id),
            "name": name,
            "raw_path": [short(a) for a in ancestors] + [short(item_id)],
            "aggregated_content": content,
        }
        data.update(extra)
        return data

    home_path = (SITE_ID, HOME_ID)
    return Snapshot.model_validate(
        {
            "items": [
                item(SITE_ID, SITE_PATH),
                item(HOME_ID, f"{SITE_PATH}/Home"),
                item(
                    SETTINGS_ID,
                    f"{SITE_PATH}/Settings",
                    AssociatedContent=SHARED_ID,
                    AssociatedMedia=MEDIA_ID,
                ),
                item(SHARED_ID, "/sitecore/content/Tenant/Shared"),
                item(MEDIA_ID, "/sitecore/media library/Site"),
                item(
                    SCOPE_ID,
                    f"{SITE_PATH}/Data/Scopes/Shoes",
                    ScopeQuery="custom:category|shoes;custom:ExcludeCurrentItem",
                    BoostedContent=SHARED_ID,
                ),
                item(RED_SHOES_ID, f"{SITE_PATH}/Home/Red Shoes", Tags=TAG_RED_ID),
                item(BLUE_SHOES_ID, f"{SITE_PATH}/Home/Blue Shoes", Tags=TAG_BLUE_ID),
                item(RED_HAT_ID, f"{SITE_PATH}/Home/Red Hat"),
                item(HIDDEN_ID, f"{SITE_PATH}/Home/Hidden"),
                item(OLD_VERSION_ID, f"{SITE_PATH}/Home/Old"),
                item(GUIDE_ID, "/sitecore/content/Tenant/Shared/Guide"),
                item(CATALOGUE_ID, "/sitecore/media library/Site/Catalogue"),
                item(STORE_ID, f"{SITE_PATH}/Stores/Amsterdam"),
                item(GERMAN_ID, f"{SITE_PATH}/Home/Schuhe"),
            ],
            "pages": [
                page(RED_SHOES_ID, home_path, "Red Shoes", "red leather shoes",
                     fields={"category": ["shoes"], "tags": [short(TAG_RED_ID)]}),
                page(BLUE_SHOES_ID, home_path, "Blue Shoes", "blue canvas shoes",
                     fields={"category": ["shoes"], "tags": [short(TAG_BLUE_ID)]}),
                page(RED_HAT_ID, home_path, "Red Hat", "red wool hat",
                     language="fr", fields={"category": ["hats"]}),
                page(HIDDEN_ID, home_path, "Hidden", "red shoes hidden",
                     is_searchable=False),
                page(OLD_VERSION_ID, home_path, "Old", "red shoes old",
                     latest_version=False),
                page(GUIDE_ID, (SHARED_ID,), "Shoe Guide", "red shoes guide",
                     fields={"category": ["shoes"]}),
                page(CATALOGUE_ID, (MEDIA_ID,), "Catalogue", "red shoes catalogue",
                     is_searchable=False),
                page(STORE_ID, (SITE_ID,), "Amsterdam Store", "shoes store",
                     is_poi=True, location={"latitude": 52.37, "longitude": 4.89}),
                page(GERMAN_ID, home_path, "Schuhe", "rote schuhe", language="de"),
                page(STALE_ID, home_path, "Stale", "red shoes deleted"),
            ],
            "sites": {"website": f"{SITE_PATH}/Home"},
            "index_name": "test_index",
        }
    )


@pytest.fixture
def snapshot_file(snapshot, tmp_path):
    path = tmp_path / "snapshot.json"
    path.write_text(snapshot.model_dump_json(), encoding="utf-8")
    return path
