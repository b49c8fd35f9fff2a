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
Configuration module for the search service.
"""

import os

from dotenv import load_dotenv

from .data_models.config import SearchConfig

# Environment variable names
SITE_SEARCH_DATABASE_ENV = "SITE_SEARCH_DATABASE"
SITE_SEARCH_INDEX_NAME_ENV = "SITE_SEARCH_INDEX_NAME"
SITE_SEARCH_DEFAULT_SITE_ENV = "SITE_SEARCH_DEFAULT_SITE"
SITE_SEARCH_PRIVILEGED_SITE_ENV = "SITE_SEARCH_PRIVILEGED_SITE"
SITE_SEARCH_GEOLOCATION_KEY_ENV = "SITE_SEARCH_GEOLOCATION_KEY"
SITE_SEARCH_DEFAULT_PAGE_SIZE_ENV = "SITE_SEARCH_DEFAULT_PAGE_SIZE"
SITE_SEARCH_LANGUAGE_DELIMITERS_ENV = "SITE_SEARCH_LANGUAGE_DELIMITERS"
SITE_SEARCH_FACET_FIELDS_ENV = "SITE_SEARCH_FACET_FIELDS"

# Environment variable -> SearchConfig field, for the plain string settings.
_STRING_SETTINGS = {
    SITE_SEARCH_DATABASE_ENV: "database",
    SITE_SEARCH_INDEX_NAME_ENV: "index_name",
    SITE_SEARCH_DEFAULT_SITE_ENV: "default_site",
    SITE_SEARCH_PRIVILEGED_SITE_ENV: "privileged_site",
    SITE_SEARCH_GEOLOCATION_KEY_ENV: "geolocation_key",
    SITE_SEARCH_LANGUAGE_DELIMITERS_ENV: "language_delimiters",
}


def _load_env_file() -> None:
    """Load .env file if present in the current directory."""
    load_dotenv()


def _parse_csv(value: str) -> list[str] | None:
    """
    Parse a comma-separated value into a list of strings.

    Args:
        value: The comma-separated value to parse

    Returns:
        List of strings if value is not empty, None otherwise
    """
    if not value or not value.strip():
        return None

    # Split by comma and strip whitespace from each item
    items = [item.strip() for item in value.split(",")]
    # Filter out empty items
    return [item for item in items if item]


def get_search_config() -> SearchConfig:
    """
    Get search configuration from environment variables.

    Every setting is optional; unset variables keep the SearchConfig defaults.

    Returns:
        SearchConfig object containing the configuration

    Raises:
        ValueError: If a configured value is invalid
    """
    # Load .env file if present
    _load_env_file()

    # Build config data, only including fields that are provided
    config_data = {}
    for env_name, field_name in _STRING_SETTINGS.items():
        value = os.getenv(env_name)
        if value:
            config_data[field_name] = value

    page_size = os.getenv(SITE_SEARCH_DEFAULT_PAGE_SIZE_ENV)
    if page_size:
        try:
            config_data["default_page_size"] = int(page_size)
        except ValueError:
            raise ValueError(
                f"{SITE_SEARCH_DEFAULT_PAGE_SIZE_ENV} must be an integer, got '{page_size}'"
            ) from None

    facet_fields = _parse_csv(os.getenv(SITE_SEARCH_FACET_FIELDS_ENV, ""))
    if facet_fields:
        config_data["facet_fields"] = facet_fields

    return SearchConfig.model_validate(config_data)
