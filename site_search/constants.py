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
Constants shared across the search package.
"""

# Item field names read from datasource, settings and context items.
SCOPE_QUERY_FIELD = "ScopeQuery"
ASSOCIATED_CONTENT_FIELD = "AssociatedContent"
ASSOCIATED_MEDIA_FIELD = "AssociatedMedia"
BOOSTED_CONTENT_FIELD = "BoostedContent"

# Multilist fields store their target ids separated by a pipe.
MULTILIST_SEPARATOR = "|"

# Presence of this query-string key switches the request to geolocation mode.
GEOLOCATION_QUERY_KEY = "g"

# Site whose security context is used while building the base query.
PRIVILEGED_SITE = "shell"

DEFAULT_DATABASE = "web"
DEFAULT_INDEX_NAME = "site_search_web_index"
DEFAULT_PAGE_SIZE = 20
DEFAULT_LANGUAGE_DELIMITERS = ",|;"

# Settings items live next to the home item under the site root.
SETTINGS_ITEM_NAME = "Settings"

# Facet parameter restricting point-of-interest results to a radius (km).
DISTANCE_FACET = "distance"
EARTH_RADIUS_KM = 6371.0088
