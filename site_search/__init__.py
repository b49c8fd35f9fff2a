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
Query composition and execution for site search.
"""

from site_search.data_models.search import ContentPage, Coordinates, SearchRequest
from site_search.services import SearchService, is_geolocation_request
from site_search.version import __version__

__all__ = [
    "ContentPage",
    "Coordinates",
    "SearchRequest",
    "SearchService",
    "is_geolocation_request",
    "__version__",
]
