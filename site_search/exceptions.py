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
Exceptions raised by the search package.

Absent configuration (no home item, no site item, malformed context item id,
blank query or language) is never an error: the predicate families fall back to
an always-true or always-false predicate instead.
"""


class SiteSearchError(Exception):
    """Base class for all site-search errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"{self.__class__.__name__}: {message}")


class IndexNotFoundError(SiteSearchError):
    """Raised when no search index is registered under the requested name."""


class InvalidSortOrderError(SiteSearchError, ValueError):
    """Raised when a sort-order token cannot be interpreted."""


class SnapshotLoadError(SiteSearchError):
    """Raised when a content snapshot cannot be read or validated."""
