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

from enum import Enum


class SearchOperation(str, Enum):
    """How a scope-query model contributes to the base query."""

    MUST = "must"
    SHOULD = "should"
    NOT = "not"


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    @classmethod
    def parse(cls, value: str) -> "SortDirection":
        normalized = value.strip().lower()
        if normalized in ("asc", "ascending"):
            return cls.ASCENDING
        if normalized in ("desc", "descending"):
            return cls.DESCENDING
        raise ValueError(f"Unknown sort direction '{value}'")
