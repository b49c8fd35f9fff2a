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
Composable boolean predicates over `ContentPage`.

A `Predicate` wraps a plain function together with a human-readable
description. Combining predicates always builds a new object; operands are
never modified, so the same predicate can be reused across branches.

The TRUE and FALSE identities are module-level singletons and the
combinators short-circuit on them: `and_(TRUE, p)` and `or_(FALSE, p)` both
return `p` itself.
"""

import math
from collections.abc import Callable, Iterable

from site_search.constants import EARTH_RADIUS_KM
from site_search.data_models.search import ContentPage, Coordinates


class Predicate:
    __slots__ = ("_test", "description")

    def __init__(self, test: Callable[[ContentPage], bool], description: str) -> None:
        self._test = test
        self.description = description

    def __call__(self, page: ContentPage) -> bool:
        return bool(self._test(page))

    def __and__(self, other: "Predicate") -> "Predicate":
        return and_(self, other)

    def __or__(self, other: "Predicate") -> "Predicate":
        return or_(self, other)

    def __invert__(self) -> "Predicate":
        return not_(self)

    def __repr__(self) -> str:
        return f"Predicate({self.description})"

    def __str__(self) -> str:
        return self.description


TRUE = Predicate(lambda page: True, "TRUE")
FALSE = Predicate(lambda page: False, "FALSE")


def and_(left: Predicate, right: Predicate) -> Predicate:
    if left is TRUE:
        return right
    if right is TRUE:
        return left
    if left is FALSE or right is FALSE:
        return FALSE
    return Predicate(
        lambda page: left(page) and right(page),
        f"({left.description} AND {right.description})",
    )


def or_(left: Predicate, right: Predicate) -> Predicate:
    if left is FALSE:
        return right
    if right is FALSE:
        return left
    if left is TRUE or right is TRUE:
        return TRUE
    return Predicate(
        lambda page: left(page) or right(page),
        f"({left.description} OR {right.description})",
    )


def not_(predicate: Predicate) -> Predicate:
    if predicate is TRUE:
        return FALSE
    if predicate is FALSE:
        return TRUE
    return Predicate(lambda page: not predicate(page), f"NOT {predicate.description}")


def and_all(predicates: Iterable[Predicate]) -> Predicate:
    """Left-folds predicates with AND, starting from TRUE."""
    result = TRUE
    for predicate in predicates:
        result = and_(result, predicate)
    return result


def or_any(predicates: Iterable[Predicate]) -> Predicate:
    """Left-folds predicates with OR, starting from FALSE."""
    result = FALSE
    for predicate in predicates:
        result = or_(result, predicate)
    return result


# Field predicates. Each factory binds its argument when called, so building
# predicates inside a loop never shares the loop variable.


def path_contains(short_id: str) -> Predicate:
    """Matches the item with this short id and everything beneath it."""
    return Predicate(lambda page: short_id in page.raw_path, f"path={short_id}")


def is_searchable() -> Predicate:
    return Predicate(lambda page: page.is_searchable, "searchable")


def is_poi() -> Predicate:
    return Predicate(lambda page: page.is_poi, "poi")


def is_latest_version() -> Predicate:
    return Predicate(lambda page: page.latest_version, "latest_version")


def content_contains(term: str) -> Predicate:
    needle = term.lower()
    return Predicate(
        lambda page: needle in page.aggregated_content.lower(),
        f"content~{term!r}",
    )


def language_equals(language: str) -> Predicate:
    expected = language.lower()
    return Predicate(
        lambda page: page.language.lower() == expected, f"language={language}"
    )


def template_equals(short_id: str) -> Predicate:
    return Predicate(lambda page: page.template_id == short_id, f"template={short_id}")


def item_id_equals(short_id: str) -> Predicate:
    return Predicate(lambda page: page.item_id == short_id, f"id={short_id}")


def field_contains(field_name: str, value: str) -> Predicate:
    """Matches pages whose facet field holds `value` (case-insensitive)."""
    expected = value.lower()
    return Predicate(
        lambda page: any(v.lower() == expected for v in page.fields.get(field_name, ())),
        f"{field_name}={value}",
    )


def haversine_km(origin: Coordinates, target: Coordinates) -> float:
    """Great-circle distance between two points in kilometres."""
    lat1, lon1 = math.radians(origin.latitude), math.radians(origin.longitude)
    lat2, lon2 = math.radians(target.latitude), math.radians(target.longitude)
    a = (
        math.sin((lat2 - lat1) / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin((lon2 - lon1) / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def within_distance(center: Coordinates, radius_km: float) -> Predicate:
    return Predicate(
        lambda page: page.location is not None
        and haversine_km(center, page.location) <= radius_km,
        f"distance<={radius_km}km",
    )
