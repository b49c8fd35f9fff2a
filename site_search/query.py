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
Lazy, immutable query pipeline over the pages of a search index.

Every operation returns a new `CompositeQuery`; stages run in the order they
were added when the query is executed, so `query.skip(10).take(5)` and
`query.take(5).skip(10)` mean different things, as with any query builder.
"""

import itertools
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from site_search.data_models.search import ContentPage
from site_search.predicates import TRUE, Predicate, and_

Stage = Callable[[Iterable[ContentPage]], Iterable[ContentPage]]


class CompositeQuery:
    def __init__(
        self,
        source: Callable[[], Iterable[ContentPage]],
        stages: tuple[tuple[str, Stage], ...] = (),
        predicate: Predicate = TRUE,
    ) -> None:
        self._source = source
        self._stages = stages
        self._predicate = predicate

    @property
    def predicate(self) -> Predicate:
        """The AND of every predicate passed to `where` so far."""
        return self._predicate

    def _with_stage(
        self, description: str, stage: Stage, predicate: Predicate | None = None
    ) -> "CompositeQuery":
        return CompositeQuery(
            self._source,
            self._stages + ((description, stage),),
            self._predicate if predicate is None else predicate,
        )

    def where(self, predicate: Predicate) -> "CompositeQuery":
        if predicate is TRUE:
            return self

        def stage(pages: Iterable[ContentPage]) -> Iterator[ContentPage]:
            return (page for page in pages if predicate(page))

        return self._with_stage(
            f"where {predicate.description}", stage, and_(self._predicate, predicate)
        )

    def order_by(
        self,
        key: Callable[[ContentPage], Any],
        descending: bool = False,
        description: str = "key",
    ) -> "CompositeQuery":
        # sorted() is stable, so ties keep the order of the previous stage.
        def stage(pages: Iterable[ContentPage]) -> list[ContentPage]:
            return sorted(pages, key=key, reverse=descending)

        direction = "desc" if descending else "asc"
        return self._with_stage(f"order by {description} {direction}", stage)

    def skip(self, count: int) -> "CompositeQuery":
        if count < 0:
            raise ValueError(f"skip count must be non-negative, got {count}")
        if count == 0:
            return self
        return self._with_stage(
            f"skip {count}", lambda pages: itertools.islice(pages, count, None)
        )

    def take(self, count: int) -> "CompositeQuery":
        if count < 0:
            raise ValueError(f"take count must be non-negative, got {count}")
        return self._with_stage(
            f"take {count}", lambda pages: itertools.islice(pages, count)
        )

    def describe(self) -> list[str]:
        return [description for description, _ in self._stages]

    def execute(self) -> list[ContentPage]:
        pages: Iterable[ContentPage] = self._source()
        for _, stage in self._stages:
            pages = stage(pages)
        return list(pages)

    def __iter__(self) -> Iterator[ContentPage]:
        return iter(self.execute())

    def __repr__(self) -> str:
        return f"CompositeQuery({' | '.join(self.describe()) or 'all'})"
