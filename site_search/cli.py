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
import json
import logging
import sys
from collections.abc import Callable
from typing import Any

import click

from .clients import create_search_service, load_snapshot
from .config import get_search_config
from .data_models.search import Coordinates, SearchRequest
from .exceptions import SiteSearchError
from .services import SearchService
from .version import __version__


def _parse_params(values: tuple[str, ...]) -> dict[str, str]:
    params = {}
    for value in values:
        key, sep, param_value = value.partition("=")
        if not key.strip():
            raise click.BadParameter(f"'{value}' is not KEY=VALUE", param_hint="--param")
        # A bare key is a presence marker, e.g. the geolocation flag.
        params[key.strip()] = param_value if sep else ""
    return params


def request_options(command: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by the commands that build a SearchRequest."""
    options = [
        click.argument("snapshot", type=click.Path(exists=True, dir_okay=False)),
        click.option("--query", "-q", default=None, help="Free-text query."),
        click.option("--scope", default=None, help="Scope item id(s) or path(s), pipe-delimited."),
        click.option("--language", "-l", default=None, help="Language(s), e.g. 'en,fr'."),
        click.option("--sort", "sort_order", default=None, help="Sort order, e.g. 'name,desc' or 'distance'."),
        click.option("--page-size", type=int, default=None, help="Results per page."),
        click.option("--offset", type=int, default=0, show_default=True, help="Results to skip."),
        click.option("--site", default=None, help="Site name."),
        click.option("--item-id", default=None, help="Context item id."),
        click.option("--lat", type=float, default=None, help="Center latitude."),
        click.option("--lon", type=float, default=None, help="Center longitude."),
        click.option("--param", "params", multiple=True, help="Query-string parameter KEY=VALUE (repeatable)."),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def _build(
    snapshot: str,
    query: str | None,
    scope: str | None,
    language: str | None,
    sort_order: str | None,
    page_size: int | None,
    offset: int,
    site: str | None,
    item_id: str | None,
    lat: float | None,
    lon: float | None,
    params: tuple[str, ...],
) -> tuple[SearchService, SearchRequest]:
    config = get_search_config()
    if (lat is None) != (lon is None):
        raise click.UsageError("--lat and --lon must be given together")
    center = Coordinates(latitude=lat, longitude=lon) if lat is not None else None
    request = SearchRequest(
        query=query,
        scope_id=scope,
        language=language,
        sort_order=sort_order,
        page_size=page_size or config.default_page_size,
        offset=offset,
        center=center,
        site=site,
        item_id=item_id,
        query_params=_parse_params(params),
    )
    service = create_search_service(load_snapshot(snapshot), config)
    return service, request


def _fail(error: Exception) -> None:
    click.echo(str(error), err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Site search - compose and run scoped content searches."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)


@cli.command()
@request_options
def search(**kwargs: Any) -> None:
    """Run a search against a content snapshot and print the matching items."""
    try:
        service, request = _build(**kwargs)
        items = service.search(request)
    except (SiteSearchError, ValueError) as e:
        _fail(e)
    click.echo(
        json.dumps(
            [{"id": item.id, "name": item.name, "path": item.path} for item in items],
            indent=2,
        )
    )


@cli.command()
@request_options
def query(**kwargs: Any) -> None:
    """Print the composed query for a request without executing it."""
    try:
        service, request = _build(**kwargs)
        composite, index_name = service.get_query(request)
    except (SiteSearchError, ValueError) as e:
        _fail(e)
    click.echo(
        json.dumps(
            {
                "index": index_name,
                "filter": composite.predicate.description,
                "stages": composite.describe(),
            },
            indent=2,
        )
    )


def main() -> None:
    """Main entry point for the CLI."""
    cli()
