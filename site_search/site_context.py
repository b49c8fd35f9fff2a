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
Scoped site-context switching.

The base query of a search is built under a privileged site context so that
configuration items invisible to the requesting site can still be read. The
switch is held in a context variable and always restored on exit, including
when the wrapped block raises.
"""

import contextvars
import logging
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)

_current_site: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "site_search_current_site", default=None
)


def get_current_site() -> str | None:
    """Returns the site context override active for the caller, if any."""
    return _current_site.get()


@contextmanager
def switch_site(site_name: str) -> Iterator[str]:
    """Makes `site_name` the active site context for the duration of the block."""
    token = _current_site.set(site_name)
    logger.debug("Switched site context to '%s'", site_name)
    try:
        yield site_name
    finally:
        _current_site.reset(token)
        logger.debug("Restored site context from '%s'", site_name)
