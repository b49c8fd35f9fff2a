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

import logging
import re

from site_search.constants import DEFAULT_LANGUAGE_DELIMITERS

logger = logging.getLogger(__name__)

# Language tags such as "en", "fr-FR", "zh-Hans-CN".
_LANGUAGE_TAG = re.compile(r"^[A-Za-z]{2,3}(-[A-Za-z0-9]{2,8})*$")


def split_terms(text: str | None) -> list[str]:
    """Splits free text into whitespace-delimited, non-empty terms."""
    if not text or not text.strip():
        return []
    return [term.strip() for term in text.split() if term.strip()]


def parse_languages(
    value: str | None, delimiters: str = DEFAULT_LANGUAGE_DELIMITERS
) -> list[str]:
    """
    Parses a language parameter into a list of language names.

    Entries are separated by any of the `delimiters` characters. Entries that
    are not valid language tags are dropped and duplicates are removed while
    keeping the first occurrence.

    Examples:
        >>> parse_languages("en,fr-FR")
        ['en', 'fr-FR']

        >>> parse_languages("  ")
        []
    """
    if not value or not value.strip():
        return []

    pattern = "[" + re.escape(delimiters) + "]"
    languages = []
    for entry in re.split(pattern, value):
        name = entry.strip()
        if not name:
            continue
        if not _LANGUAGE_TAG.match(name):
            logger.warning("Ignoring malformed language '%s'", name)
            continue
        if name.lower() not in (known.lower() for known in languages):
            languages.append(name)
    return languages
