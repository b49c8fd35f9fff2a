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
Tests for the command-line interface.
"""

import json
import os
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from conftest import GUIDE_ID, RED_SHOES_ID, STORE_ID
from site_search.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestSearchCommand:
    def test_search(self, runner, snapshot_file):
        result = runner.invoke(
            cli, ["search", str(snapshot_file), "--site", "website", "-q", "red shoes", "--page-size", "2"]
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert [entry["id"] for entry in payload] == [RED_SHOES_ID.upper(), GUIDE_ID.upper()]
        assert payload[0]["path"].endswith("/Home/Red Shoes")

    def test_geolocation_marker_param(self, runner, snapshot_file):
        result = runner.invoke(
            cli, ["search", str(snapshot_file), "--site", "website", "--param", "g"]
        )

        assert result.exit_code == 0, result.output
        assert [entry["id"] for entry in json.loads(result.stdout)] == [STORE_ID.upper()]

    def test_default_site_from_environment(self, runner, snapshot_file):
        with patch.dict(os.environ, {"SITE_SEARCH_DEFAULT_SITE": "website"}):
            result = runner.invoke(cli, ["search", str(snapshot_file), "-q", "guide"])

        assert result.exit_code == 0, result.output
        assert [entry["id"] for entry in json.loads(result.stdout)] == [GUIDE_ID.upper()]

    def test_invalid_sort_order_fails(self, runner, snapshot_file):
        result = runner.invoke(
            cli, ["search", str(snapshot_file), "--site", "website", "--sort", "name,sideways"]
        )

        assert result.exit_code == 1
        assert "InvalidSortOrderError" in result.output

    def test_latitude_requires_longitude(self, runner, snapshot_file):
        result = runner.invoke(cli, ["search", str(snapshot_file), "--lat", "52.3"])

        assert result.exit_code == 2
        assert "--lat and --lon must be given together" in result.output

    def test_invalid_snapshot(self, runner, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        result = runner.invoke(cli, ["search", str(path)])

        assert result.exit_code == 1
        assert "SnapshotLoadError" in result.output


class TestQueryCommand:
    def test_query(self, runner, snapshot_file):
        result = runner.invoke(
            cli, ["query", str(snapshot_file), "--site", "website", "-q", "red", "-l", "en"]
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["index"] == "test_index"
        assert "content~'red'" in payload["filter"]
        assert "language=en" in payload["filter"]
        assert payload["stages"][-1] == "order by boost desc"


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "version" in result.output
