"""Tests for the world atlas TopoJSON download."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock, patch

import pytest
import requests

from garden_havens.config import WORLD_ATLAS_URL
from garden_havens.datasources.world_atlas import WORLD_TOPOLOGY_PATH, fetch_countries_topology
from garden_havens.geo.topology import TopologyError


def _response(payload: object) -> MagicMock:
    resp = MagicMock(spec=requests.Response)
    resp.json.return_value = payload
    return resp


class TestFetchCountriesTopology:
    """Test fetch_countries_topology with a mocked session."""

    @patch("garden_havens.datasources.world_atlas.client.session.get")
    def test_default_url(self, mock_get: MagicMock, sample_topology: dict[str, Any]) -> None:
        mock_get.return_value = _response(sample_topology)
        assert fetch_countries_topology() == sample_topology
        mock_get.assert_called_once_with(WORLD_ATLAS_URL)

    @patch("garden_havens.datasources.world_atlas.client.session.get")
    def test_custom_url(self, mock_get: MagicMock, sample_topology: dict[str, Any]) -> None:
        mock_get.return_value = _response(sample_topology)
        fetch_countries_topology("https://example.com/land.json")
        mock_get.assert_called_once_with("https://example.com/land.json")

    @patch("garden_havens.datasources.world_atlas.client.session.get")
    def test_not_a_topology(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response({"type": "FeatureCollection", "features": []})
        with pytest.raises(TopologyError):
            fetch_countries_topology()

    @patch("garden_havens.datasources.world_atlas.client.session.get")
    def test_http_error(self, mock_get: MagicMock) -> None:
        resp = _response({})
        resp.raise_for_status.side_effect = requests.HTTPError("404")
        mock_get.return_value = resp
        with pytest.raises(requests.HTTPError):
            fetch_countries_topology()


class TestCachePath:
    """Test where the topology lives in the store."""

    def test_reference_tier(self) -> None:
        assert WORLD_TOPOLOGY_PATH.parts[0] == "reference"
        assert WORLD_TOPOLOGY_PATH.suffix == ".json"
