"""Tests for the shared HTTP client used by the GBIF and world atlas sources."""

from __future__ import annotations

from unittest.mock import patch

import pytest
import requests
from urllib3.util.retry import Retry

from garden_havens import __version__
from garden_havens.services.http import (
    DEFAULT_RETRY,
    DEFAULT_TIMEOUT,
    USER_AGENT,
    create_session,
    session,
)


class TestDefaultRetry:
    """Verify retry strategy configuration."""

    def test_total_and_backoff(self) -> None:
        assert DEFAULT_RETRY.total == 4
        assert DEFAULT_RETRY.backoff_factor == 2

    @pytest.mark.parametrize("status", [429, 502, 503, 504])
    def test_retried_statuses(self, status: int) -> None:
        assert status in DEFAULT_RETRY.status_forcelist

    @pytest.mark.parametrize("status", [400, 404, 500])
    def test_not_retried(self, status: int) -> None:
        assert status not in DEFAULT_RETRY.status_forcelist

    def test_only_safe_methods(self) -> None:
        allowed = DEFAULT_RETRY.allowed_methods
        assert "GET" in allowed
        assert "POST" not in allowed

    def test_status_left_to_caller(self) -> None:
        assert DEFAULT_RETRY.raise_on_status is False


class TestCreateSession:
    """Verify session factory."""

    @pytest.mark.parametrize("url", ["https://api.gbif.org", "http://example.com"])
    def test_adapter_has_retry(self, url: str) -> None:
        adapter = create_session().get_adapter(url)
        assert isinstance(adapter, requests.adapters.HTTPAdapter)
        assert adapter.max_retries.total == 4

    def test_custom_retry(self) -> None:
        s = create_session(retry=Retry(total=10, backoff_factor=1))
        assert s.get_adapter("https://api.gbif.org").max_retries.total == 10

    def test_user_agent_header(self) -> None:
        s = create_session()
        assert s.headers["User-Agent"] == USER_AGENT
        assert USER_AGENT == f"garden-havens/{__version__}"

    def test_default_timeout_injected(self) -> None:
        s = create_session(timeout=42)
        prep = requests.Request("GET", "https://api.gbif.org/v1/species/match").prepare()
        with patch.object(
            requests.adapters.HTTPAdapter, "send", return_value=requests.Response()
        ) as mock_send:
            s.send(prep)
            assert mock_send.call_args.kwargs["timeout"] == 42

    def test_explicit_timeout_not_overridden(self) -> None:
        s = create_session(timeout=42)
        prep = requests.Request("GET", "https://api.gbif.org/v1/species/match").prepare()
        with patch.object(
            requests.adapters.HTTPAdapter, "send", return_value=requests.Response()
        ) as mock_send:
            s.send(prep, timeout=99)
            assert mock_send.call_args.kwargs["timeout"] == 99


class TestModuleSession:
    """Verify the module-level singleton."""

    def test_session_is_configured(self) -> None:
        assert session.get_adapter("https://api.gbif.org").max_retries.total == 4
        assert session.headers["User-Agent"] == USER_AGENT

    def test_default_timeout(self) -> None:
        assert DEFAULT_TIMEOUT == 30
