"""
Unit tests for the warm-up worker.

The aggregator is mocked; no network calls are made.

Run: python3 -m pytest workers/__tests__/test_warmup_worker.py -v
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

from sourcing.models import Link
from workers.warmup_worker import handler, refresh_companies


def make_links(count: int):
    return [Link.create(title="t", url=f"https://e.com/{i}", source="test") for i in range(count)]


def make_mock_aggregator(counts: dict) -> MagicMock:
    """Create a mock aggregator whose refresh() returns counts[name] links."""
    aggregator = MagicMock()
    aggregator.refresh = AsyncMock(side_effect=lambda name: make_links(counts.get(name, 0)))
    return aggregator


class TestRefreshCompanies:

    def test_refreshes_each_company_in_order(self):
        aggregator = make_mock_aggregator({"Acme": 3, "Globex": 1})

        counts = asyncio.run(refresh_companies(aggregator, ["Acme", " ", "Globex "]))

        assert counts == {"Acme": 3, "Globex": 1}
        assert [c.args[0] for c in aggregator.refresh.await_args_list] == ["Acme", "Globex"]


class TestHandler:

    def test_event_company_names(self):
        aggregator = make_mock_aggregator({"Acme": 2})

        result = handler({"company_names": ["Acme"]}, None, aggregator=aggregator)

        assert result == {"status": "success", "refreshed": {"Acme": 2}}

    def test_event_company_names_as_string(self):
        aggregator = make_mock_aggregator({"Acme": 2, "Globex": 1})

        result = handler({"company_names": "Acme, Globex"}, None, aggregator=aggregator)

        assert result["refreshed"] == {"Acme": 2, "Globex": 1}
        assert aggregator.refresh.await_count == 2

    @patch("workers.warmup_worker.settings")
    def test_defaults_to_configured_names(self, mock_settings):
        mock_settings.get_scheduler_company_names.return_value = ["腾讯", "美团"]
        aggregator = make_mock_aggregator({"腾讯": 1})

        result = handler({}, None, aggregator=aggregator)

        assert result["refreshed"] == {"腾讯": 1, "美团": 0}

    @patch("workers.warmup_worker.get_aggregator")
    def test_uses_process_aggregator(self, mock_get_aggregator):
        mock_get_aggregator.return_value = make_mock_aggregator({"Acme": 1})

        result = handler(None, None)

        mock_get_aggregator.assert_called_once()
        assert result["status"] == "success"
