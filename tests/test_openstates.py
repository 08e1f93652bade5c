"""Unit tests for the Open States API client."""

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from civicpulse.exceptions import (
    ConfigurationMissing,
    ExternalCallFailure,
    MalformedResponse,
    ValidationFailure,
)
from civicpulse.services.openstates import (
    BILL_SEARCH_INCLUDES,
    OpenStatesAPIClient,
    parse_bills,
    validate_zip_code,
)


@pytest.fixture
def client():
    client = OpenStatesAPIClient()
    client.api_key = "test-key"
    client.jurisdiction = "California"
    return client


def mock_http(mock_client_class, payload=None, error=None):
    """Wire a patched httpx.AsyncClient to return payload or raise error."""
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.raise_for_status = MagicMock(side_effect=error)
    mock_response.json.return_value = payload

    mock_client_instance = MagicMock()
    mock_client_instance.get = AsyncMock(return_value=mock_response)
    mock_client_class.return_value.__aenter__ = AsyncMock(return_value=mock_client_instance)
    mock_client_class.return_value.__aexit__ = AsyncMock(return_value=None)
    return mock_client_instance


def person(name, jurisdiction="California", current_role=True):
    return {
        "id": f"ocd-person/{name}",
        "name": name,
        "jurisdiction": {"name": jurisdiction},
        "current_role": {"title": "Assemblymember", "district": "17"} if current_role else None,
    }


class TestValidateZipCode:
    """Tests for validate_zip_code."""

    def test_accepts_five_digits(self):
        """A five digit zip passes."""
        assert validate_zip_code("94110") == "94110"

    @pytest.mark.parametrize("value", ["", None, "9411", "941100", "abcde", "94 10"])
    def test_rejects_everything_else(self, value):
        """Anything but five digits is rejected."""
        with pytest.raises(ValidationFailure, match="valid 5-digit zip code"):
            validate_zip_code(value)


class TestParseBills:
    """Tests for parse_bills."""

    def test_skips_records_without_id(self):
        """Bill records without an id are skipped."""
        bills = parse_bills({"results": [{"id": "b1"}, {"title": "no id"}]})
        assert [bill.id for bill in bills] == ["b1"]

    def test_requires_results_list(self):
        """A body without a results list raises MalformedResponse."""
        with pytest.raises(MalformedResponse):
            parse_bills({"error": "nope"})


class TestRequests:
    """Request shaping and error translation."""

    @pytest.mark.asyncio
    async def test_missing_key(self, client):
        """A client without an API key raises ConfigurationMissing."""
        client.api_key = ""
        with pytest.raises(ConfigurationMissing):
            await client.search_bills()

    @pytest.mark.asyncio
    async def test_search_bills_params(self, client):
        """search_bills sends jurisdiction, sort and includes."""
        with patch("civicpulse.services.openstates.httpx.AsyncClient") as mock_client_class:
            http = mock_http(mock_client_class, {"results": [], "pagination": {}})

            await client.search_bills(page=2, q="housing", subject=["Housing", "Rent"])

            url = http.get.call_args.args[0]
            kwargs = http.get.call_args.kwargs
            assert url == "https://v3.openstates.org/bills"
            assert kwargs["headers"]["X-API-KEY"] == "test-key"
            assert kwargs["params"]["jurisdiction"] == "California"
            assert kwargs["params"]["page"] == 2
            assert kwargs["params"]["include"] == BILL_SEARCH_INCLUDES
            assert kwargs["params"]["subject"] == ["Housing", "Rent"]
            assert "session" not in kwargs["params"]

    @pytest.mark.asyncio
    async def test_fetch_recent_bills_sets_action_since(self, client):
        """fetch_recent_bills asks for actions since the lookback date."""
        with patch("civicpulse.services.openstates.httpx.AsyncClient") as mock_client_class:
            http = mock_http(mock_client_class, {"results": [{"id": "b1", "identifier": "AB 1"}]})

            bills = await client.fetch_recent_bills()

            assert bills[0].identifier == "AB 1"
            assert "action_since" in http.get.call_args.kwargs["params"]

    @pytest.mark.asyncio
    async def test_get_bill_strips_prefix(self, client):
        """get_bill drops the ocd-bill/ prefix from the path."""
        with patch("civicpulse.services.openstates.httpx.AsyncClient") as mock_client_class:
            http = mock_http(mock_client_class, {"id": "ocd-bill/abc"})

            await client.get_bill("ocd-bill/abc")

            assert http.get.call_args.args[0].endswith("/bills/ocd-bill/abc")

    @pytest.mark.asyncio
    async def test_http_error_becomes_external_failure(self, client):
        """HTTP error statuses become ExternalCallFailure."""
        request = httpx.Request("GET", "https://v3.openstates.org/bills")
        response = httpx.Response(429, request=request, text="slow down")
        error = httpx.HTTPStatusError("429", request=request, response=response)

        with patch("civicpulse.services.openstates.httpx.AsyncClient") as mock_client_class:
            mock_http(mock_client_class, error=error)

            with pytest.raises(ExternalCallFailure, match="429"):
                await client.search_bills()

    @pytest.mark.asyncio
    async def test_network_error_becomes_external_failure(self, client):
        """Network errors become ExternalCallFailure."""
        with patch("civicpulse.services.openstates.httpx.AsyncClient") as mock_client_class:
            http = mock_http(mock_client_class)
            http.get.side_effect = httpx.ConnectError("down")

            with pytest.raises(ExternalCallFailure):
                await client.search_bills()

    @pytest.mark.asyncio
    async def test_non_object_body_is_malformed(self, client):
        """A non-object JSON body raises MalformedResponse."""
        with patch("civicpulse.services.openstates.httpx.AsyncClient") as mock_client_class:
            mock_http(mock_client_class, ["not", "an", "object"])

            with pytest.raises(MalformedResponse):
                await client.search_bills()


class TestFetchRepresentatives:
    """Tests for fetch_representatives."""

    @pytest.mark.asyncio
    async def test_filters_jurisdiction_and_current_role(self, client):
        """Only current California legislators are kept."""
        people = [
            person("wiener"),
            person("pelosi", jurisdiction="United States"),
            person("retired", current_role=False),
        ]
        with patch("civicpulse.services.openstates.httpx.AsyncClient") as mock_client_class:
            http = mock_http(mock_client_class, {"results": people})

            result = await client.fetch_representatives("94110")

            assert [rep.name for rep in result["results"]] == ["wiener"]
            assert result["coordinates"] == {"lat": 37.7486, "lng": -122.4154}
            assert result["zipCode"] == "94110"
            assert http.get.call_args.kwargs["params"] == {"lat": 37.7486, "lng": -122.4154}

    @pytest.mark.asyncio
    async def test_unknown_zip_uses_default_point(self, client):
        """An unmapped zip is looked up at City Hall."""
        with patch("civicpulse.services.openstates.httpx.AsyncClient") as mock_client_class:
            mock_http(mock_client_class, {"results": []})

            result = await client.fetch_representatives("10001")

            assert result["coordinates"] == {"lat": 37.7793, "lng": -122.4193}

    @pytest.mark.asyncio
    async def test_invalid_zip_makes_no_request(self, client):
        """An invalid zip fails before any request."""
        with patch("civicpulse.services.openstates.httpx.AsyncClient") as mock_client_class:
            with pytest.raises(ValidationFailure):
                await client.fetch_representatives("abc")
            mock_client_class.assert_not_called()
