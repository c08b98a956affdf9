"""Tests for the jlcsearch catalog client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from jlc_parts_engine.cache import ResultCache
from jlc_parts_engine.client import (
    CatalogResponseError,
    CatalogUnavailableError,
    JLCSearchClient,
    encode_params,
    get_candidates,
)
from jlc_parts_engine.components import Capacitor, from_source_component
from jlc_parts_engine.engine import build_query


def _mock_response(body, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body
    return response


class TestEncodeParams:
    def test_sorted_with_json_flag(self):
        assert encode_params({"resistance": 1000, "package": "0603"}) == "json=true&package=0603&resistance=1000"

    def test_order_insensitive(self):
        a = encode_params({"num_pins": 8, "gender": "male", "pitch": 2.54})
        b = encode_params({"pitch": 2.54, "gender": "male", "num_pins": 8})
        assert a == b

    def test_none_dropped(self):
        assert encode_params({"package": None, "resistance": 10}) == "json=true&resistance=10"

    @pytest.mark.parametrize("value,expected", [
        (10000.0, "10000"),
        (2.54, "2.54"),
        (1e-7, "1e-07"),
        (True, "true"),
        (False, "false"),
        ("male", "male"),
    ])
    def test_value_encoding(self, value, expected):
        assert encode_params({"v": value}) == f"json=true&v={expected}"

    def test_url_encoding(self):
        assert encode_params({"package": "SOT-23 3L"}) == "json=true&package=SOT-23+3L"


class TestGetCandidates:
    def test_list(self):
        assert get_candidates({"resistors": [{"lcsc": 1}]}, "resistors") == [{"lcsc": 1}]

    def test_missing_or_null(self):
        assert get_candidates({}, "resistors") == []
        assert get_candidates({"resistors": None}, "resistors") == []

    def test_not_a_list(self):
        with pytest.raises(CatalogResponseError):
            get_candidates({"resistors": "oops"}, "resistors")


class TestJLCSearchClient:
    @pytest.fixture
    def client(self):
        c = JLCSearchClient(base_url="https://catalog.test/")
        c._get_client()  # Eagerly init for patching in tests
        return c

    @pytest.mark.asyncio
    async def test_query(self, client):
        body = {"resistors": [{"lcsc": 25804, "is_basic": True}]}
        with patch.object(client._client, "get", new_callable=AsyncMock, return_value=_mock_response(body)) as mock_get:
            result = await client.query("resistors", {"resistance": 10000, "package": "0603"})

        assert result == body
        mock_get.assert_awaited_once_with(
            "https://catalog.test/resistors/list?json=true&package=0603&resistance=10000"
        )

    @pytest.mark.asyncio
    async def test_query_cached(self, client):
        """Identical lookups hit the network once."""
        body = {"capacitors": [{"lcsc": 1525}]}
        with patch.object(client._client, "get", new_callable=AsyncMock, return_value=_mock_response(body)) as mock_get:
            first = await client.query("capacitors", {"capacitance": 1e-7, "package": "0402"})
            second = await client.query("capacitors", {"package": "0402", "capacitance": 1e-7})

        assert first == second == body
        assert mock_get.await_count == 1
        assert len(client.cache) == 1

    @pytest.mark.asyncio
    async def test_query_different_params_not_shared(self, client):
        with patch.object(client._client, "get", new_callable=AsyncMock, return_value=_mock_response({"leds": []})) as mock_get:
            await client.query("leds", {"package": "0603"})
            await client.query("leds", {"package": "0805"})
            await client.query("leds", {"package": None})

        assert mock_get.await_count == 3

    @pytest.mark.asyncio
    async def test_injected_cache(self):
        cache = ResultCache()
        cache.set("diodes?json=true&package=SOD-123", {"diodes": [{"lcsc": 81598}]})
        client = JLCSearchClient(cache=cache)
        client._get_client()
        with patch.object(client._client, "get", new_callable=AsyncMock) as mock_get:
            result = await client.query("diodes", {"package": "SOD-123"})

        assert result == {"diodes": [{"lcsc": 81598}]}
        mock_get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_network_error(self, client):
        with patch.object(client._client, "get", new_callable=AsyncMock, side_effect=httpx.ConnectError("refused")):
            with pytest.raises(CatalogUnavailableError) as exc_info:
                await client.query("chips", {"package": "SOIC-8"})
        assert exc_info.value.category == "chips"
        assert len(client.cache) == 0

    @pytest.mark.asyncio
    async def test_http_error_status_not_cached(self, client):
        with patch.object(client._client, "get", new_callable=AsyncMock, return_value=_mock_response({}, status_code=503)) as mock_get:
            with pytest.raises(CatalogUnavailableError, match="HTTP 503"):
                await client.query("chips", {"package": "SOIC-8"})
            with pytest.raises(CatalogUnavailableError):
                await client.query("chips", {"package": "SOIC-8"})

        assert mock_get.await_count == 2
        assert len(client.cache) == 0

    @pytest.mark.asyncio
    async def test_invalid_json(self, client):
        response = _mock_response(None)
        response.json.side_effect = ValueError("Expecting value")
        with patch.object(client._client, "get", new_callable=AsyncMock, return_value=response):
            with pytest.raises(CatalogResponseError, match="not valid JSON"):
                await client.query("fuses", {"package": "1206"})

    @pytest.mark.asyncio
    async def test_non_object_body(self, client):
        with patch.object(client._client, "get", new_callable=AsyncMock, return_value=_mock_response([1, 2])):
            with pytest.raises(CatalogResponseError):
                await client.query("fuses", {"package": "1206"})

    @pytest.mark.asyncio
    async def test_close(self, client):
        await client.close()
        assert client._client is None
        await client.close()  # Idempotent


class TestEncodeParsedValues:
    """Parsed SI strings and equivalent literals share one signature."""

    @pytest.mark.parametrize("raw,literal", [
        ("4.7nF", 4.7e-9),
        ("2.2nF", 2.2e-9),
        ("12.5pF", 12.5e-12),
    ])
    def test_capacitance(self, raw, literal):
        from_string = build_query(from_source_component({"ftype": "simple_capacitor", "capacitance": raw}), "0603")
        from_number = build_query(Capacitor(capacitance=literal), "0603")
        assert encode_params(from_string[1]) == encode_params(from_number[1])

    def test_no_float_noise(self):
        assert encode_params({"capacitance": 4.7 * 1e-9}) == "capacitance=4.7e-09&json=true"
