import asyncio

import httpx
import pytest

from currency_converter.config import Config
from currency_converter.providers import FreeCurrencyAPIClient, StaticRateProvider, get_provider
from currency_converter.utils.errors import RateFetchError


class DummyResponse:
    def __init__(self, data, status_code: int = 200, bad_json: bool = False):
        self._data = data
        self.status_code = status_code
        self._bad_json = bad_json

    def json(self):
        if self._bad_json:
            raise ValueError("not json")
        return self._data


class DummyClient:
    calls = []

    def __init__(self, timeout=None, response=None, error=None):
        self.timeout = timeout
        self._response = response or DummyResponse({"data": {"USD": 1, "EUR": 0.9, "JPY": 150}})
        self._error = error

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def get(self, url, params=None):
        DummyClient.calls.append((url, params))
        if self._error is not None:
            raise self._error
        return self._response


@pytest.fixture(autouse=True)
def _reset_calls():
    DummyClient.calls = []


@pytest.fixture
def no_sleep(monkeypatch):
    async def _sleep(_delay):
        return None
    monkeypatch.setattr(asyncio, "sleep", _sleep)


def _patch_client(monkeypatch, **kwargs):
    monkeypatch.setattr(
        httpx, "AsyncClient", lambda timeout=None: DummyClient(timeout=timeout, **kwargs)
    )


@pytest.mark.asyncio
async def test_fetch_rates_success(monkeypatch):
    _patch_client(monkeypatch)

    client = FreeCurrencyAPIClient(api_key="key", base_url="https://api.example.test/v1/")
    table = await client.fetch_rates()

    assert table.base_currency == "USD"
    assert table["EUR"] == 0.9
    url, params = DummyClient.calls[0]
    assert url == "https://api.example.test/v1/latest"
    assert params == {"apikey": "key", "base_currency": "USD"}


@pytest.mark.asyncio
async def test_fetch_rates_currency_filter_adds_base(monkeypatch):
    _patch_client(monkeypatch, response=DummyResponse({"data": {"EUR": 0.9, "COP": 4000}}))

    client = FreeCurrencyAPIClient(api_key="key", currencies=["eur", "cop"])
    table = await client.fetch_rates()

    assert table["USD"] == 1.0
    assert DummyClient.calls[0][1]["currencies"] == "EUR,COP"


@pytest.mark.asyncio
async def test_fetch_rates_requires_api_key(monkeypatch):
    _patch_client(monkeypatch)
    with pytest.raises(RateFetchError, match="API key"):
        await FreeCurrencyAPIClient(api_key=None).fetch_rates()
    assert DummyClient.calls == []


@pytest.mark.asyncio
async def test_fetch_rates_http_error_status(monkeypatch):
    _patch_client(
        monkeypatch,
        response=DummyResponse({"message": "Invalid authentication credentials"}, status_code=401),
    )
    with pytest.raises(RateFetchError, match="401.*Invalid authentication credentials"):
        await FreeCurrencyAPIClient(api_key="bad").fetch_rates()


@pytest.mark.asyncio
async def test_fetch_rates_missing_data(monkeypatch):
    _patch_client(monkeypatch, response=DummyResponse({"unexpected": True}))
    with pytest.raises(RateFetchError):
        await FreeCurrencyAPIClient(api_key="key").fetch_rates()


@pytest.mark.asyncio
async def test_fetch_rates_invalid_json(monkeypatch):
    _patch_client(monkeypatch, response=DummyResponse(None, bad_json=True))
    with pytest.raises(RateFetchError):
        await FreeCurrencyAPIClient(api_key="key").fetch_rates()


@pytest.mark.asyncio
async def test_fetch_rates_invalid_rate(monkeypatch):
    _patch_client(monkeypatch, response=DummyResponse({"data": {"USD": 1, "EUR": -1}}))
    with pytest.raises(RateFetchError):
        await FreeCurrencyAPIClient(api_key="key").fetch_rates()


@pytest.mark.asyncio
async def test_fetch_rates_network_error_is_retried(monkeypatch, no_sleep):
    _patch_client(monkeypatch, error=httpx.ConnectError("network down"))
    with pytest.raises(RateFetchError, match="network down"):
        await FreeCurrencyAPIClient(api_key="key").fetch_rates()
    assert len(DummyClient.calls) == 3


def test_from_config(http_config_file, monkeypatch):
    monkeypatch.setenv("FREECURRENCYAPI_API_KEY", "env-key")
    cfg = Config(http_config_file)

    client = FreeCurrencyAPIClient.from_config(cfg)
    assert client.api_key == "env-key"
    assert client.base_url == "https://api.example.test/v1"
    assert client.timeout == 5.0

    override = FreeCurrencyAPIClient.from_config(cfg, api_key="cli-key", base_currency="eur")
    assert override.api_key == "cli-key"
    assert override.base_currency == "EUR"


def test_get_provider(temp_config_file):
    cfg = Config(temp_config_file)
    assert isinstance(get_provider("static", cfg), StaticRateProvider)
    assert isinstance(get_provider("freecurrencyapi", cfg, api_key="k"), FreeCurrencyAPIClient)
    with pytest.raises(ValueError):
        get_provider("unknown", cfg)
