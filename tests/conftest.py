"""Pytest configuration and fixtures."""
import io

import pytest
import yaml
from rich.console import Console

from currency_converter.config import reset_config
from currency_converter.core.rates import RateTable
from currency_converter.utils.logging import session_id_ctx


SAMPLE_RATES = {"USD": 1, "EUR": 0.9, "JPY": 150, "COP": 4000}


def _write_config(path, provider="static", **overrides):
    config_data = {
        'app': {
            'name': 'Test Converter',
            'debug': False
        },
        'api': {
            'provider': provider,
            'freecurrencyapi': {
                'base_url': 'https://api.example.test/v1',
                'timeout': 5,
                'base_currency': 'USD',
                'currencies': [],
            },
            'static': {
                'base_currency': 'USD',
                'rates': dict(SAMPLE_RATES),
            },
        },
        'display': {
            'clear_screen': False,
            'currency_columns': 6,
        },
        'logging': {
            'enabled': True,
            'level': 'DEBUG',
            'format': 'text',
            'console': False,
        }
    }
    for section, values in overrides.items():
        config_data[section].update(values)

    with open(path, 'w') as f:
        yaml.dump(config_data, f, sort_keys=False)
    return str(path)


@pytest.fixture(autouse=True)
def _fresh_config():
    """Each test starts without a cached global config."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def _fresh_session_id():
    """Each test starts without a session id leaked from a previous test."""
    token = session_id_ctx.set(None)
    yield
    session_id_ctx.reset(token)


@pytest.fixture
def temp_config_file(tmp_path):
    """Create a temporary config file using the offline static provider."""
    return _write_config(tmp_path / "config.yaml")


@pytest.fixture
def http_config_file(tmp_path):
    """Create a temporary config file using the freecurrencyapi provider."""
    return _write_config(tmp_path / "config.yaml", provider="freecurrencyapi")


@pytest.fixture
def write_config(tmp_path):
    """Factory for configs with section overrides."""
    def _factory(provider="static", **overrides):
        return _write_config(tmp_path / "custom.yaml", provider=provider, **overrides)
    return _factory


@pytest.fixture
def sample_rates():
    return dict(SAMPLE_RATES)


@pytest.fixture
def rate_table():
    return RateTable(SAMPLE_RATES, base_currency="USD")


@pytest.fixture
def console():
    """Plain-text console that records everything printed."""
    return Console(file=io.StringIO(), width=120, color_system=None, force_terminal=False)
