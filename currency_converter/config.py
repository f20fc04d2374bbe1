"""Configuration management for the currency converter."""
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

from currency_converter.utils.errors import ConfigurationError
from currency_converter.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

API_KEY_ENV = "FREECURRENCYAPI_API_KEY"
CONFIG_PATH_ENV = "CURRENCY_CONVERTER_CONFIG"
ROOT_ENV = "CURRENCY_CONVERTER_ROOT"


def find_project_root(start: Optional[Path] = None) -> Path:
    """Walk up from ``start`` (or the cwd) to the first directory holding config.yaml.

    Honors CURRENCY_CONVERTER_ROOT if set.
    """
    env_root = os.getenv(ROOT_ENV)
    if env_root:
        return Path(env_root).expanduser().resolve()

    here = (start or Path.cwd()).resolve()
    for p in [here] + list(here.parents):
        if (p / "config.yaml").exists() or (p / "pyproject.toml").exists():
            return p
    return here


def default_config_path() -> Path:
    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return find_project_root() / "config.yaml"


class Config:
    """Application configuration."""

    def __init__(self, config_path: Optional[str] = None, configure_logging: bool = True):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML configuration file
            configure_logging: Apply the ``logging`` section on load
        """
        self.config_path = Path(config_path) if config_path else default_config_path()
        self._config: Dict[str, Any] = {}
        self._load(configure_logging)

    def _load(self, configure_logging: bool) -> None:
        """Load configuration from YAML and environment."""
        load_dotenv()

        if not self.config_path.exists():
            raise ConfigurationError(f"Config file not found: {self.config_path}")

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not self._config:
            raise ConfigurationError(f"Empty configuration file: {self.config_path}")

        self._validate()

        if configure_logging:
            log_config = self._config.get('logging', {}) or {}
            log_file = log_config.get('file')
            # app.debug forces DEBUG unless LOG_LEVEL is set explicitly
            level = 'DEBUG' if self.debug else log_config.get('level', 'INFO')
            setup_logging(
                level=os.getenv('LOG_LEVEL', level),
                log_file=str(self._resolve(log_file)) if log_file else None,
                format_type=log_config.get('format', 'json'),
                enabled=log_config.get('enabled', True),
                console=log_config.get('console', False),
            )

        logger.info("Configuration loaded successfully")

    def _validate(self) -> None:
        """Validate required configuration sections."""
        if not isinstance(self._config, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {self.config_path}")

        for section in ('app', 'api'):
            if section not in self._config:
                raise ConfigurationError(f"Missing required config section: {section}")

        provider = self.provider
        if provider not in ('freecurrencyapi', 'static'):
            raise ConfigurationError(f"Unsupported api.provider: {provider}")

        if provider == 'static' and not self.get('api.static.rates'):
            raise ConfigurationError("Missing api.static.rates in config")

    def _resolve(self, path_str: str) -> Path:
        p = Path(path_str).expanduser()
        if p.is_absolute():
            return p
        return (self.config_path.resolve().parent / p).resolve()

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-separated key.

        Args:
            key: Dot-separated key (e.g., "api.freecurrencyapi.base_url")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value: Any = self._config
        for k in key.split('.'):
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default
        return value

    @property
    def app_name(self) -> str:
        return self.get('app.name', 'Currency Converter')

    @property
    def debug(self) -> bool:
        return bool(self.get('app.debug', False))

    @property
    def provider(self) -> str:
        return self.get('api.provider', 'freecurrencyapi')

    @property
    def api_base_url(self) -> str:
        return self.get('api.freecurrencyapi.base_url', 'https://api.freecurrencyapi.com/v1')

    @property
    def api_timeout(self) -> float:
        return float(self.get('api.freecurrencyapi.timeout', 10))

    @property
    def base_currency(self) -> str:
        key = 'api.static.base_currency' if self.provider == 'static' else 'api.freecurrencyapi.base_currency'
        return str(self.get(key, 'USD')).upper()

    @property
    def currencies(self) -> List[str]:
        """Currencies to request; empty means everything the service offers."""
        return [str(c).upper() for c in self.get('api.freecurrencyapi.currencies', []) or []]

    @property
    def api_key(self) -> Optional[str]:
        return os.getenv(API_KEY_ENV)

    @property
    def clear_screen(self) -> bool:
        return bool(self.get('display.clear_screen', True))

    @property
    def currency_columns(self) -> int:
        return int(self.get('display.currency_columns', 6))


_config: Optional[Config] = None


def load_config(config_path: Optional[str] = None) -> Config:
    """Load and return global configuration instance."""
    global _config
    if _config is None:
        _config = Config(config_path)
    return _config


def reset_config() -> None:
    """Forget the global instance so the next load_config() re-reads the file."""
    global _config
    _config = None
