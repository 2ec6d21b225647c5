"""
Configuration management for raw data anonymization.
"""

import os
import logging
import ipaddress
from typing import Dict, Optional

import yaml
from dotenv import load_dotenv, find_dotenv

from privacy.exceptions import ConfigError
from privacy.geo import LOCATION_COLUMNS, LocationProvider, StaticLocationProvider
from privacy.ip import MAX_MASK_LENGTH


DEFAULT_BATCH_SIZE = 2500
DEFAULT_IP_MASK_LENGTH = 2


class PrivacyConfig:
    """Configuration loader for the anonymization tool.

    Values come from the environment (a ``.env`` file is loaded first) and
    may be supplemented by a YAML file named in ``PRIVACY_CONFIG``.
    Environment variables take precedence over the YAML file.
    """

    def __init__(self, config_file: Optional[str] = None):
        self.logger = logging.getLogger(__name__)
        self.config_file = config_file

        self._load_env()
        self._load_yaml()

    def _load_env(self):
        """Load environment variables from .env file."""
        env_file = find_dotenv(usecwd=True)
        load_dotenv(env_file)
        self.logger.debug(f"Loaded environment from {env_file or '(none)'}")

        self.db_url = os.getenv('PRIVACY_DB_URL')
        self.db_username = os.getenv('PRIVACY_DB_USERNAME', 'root')
        self.db_password = os.getenv('PRIVACY_DB_PASSWORD', '')
        self.db_server = os.getenv('PRIVACY_DB_SERVER', '127.0.0.1')
        self.db_port = os.getenv('PRIVACY_DB_PORT', '3306')
        self.db_name = os.getenv('PRIVACY_DB_NAME', 'matomo')

        if self.config_file is None:
            self.config_file = os.getenv('PRIVACY_CONFIG')

    def _load_yaml(self):
        """Load optional YAML configuration."""
        yaml_config = {}
        if self.config_file:
            if not os.path.exists(self.config_file):
                raise ConfigError(f"Config file not found: {self.config_file}")

            with open(self.config_file, 'r') as f:
                yaml_config = yaml.safe_load(f) or {}

            if not isinstance(yaml_config, dict):
                raise ConfigError(f"Config file must contain a mapping: {self.config_file}")

            self.logger.debug(f"Loaded config from {self.config_file}")

        self.ip_mask_length = self._int_setting(
            'PRIVACY_IP_MASK_LENGTH', yaml_config.get('ip_mask_length'), DEFAULT_IP_MASK_LENGTH)
        self.batch_size = self._int_setting(
            'PRIVACY_BATCH_SIZE', yaml_config.get('batch_size'), DEFAULT_BATCH_SIZE)

        if not 0 <= self.ip_mask_length <= MAX_MASK_LENGTH:
            raise ConfigError(f"IP mask length must be between 0 and {MAX_MASK_LENGTH}, got {self.ip_mask_length}")
        if self.batch_size < 1:
            raise ConfigError(f"Batch size must be positive, got {self.batch_size}")

        self.locations = self._locations_setting(yaml_config.get('locations'))

    @staticmethod
    def _int_setting(env_name, yaml_value, default) -> int:
        raw = os.getenv(env_name)
        if raw is None:
            raw = yaml_value if yaml_value is not None else default
        try:
            return int(raw)
        except (TypeError, ValueError):
            raise ConfigError(f"{env_name} must be an integer, got {raw!r}")

    @staticmethod
    def _locations_setting(raw) -> Dict[str, Dict]:
        """Normalize the YAML ``locations`` mapping of masked IP -> location."""
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise ConfigError("locations must map IP addresses to locations")

        locations = {}
        for ip, location in raw.items():
            try:
                address = ipaddress.ip_address(str(ip))
            except ValueError:
                raise ConfigError(f"locations: '{ip}' is not an IP address")
            if not isinstance(location, dict):
                raise ConfigError(f"locations: entry for {ip} must be a mapping")
            unknown = set(location) - set(LOCATION_COLUMNS.values())
            if unknown:
                raise ConfigError(f"locations: unknown keys for {ip}: {', '.join(sorted(unknown))}")
            locations[str(address)] = dict(location)
        return locations

    def location_provider(self) -> Optional[LocationProvider]:
        """Provider for the configured locations, None when there are none."""
        if not self.locations:
            return None
        return StaticLocationProvider(self.locations)

    @property
    def connection_string(self) -> str:
        """SQLAlchemy URL for the record store."""
        if self.db_url:
            return self.db_url
        return (f"mysql+pymysql://{self.db_username}:{self.db_password}"
                f"@{self.db_server}:{self.db_port}/{self.db_name}")
