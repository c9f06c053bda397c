#!/usr/bin/env python3
"""
Configuration Manager

Loads config.toml and builds the immutable DNSPod settings passed to the
reconciler.

Created: 2025-10-27
Author: Manuel Ziel
License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

# Standard library imports
import os
import tomllib
from dataclasses import dataclass
from typing import Dict, Any, List, Optional

# Internal imports
from .encryption import EncryptionManager
from .exceptions import ConfigError, ValidationError
from .models import DEFAULT_TTL, Domain, ProviderCredential

CONFIG_ENV_VAR = "DNSPOD_DYNDNS_CONFIG"
DEFAULT_CONFIG_FILE = "config.toml"
DEFAULT_BASE_URL = "https://dnsapi.cn"

################################################################################
# DNSPOD SETTINGS - Immutable per run
################################################################################

@dataclass(frozen=True)
class DnspodConfig:
    """Credential, TTL and endpoint settings shared by every DNSPod call of a run."""

    credential: ProviderCredential
    ttl: str = DEFAULT_TTL
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = 30
    list_timeout: float = 10

################################################################################
# CONFIGURATION MANAGER CLASS - TOML Configuration
################################################################################

class ConfigManager:
    """Configuration handler for config.toml."""

    def __init__(self, config_path: Optional[str] = None) -> None:
        """Load and validate configuration. Raises ConfigError."""
        self.config_path = resolve_config_path(config_path)
        self.config_dir = os.path.dirname(os.path.abspath(self.config_path))
        self.config = self.load_config(self.config_path)

        self._load_debug_config()
        self._load_encryption_config()
        self._load_dnspod_config()
        self._load_network_config()
        self._load_daemon_config()

    ################################################################################
    # PUBLIC INTERFACE - Configuration Loading
    ################################################################################

    def load_config(self, path: str) -> Dict[str, Any]:
        """Load configuration from TOML file."""
        try:
            with open(path, "rb") as f:
                return tomllib.load(f)
        except FileNotFoundError:
            raise ConfigError(f"Configuration file not found: {path}")
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML syntax in {path}: {e}")
        except OSError as e:
            raise ConfigError(f"Error loading configuration from {path}: {e}")

    def dnspod_config(self) -> DnspodConfig:
        return DnspodConfig(
            credential=self.credential,
            ttl=self.dns_ttl,
            base_url=self.dnspod_base_url,
            timeout=self.dnspod_timeout,
        )

    ################################################################################
    # PRIVATE METHODS - Section Loaders
    ################################################################################

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.config.get(name, {})
        if not isinstance(section, dict):
            raise ConfigError(f"[{name}] must be a table")
        return section

    def _number(self, section_name: str, section: Dict[str, Any], key: str, default: float,
                integer: bool = False) -> float:
        """Positive number from a section. Raises ConfigError for strings, booleans or values <= 0."""
        value = section.get(key, default)
        expected = (int,) if integer else (int, float)
        if isinstance(value, bool) or not isinstance(value, expected) or value <= 0:
            kind = "a positive integer" if integer else "a positive number"
            raise ConfigError(f"[{section_name}] {key} must be {kind}, got {value!r}")
        return value

    def _load_debug_config(self) -> None:
        """Load debug config from [debug] section."""
        self.log_level = str(self._section("debug").get("level", "INFO")).upper()
        self.console_colors = self._section("debug").get("console_colors", True)

    def _load_encryption_config(self) -> None:
        """Load [encryption] section, resolve the key path next to the config file."""
        key_file = self._section("encryption").get("key_path", ".encryption_key")
        if not os.path.isabs(key_file):
            key_file = os.path.join(self.config_dir, key_file)
        self.encryption_key_path = key_file

    def _load_dnspod_config(self) -> None:
        """Load [dnspod] section: API token, endpoint, timeout and TTL."""
        dnspod = self._section("dnspod")

        token_id = str(dnspod.get("id", "")).strip()
        if not token_id:
            raise ConfigError("[dnspod] id is required")

        secret = str(dnspod.get("secret", "")).strip()
        encrypted_secret = str(dnspod.get("secret_encrypted", "")).strip()
        if encrypted_secret:
            manager = EncryptionManager(self.encryption_key_path, create=False)
            secret = manager.decrypt(encrypted_secret)
        if not secret:
            raise ConfigError("[dnspod] secret or secret_encrypted is required")

        self.credential = ProviderCredential(id=token_id, secret=secret)
        self.dnspod_base_url = dnspod.get("base_url", DEFAULT_BASE_URL)
        self.dnspod_timeout = self._number("dnspod", dnspod, "timeout", 30)

        ttl = dnspod.get("ttl")
        ttl = "" if ttl is None else str(ttl).strip()
        self.dns_ttl = ttl or DEFAULT_TTL

    def _load_network_config(self) -> None:
        """Load [ipv4], [ipv6] and [network] sections."""
        ipv4 = self._section("ipv4")
        ipv6 = self._section("ipv6")
        network = self._section("network")

        self.network_ipv4_enabled = ipv4.get("enabled", True)
        self.network_ipv4_detection_url = ipv4.get("url", "https://api.ipify.org")
        self.ipv4_domains = self._parse_domains("ipv4", ipv4.get("domains", []))

        self.network_ipv6_enabled = ipv6.get("enabled", False)
        self.network_ipv6_detection_url = ipv6.get("url", "https://api6.ipify.org")
        self.ipv6_domains = self._parse_domains("ipv6", ipv6.get("domains", []))

        self.network_timeout = self._number("network", network, "timeout", 10)
        self.network_retry_attempts = self._number("network", network, "retry_attempts", 3, integer=True)

    def _load_daemon_config(self) -> None:
        """Load daemon config from [daemon] section."""
        self.daemon_check_interval = self._number("daemon", self._section("daemon"), "check_interval", 300)

    def _parse_domains(self, section: str, values: Any) -> List[Domain]:
        if not isinstance(values, list):
            raise ConfigError(f"[{section}] domains must be a list")
        try:
            return [Domain.parse(str(value)) for value in values if str(value).strip()]
        except ValidationError as e:
            raise ConfigError(f"[{section}] {e}")


def resolve_config_path(config_path: Optional[str] = None) -> str:
    """--config argument, then $DNSPOD_DYNDNS_CONFIG, then ./config.toml."""
    if config_path:
        return config_path
    return os.environ.get(CONFIG_ENV_VAR) or os.path.join(os.getcwd(), DEFAULT_CONFIG_FILE)
