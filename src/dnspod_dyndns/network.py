#!/usr/bin/env python3
"""
Network Utilities Module

Public IPv4/IPv6 detection and change tracking.

Created: 2025-10-27
Author: Manuel Ziel
License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

import ipaddress
import logging
import re
import time
from typing import Optional, Tuple, Dict, Any

import requests

from .exceptions import NetworkError

IPV4_PATTERN = re.compile(r"(?<!\d)(?<!\d\.)(?:\d{1,3}\.){3}\d{1,3}(?!\d)(?!\.\d)")
IPV6_PATTERN = re.compile(r"[0-9a-fA-F]{0,4}(?::[0-9a-fA-F]{0,4}){2,7}")

################################################################################
# IP EXTRACTION
################################################################################

def extract_ip(text: str, version: int) -> Optional[str]:
    """Return the first valid address of the given version found in text.

    Detection services answer with a bare address, a JSON object or an HTML
    page, so the body is searched instead of parsed.
    """
    pattern = IPV4_PATTERN if version == 4 else IPV6_PATTERN
    for match in pattern.finditer(text or ""):
        try:
            address = ipaddress.ip_address(match.group(0))
        except ValueError:
            continue
        if address.version == version:
            return str(address)
    return None

################################################################################
# NETWORK DATA CLASS - IP Detection and State Management
################################################################################

class NetworkData:
    """Current and last seen public IP addresses."""

    def __init__(self, ipv4_address: Optional[str] = None, ipv6_address: Optional[str] = None) -> None:
        self.ipv4_address = ipv4_address
        self.ipv6_address = ipv6_address
        self.last_ipv4_address: Optional[str] = None
        self.last_ipv6_address: Optional[str] = None

        self.ipv4_enabled = True
        self.ipv6_enabled = True
        self.ipv4_detection_url = "https://api.ipify.org"
        self.ipv6_detection_url = "https://api6.ipify.org"
        self.timeout = 10
        self.retry_attempts = 3
        self.retry_delay = 2
        self.logger = logging.getLogger(__name__)

    ################################################################################
    # CONFIGURATION METHODS - Setup and Initialization
    ################################################################################

    def setup(self, ipv4_enabled: bool = True, ipv6_enabled: bool = True,
              ipv4_detection_url: Optional[str] = None, ipv6_detection_url: Optional[str] = None,
              timeout: Optional[int] = None, retry_attempts: Optional[int] = None,
              logger: Optional[Any] = None) -> None:
        """Configure detection URLs, timeout, retry attempts and logger."""
        self.ipv4_enabled = ipv4_enabled
        self.ipv6_enabled = ipv6_enabled

        if ipv4_detection_url:
            self.ipv4_detection_url = ipv4_detection_url
        if ipv6_detection_url:
            self.ipv6_detection_url = ipv6_detection_url
        if timeout is not None:
            self.timeout = timeout
        if retry_attempts is not None:
            self.retry_attempts = max(1, retry_attempts)
        if logger:
            self.logger = logger

    ################################################################################
    # IP ADDRESS DETECTION - Public IP Retrieval
    ################################################################################

    def load_current_ip_addresses(self) -> Tuple[Optional[str], Optional[str]]:
        """Load current public IP addresses. Disabled families yield None."""
        self.ipv4_address = self.get_current_public_ip(4) if self.ipv4_enabled else None
        self.ipv6_address = self.get_current_public_ip(6) if self.ipv6_enabled else None
        return self.ipv4_address, self.ipv6_address

    def get_current_public_ip(self, version: int) -> Optional[str]:
        """Fetch the public IPv4 or IPv6 address, retrying on failure. Returns None if every attempt fails."""
        url = self.ipv4_detection_url if version == 4 else self.ipv6_detection_url
        label = f"IPv{version}"

        for attempt in range(self.retry_attempts):
            try:
                address = self.fetch_public_ip(url, version)
                self.logger.debug(f"{label} address detected: {address}")
                return address
            except NetworkError as e:
                self.logger.warning(f"{label} detection failed (attempt {attempt + 1}/{self.retry_attempts}): {e}")

            if attempt < self.retry_attempts - 1:
                time.sleep(self.retry_delay)

        self.logger.error(f"Failed to fetch {label} address after {self.retry_attempts} attempts")
        return None

    def fetch_public_ip(self, url: str, version: int) -> str:
        """Single detection request.

        Raises:
            NetworkError: On timeout, connection failure or a response without an address
        """
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise NetworkError(f"Timeout after {self.timeout}s from {url}") from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Request to {url} failed: {e}") from e

        address = extract_ip(response.text, version) if response.status_code == 200 else None
        if not address:
            raise NetworkError(f"No IPv{version} address in response from {url} (HTTP {response.status_code})")
        return address

    ################################################################################
    # STATE MANAGEMENT - IP Change Detection
    ################################################################################

    def save_current_as_last(self) -> None:
        self.last_ipv4_address = self.ipv4_address
        self.last_ipv6_address = self.ipv6_address

    def has_ip_changed(self) -> Dict[str, bool]:
        """Returns dict with 'ipv4_changed' and 'ipv6_changed' bools."""
        return {
            'ipv4_changed': self.ipv4_address != self.last_ipv4_address,
            'ipv6_changed': self.ipv6_address != self.last_ipv6_address
        }
