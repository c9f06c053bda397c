#!/usr/bin/env python3
"""
API Client Module

Single-attempt HTTP client and the response decoder shared by every
DNSPod call.

Created: 2025-10-27
Author: Manuel Ziel
License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

# Standard library imports
import logging
from typing import Optional, Dict, Any

# Third-party imports
import requests

# Internal imports
from .exceptions import TransportError, DecodeError

################################################################################
# HTTP CLIENT CLASS - API Communication
################################################################################

class HTTPClient:
    """HTTP client that raises TransportError instead of leaking requests exceptions."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = 30,
                 logger: Optional[Any] = None, session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.logger = logger if logger else logging.getLogger(__name__)

    def build_url(self, endpoint: Optional[str] = None, url: Optional[str] = None) -> str:
        if url:
            return url
        if self.base_url and endpoint:
            return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"
        if endpoint:
            return endpoint
        raise ValueError("Either 'url' or 'endpoint' (with base_url) must be provided")

    def request(self, method: str, endpoint: Optional[str] = None, url: Optional[str] = None,
                **kwargs: Any) -> requests.Response:
        """Make one HTTP request. Raises TransportError on connection failure or timeout."""
        final_url = self.build_url(endpoint, url)
        timeout = kwargs.pop('timeout', self.timeout)

        try:
            response = self.session.request(method.upper(), final_url, timeout=timeout, **kwargs)
        except requests.exceptions.Timeout as e:
            self.logger.warning(f"Request timeout - {method.upper()} {final_url}")
            raise TransportError(f"Request to {final_url} timed out after {timeout}s") from e
        except requests.exceptions.RequestException as e:
            self.logger.warning(f"Request failed - {method.upper()} {final_url}: {e}")
            raise TransportError(f"Request to {final_url} failed: {e}") from e

        self.logger.debug(f"{method.upper()} {final_url} - Status: {response.status_code}")
        return response

    ################################################################################
    # HTTP METHOD CONVENIENCE WRAPPERS
    ################################################################################

    def post_form(self, endpoint: Optional[str] = None, url: Optional[str] = None,
                  values: Optional[Dict[str, str]] = None, **kwargs: Any) -> requests.Response:
        """Form-encoded POST request wrapper."""
        return self.request("POST", endpoint=endpoint, url=url, data=values or {}, **kwargs)

################################################################################
# RESPONSE DECODING
################################################################################

def decode_response(response: requests.Response) -> Dict[str, Any]:
    """Decode a JSON object body.

    Raises:
        DecodeError: On non-2xx status, non-JSON body, or a body that is not an object
    """
    if not 200 <= response.status_code < 300:
        raise DecodeError(
            f"Request to {response.url} failed with HTTP {response.status_code}: {response.text[:200]}"
        )

    try:
        payload = response.json()
    except ValueError as e:
        raise DecodeError(f"Invalid JSON from {response.url}: {e}") from e

    if not isinstance(payload, dict):
        raise DecodeError(f"Unexpected response from {response.url}: {type(payload).__name__}")

    return payload
