#!/usr/bin/env python3
"""
Data Models

Domains to manage, DNSPod record/status envelopes and the per-domain
update status read by the reporting layer.

Created: 2025-10-29
Author: Manuel Ziel
License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import DecodeError, ValidationError

DEFAULT_TTL = "600"

# Second-level labels that belong to the public suffix, e.g. example.com.cn
SECOND_LEVEL_SUFFIXES = {
    "com.cn", "net.cn", "org.cn", "gov.cn", "edu.cn", "ac.cn",
    "com.hk", "com.tw", "co.uk", "org.uk", "co.jp", "eu.org",
}

################################################################################
# ENUMS
################################################################################

class UpdateStatus(Enum):
    """Outcome of the last write attempted for a domain."""

    UNSET = ""
    SUCCESS = "success"
    FAILED = "failed"


class AddressFamily(Enum):
    """IP address family and its DNS record type."""

    IPV4 = "A"
    IPV6 = "AAAA"

    @property
    def record_type(self) -> str:
        return self.value

    @classmethod
    def from_record_type(cls, record_type: str) -> "AddressFamily":
        try:
            return cls(record_type)
        except ValueError:
            raise ValidationError(f"Unsupported record type: {record_type}")

################################################################################
# DOMAIN MODELS
################################################################################

@dataclass(eq=False)
class Domain:
    """A managed name: root domain, optional subdomain and last update outcome.

    Instances are shared with the reporting layer and mutated in place by the
    reconciler. The core is sequential, so only one write touches a domain at
    a time.
    """

    domain_name: str
    sub_domain: str = ""
    update_status: UpdateStatus = UpdateStatus.UNSET

    def get_sub_domain(self) -> str:
        """Subdomain as DNSPod expects it, '@' for the zone apex."""
        return self.sub_domain or "@"

    def __str__(self) -> str:
        if self.sub_domain and self.sub_domain != "@":
            return f"{self.sub_domain}.{self.domain_name}"
        return self.domain_name

    @classmethod
    def parse(cls, value: str) -> "Domain":
        """Parse 'sub.example.com' or the explicit 'sub:example.com' form.

        Raises:
            ValidationError: If no root domain can be derived
        """
        text = value.strip().rstrip(".").lower()

        if ":" in text:
            sub_domain, _, domain_name = text.partition(":")
            if not domain_name or "." not in domain_name:
                raise ValidationError(f"Invalid domain: {value!r}")
            return cls(domain_name=domain_name, sub_domain=sub_domain)

        labels = text.split(".")
        if len(labels) < 2 or not all(labels):
            raise ValidationError(f"Invalid domain: {value!r}")

        root_size = 3 if ".".join(labels[-2:]) in SECOND_LEVEL_SUFFIXES else 2
        if len(labels) < root_size:
            raise ValidationError(f"Invalid domain: {value!r}")

        return cls(
            domain_name=".".join(labels[-root_size:]),
            sub_domain=".".join(labels[:-root_size]),
        )


class Domains:
    """Desired IPs per address family and the domains that should receive them."""

    def __init__(self, ipv4_domains: Optional[List[Domain]] = None,
                 ipv6_domains: Optional[List[Domain]] = None) -> None:
        self.ipv4_addr = ""
        self.ipv4_domains: List[Domain] = ipv4_domains or []
        self.ipv6_addr = ""
        self.ipv6_domains: List[Domain] = ipv6_domains or []

    def get_new_ip(self, network: Any) -> None:
        """Refresh desired IPs from a NetworkData instance.

        A family without configured domains keeps an empty address so the
        reconciler skips it without touching the network.
        """
        ipv4, ipv6 = network.load_current_ip_addresses()
        self.ipv4_addr = (ipv4 or "") if self.ipv4_domains else ""
        self.ipv6_addr = (ipv6 or "") if self.ipv6_domains else ""

    def get_new_ip_result(self, record_type: str) -> Tuple[str, List[Domain]]:
        if AddressFamily.from_record_type(record_type) is AddressFamily.IPV6:
            return self.ipv6_addr, self.ipv6_domains
        return self.ipv4_addr, self.ipv4_domains

    def all(self) -> List[Domain]:
        return self.ipv4_domains + self.ipv6_domains

################################################################################
# PROVIDER MODELS - DNSPod response envelopes
################################################################################

@dataclass(frozen=True)
class ProviderCredential:
    """DNSPod API token pair."""

    id: str
    secret: str = field(repr=False)

    @property
    def login_token(self) -> str:
        return f"{self.id},{self.secret}"


@dataclass(frozen=True)
class ProviderStatus:
    """Status block of every DNSPod response. Codes are opaque strings."""

    code: str = ""
    message: str = ""

    SUCCESS_CODE = "1"

    @property
    def ok(self) -> bool:
        return self.code == self.SUCCESS_CODE

    @classmethod
    def from_envelope(cls, payload: Any) -> "ProviderStatus":
        """Build from a decoded response body.

        Raises:
            DecodeError: If the body has no status object
        """
        if not isinstance(payload, dict) or not isinstance(payload.get("status"), dict):
            raise DecodeError("Response has no status object")
        status = payload["status"]
        return cls(
            code=str(status.get("code", "")),
            message=str(status.get("message", "")),
        )


@dataclass(frozen=True)
class ExistingRecord:
    """A record already stored at DNSPod."""

    id: str
    value: str
    name: str = ""
    type: str = ""
    enabled: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExistingRecord":
        enabled = data.get("enabled", "1")
        return cls(
            id=str(data.get("id", "")),
            value=str(data.get("value", "")),
            name=str(data.get("name", "")),
            type=str(data.get("type", "")),
            enabled=str(enabled) not in ("0", "false", "False"),
        )


@dataclass(frozen=True)
class RecordListResult:
    """Decoded Record.List response."""

    status: ProviderStatus
    records: List[ExistingRecord] = field(default_factory=list)

    @classmethod
    def from_envelope(cls, payload: Any) -> "RecordListResult":
        """Parse status and records. A missing record list means no records.

        Raises:
            DecodeError: If the status object is missing or records is not a list
        """
        status = ProviderStatus.from_envelope(payload)
        raw_records = payload.get("records") or []
        if not isinstance(raw_records, list):
            raise DecodeError("Response records field is not a list")
        try:
            records = [ExistingRecord.from_dict(item) for item in raw_records]
        except AttributeError:
            raise DecodeError("Response record entry is not an object")
        return cls(status=status, records=records)
