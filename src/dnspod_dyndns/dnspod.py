#!/usr/bin/env python3
"""
DNSPod Record Reconciler

Brings DNSPod A/AAAA records in line with the current public IPs: list the
records of each domain, then create the record or modify the ones whose
value differs.

API reference: https://docs.dnspod.cn/api/

Created: 2025-10-29
Author: Manuel Ziel
License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

# Standard library imports
import logging
from typing import Optional, Dict, Any, List, Tuple

# Internal imports
from .api import HTTPClient, decode_response
from .config import DnspodConfig
from .exceptions import APIError
from .models import (
    AddressFamily,
    Domain,
    Domains,
    ExistingRecord,
    ProviderStatus,
    RecordListResult,
    UpdateStatus,
)

RECORD_LIST_ENDPOINT = "Record.List"
RECORD_CREATE_ENDPOINT = "Record.Create"
RECORD_MODIFY_ENDPOINT = "Record.Modify"

# DNSPod name of the default resolution line
DEFAULT_RECORD_LINE = "默认"

################################################################################
# DNSPOD CLASS - List / Create / Modify
################################################################################

class Dnspod:
    """Reconciles the configured domains against DNSPod, one address family at a time."""

    def __init__(self, config: DnspodConfig, domains: Domains,
                 client: Optional[HTTPClient] = None, logger: Optional[Any] = None) -> None:
        self.config = config
        self.domains = domains
        self.logger = logger if logger else logging.getLogger(__name__)
        self.client = client or HTTPClient(
            base_url=config.base_url,
            timeout=config.timeout,
            logger=self.logger,
        )
        # Record types whose listing failed during the last run
        self.aborted_families: List[str] = []

    ################################################################################
    # PUBLIC INTERFACE
    ################################################################################

    def add_update_domain_records(self) -> Domains:
        """Reconcile A records, then AAAA records. Returns the domains with their update status."""
        self.aborted_families = []
        for family in AddressFamily:
            self._add_update_domain_records(family.record_type)
        return self.domains

    def get_record_list(self, domain: Domain, record_type: str) -> RecordListResult:
        """List the records DNSPod holds for domain and type.

        A provider status other than "1" is not an error here: DNSPod reports
        an empty record set through its status code.

        Raises:
            APIError: If the request fails or the response is not a DNSPod envelope
        """
        values = self._base_values(domain, record_type)
        response = self.client.post_form(
            RECORD_LIST_ENDPOINT,
            values=values,
            timeout=self.config.list_timeout,
        )
        result = RecordListResult.from_envelope(decode_response(response))

        self.logger.debug(
            f"Record.List {domain} ({record_type}): {len(result.records)} record(s), "
            f"code {result.status.code}"
        )
        return result

    def create(self, domain: Domain, record_type: str, ip_addr: str) -> None:
        """Create a record and set the domain's update status from the response."""
        values = self._write_values(domain, record_type, ip_addr)
        status, error = self._send(RECORD_CREATE_ENDPOINT, values)

        if status.ok:
            self.logger.info(f"Created record {domain} ({record_type}), IP: {ip_addr}")
            domain.update_status = UpdateStatus.SUCCESS
        else:
            self.logger.warning(
                f"Failed to create record {domain} ({record_type}): "
                f"{self._describe_failure(status, error)}"
            )
            domain.update_status = UpdateStatus.FAILED

    def modify(self, domain: Domain, record_type: str, ip_addr: str,
               records: List[ExistingRecord]) -> None:
        """Point every differing record at ip_addr.

        With several records the domain keeps the status of the last one
        written.
        """
        for record in records:
            if record.value == ip_addr:
                self.logger.info(f"IP {ip_addr} unchanged for {domain} ({record_type})")
                continue

            values = self._write_values(domain, record_type, ip_addr)
            values["record_id"] = record.id
            status, error = self._send(RECORD_MODIFY_ENDPOINT, values)

            if status.ok:
                self.logger.info(f"Updated record {domain} ({record_type}), IP: {record.value} > {ip_addr}")
                domain.update_status = UpdateStatus.SUCCESS
            else:
                self.logger.warning(
                    f"Failed to update record {domain} ({record_type}, id {record.id}): "
                    f"{self._describe_failure(status, error)}"
                )
                domain.update_status = UpdateStatus.FAILED

    def common_request(self, endpoint: str, values: Dict[str, str],
                       timeout: Optional[float] = None) -> ProviderStatus:
        """POST a form to a DNSPod endpoint and return the status block.

        Raises:
            APIError: On transport failure or an undecodable response
        """
        kwargs = {"timeout": timeout} if timeout is not None else {}
        response = self.client.post_form(endpoint, values=values, **kwargs)
        return ProviderStatus.from_envelope(decode_response(response))

    ################################################################################
    # PRIVATE METHODS
    ################################################################################

    def _add_update_domain_records(self, record_type: str) -> None:
        ip_addr, domains = self.domains.get_new_ip_result(record_type)

        if not ip_addr:
            self.logger.debug(f"No desired IP for {record_type} records - skipping")
            return

        for domain in domains:
            try:
                result = self.get_record_list(domain, record_type)
            except APIError as e:
                # Listing failed, the provider is likely unreachable for every domain
                self.logger.error(
                    f"Cannot list {record_type} records for {domain}: {e} - "
                    f"skipping remaining {record_type} domains"
                )
                self.aborted_families.append(record_type)
                return

            if result.records:
                self.modify(domain, record_type, ip_addr, result.records)
            else:
                self.create(domain, record_type, ip_addr)

    def _send(self, endpoint: str, values: Dict[str, str]) -> Tuple[ProviderStatus, Optional[APIError]]:
        """common_request() for writes: errors come back as a value, not raised."""
        try:
            return self.common_request(endpoint, values), None
        except APIError as e:
            return ProviderStatus(), e

    def _base_values(self, domain: Domain, record_type: str) -> Dict[str, str]:
        return {
            "login_token": self.config.credential.login_token,
            "domain": domain.domain_name,
            "sub_domain": domain.get_sub_domain(),
            "record_type": record_type,
            "format": "json",
        }

    def _write_values(self, domain: Domain, record_type: str, ip_addr: str) -> Dict[str, str]:
        values = self._base_values(domain, record_type)
        values.update({
            "record_line": DEFAULT_RECORD_LINE,
            "value": ip_addr,
            "ttl": self.config.ttl,
        })
        return values

    @staticmethod
    def _describe_failure(status: ProviderStatus, error: Optional[Exception]) -> str:
        if error is not None:
            return str(error)
        return f"Code: {status.code}, Message: {status.message}"
