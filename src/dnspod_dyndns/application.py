#!/usr/bin/env python3
"""
Main Application Module

One DynDNS cycle: detect public IPs, reconcile DNSPod records, report the
outcome per domain.

Created: 2025-10-27
Author: Manuel Ziel
License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

# Standard library imports
import threading
from typing import Any, Dict, List, Optional

# Project imports
from .colors import LOG_SYMBOLS
from .dnspod import Dnspod
from .models import Domain, Domains, UpdateStatus
from .network import NetworkData

################################################################################
# APPLICATION CLASS - Core Business Logic
################################################################################

class Application:
    """Runs DynDNS cycles for the domains in the configuration."""

    def __init__(self, config: Any, logger: Any, network: Optional[NetworkData] = None,
                 provider: Optional[Dnspod] = None) -> None:
        """
        Initialize application.

        Args:
            config: ConfigManager instance
            logger: Logger instance from LoggerManager
            network: IP detector, built from config when omitted
            provider: DNSPod reconciler, built from config when omitted
        """
        self.config = config
        self.logger = logger
        self._lock = threading.Lock()

        if network is None:
            network = NetworkData()
            network.setup(
                ipv4_enabled=config.network_ipv4_enabled,
                ipv6_enabled=config.network_ipv6_enabled,
                ipv4_detection_url=config.network_ipv4_detection_url,
                ipv6_detection_url=config.network_ipv6_detection_url,
                timeout=config.network_timeout,
                retry_attempts=config.network_retry_attempts,
                logger=logger
            )
        self.network = network

        # Domains live as long as the application so statuses carry over between cycles
        self.domains = Domains(
            ipv4_domains=list(config.ipv4_domains),
            ipv6_domains=list(config.ipv6_domains),
        )
        self.provider = provider or Dnspod(config.dnspod_config(), self.domains, logger=logger)

        self.logger.debug(
            f"Application initialized with {len(self.domains.ipv4_domains)} IPv4 and "
            f"{len(self.domains.ipv6_domains)} IPv6 domain(s)"
        )

    def run_cycle(self) -> bool:
        """
        Execute one cycle (detect IPs, reconcile, report).

        Returns:
            bool: False if no IP was detected, a record listing failed or any domain failed to update
        """
        with self._lock:
            self.logger.debug("Starting application cycle...")

            if not self._step_load_ip_addresses():
                return False

            domains = self.provider.add_update_domain_records()
            summary = self._step_report(domains.all())

            self.network.save_current_as_last()

            aborted = self.provider.aborted_families
            if aborted:
                self.logger.warning(f"DNSPod records could not be listed for: {', '.join(aborted)}")

            self.logger.debug("Application cycle completed")
            return summary['failed'] == 0 and not aborted

    def cleanup(self) -> None:
        """Release HTTP connections held by the provider client."""
        self.provider.client.session.close()
        self.logger.debug("HTTP session closed")

    ################################################################################
    # PRIVATE METHODS - Cycle Steps
    ################################################################################

    def _step_load_ip_addresses(self) -> bool:
        """Step 1: Detect public IPs and hand them to the domain list."""
        self.domains.get_new_ip(self.network)
        ipv4, ipv6 = self.network.ipv4_address, self.network.ipv6_address

        if not ipv4 and not ipv6:
            self.logger.error("No IP addresses detected - cannot proceed")
            return False

        changes = self.network.has_ip_changed()
        for label, address, last, changed in (
            ("IPv4", ipv4, self.network.last_ipv4_address, changes['ipv4_changed']),
            ("IPv6", ipv6, self.network.last_ipv6_address, changes['ipv6_changed']),
        ):
            if not address:
                self.logger.debug(f"{label} address not available")
            elif changed and last:
                self.logger.info(f"{label} address changed: {last} {LOG_SYMBOLS['ARROW']} {address}")
            elif changed:
                self.logger.info(f"{label} address: {address}")
            else:
                self.logger.debug(f"{label} address unchanged: {address}")

        return True

    def _step_report(self, domains: List[Domain]) -> Dict[str, int]:
        """Step 2: Log the outcome of every domain and the totals."""
        summary = {'success': 0, 'failed': 0, 'unchanged': 0}

        for domain in domains:
            if domain.update_status is UpdateStatus.SUCCESS:
                summary['success'] += 1
                self.logger.success(f"{domain}: last update succeeded")
            elif domain.update_status is UpdateStatus.FAILED:
                summary['failed'] += 1
                self.logger.error(f"{domain}: last update failed")
            else:
                summary['unchanged'] += 1
                self.logger.debug(f"{domain}: no write attempted")

        self.logger.info(
            f"{len(domains)} domain(s): {summary['success']} in sync, "
            f"{summary['failed']} failed, {summary['unchanged']} not written"
        )
        return summary
