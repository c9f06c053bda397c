#!/usr/bin/env python3
"""
DNSPOD-DYNDNS

Dynamic DNS Client for DNSPod

Created: 2025-10-29
Author: Manuel Ziel
License: MIT
"""

# Package metadata
__version__ = "1.0.0"
__author__ = "Manuel Ziel"
__email__ = "manuelziel@gmail.com"
__description__ = "Dynamic DNS Client for DNSPod"
__software_name__ = "DNSPOD-DYNDNS"

# Package imports
from .logger import LoggerManager
from .models import AddressFamily, Domain, Domains, UpdateStatus
from .config import ConfigManager, DnspodConfig
from .network import NetworkData
from .api import HTTPClient
from .dnspod import Dnspod
from .application import Application
from .daemon import DaemonManager

__all__ = [
    'LoggerManager',
    'AddressFamily',
    'Domain',
    'Domains',
    'UpdateStatus',
    'ConfigManager',
    'DnspodConfig',
    'NetworkData',
    'HTTPClient',
    'Dnspod',
    'Application',
    'DaemonManager',
]
