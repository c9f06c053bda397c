#!/usr/bin/env python3
"""
ANSI Color Codes - Central color definitions for terminal output
Used by: logger.py, application.py

Created: 2025-10-27
Author: Manuel Ziel
License: MIT
"""

################################################################################
# ANSI COLOR CODES
################################################################################

class Colors:
    """ANSI color codes for terminal output."""
    RED = '\033[0;31m'
    GREEN = '\033[0;32m'
    YELLOW = '\033[1;33m'
    BLUE = '\033[0;34m'
    BOLD_RED = '\033[1;31m'

    NC = '\033[0m'      # No Color / Reset
    RESET = '\033[0m'

################################################################################
# LOGGING COLOR MAP
################################################################################

LOG_COLORS = {
    'DEBUG': Colors.BLUE,
    'INFO': Colors.NC,
    'WARNING': Colors.YELLOW,
    'ERROR': Colors.RED,
    'CRITICAL': Colors.BOLD_RED,
    'SUCCESS': Colors.GREEN,
    'RESET': Colors.RESET
}

################################################################################
# LOGGING SYMBOLS
################################################################################

LOG_SYMBOLS = {
    'DEBUG': 'd',
    'INFO': 'ℹ',
    'WARNING': '!',
    'ERROR': '✗',
    'CRITICAL': '✗',
    'SUCCESS': '✓',
    'ARROW': '>'
}
