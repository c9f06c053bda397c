#!/usr/bin/env python3
"""
DNSPOD-DYNDNS - Dynamic DNS Client for DNSPod

Command-line entry point: single run, daemon mode and secret encryption.

Created: 2025-10-27
Author: Manuel Ziel
License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

# Standard library imports
import argparse
import getpass
import logging
import os
import sys
from typing import List, Optional

# Project imports
from . import __version__, __software_name__
from .application import Application
from .config import ConfigManager, resolve_config_path
from .daemon import DaemonManager
from .encryption import EncryptionManager
from .exceptions import ConfigError, EncryptionError
from .logger import LoggerManager

################################################################################
# ARGUMENT PARSING - Command-Line Interface
################################################################################

def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments with subcommands (encrypt)."""
    parser = argparse.ArgumentParser(
        prog='dnspod-dyndns',
        description='DNSPod DynDNS - keep DNSPod A/AAAA records pointed at this host',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                              # Update records once
  %(prog)s --daemon                     # Continuous monitoring mode
  %(prog)s --config /etc/dnspod.toml    # Use another configuration file
  %(prog)s encrypt                      # Encrypt the API secret for config.toml
        """
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--daemon', '-d', action='store_true', help='Run in daemon mode (continuous monitoring)')
    parser.add_argument('--config', '-c', type=str, default=None,
                        help='Path to config.toml (default: $DNSPOD_DYNDNS_CONFIG or ./config.toml)')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    parser_encrypt = subparsers.add_parser('encrypt', help='Encrypt the DNSPod API secret for secret_encrypted')
    parser_encrypt.add_argument('secret', nargs='?', default=None, help='Secret to encrypt (prompted when omitted)')
    parser_encrypt.add_argument('--key-file', type=str, default=None,
                                help='Encryption key file (default: .encryption_key next to config.toml)')

    return parser.parse_args(argv)

################################################################################
# CLI COMMAND HANDLERS - Subcommand Processing
################################################################################

def handle_encrypt(args: argparse.Namespace, logger: logging.Logger) -> int:
    """Print a Fernet token for [dnspod] secret_encrypted. Creates the key file if needed."""
    key_file = args.key_file
    if not key_file:
        config_dir = os.path.dirname(os.path.abspath(resolve_config_path(args.config)))
        key_file = os.path.join(config_dir, '.encryption_key')

    secret = args.secret or getpass.getpass('DNSPod API secret: ')
    if not secret:
        logger.error("No secret given")
        return 1

    try:
        token = EncryptionManager(key_file, logger=logger).encrypt(secret)
    except EncryptionError as e:
        logger.error(f"Encryption failed: {e}")
        return 1

    print(f'secret_encrypted = "{token}"')
    logger.info(f"Key file: {key_file}")
    return 0

################################################################################
# MAIN APPLICATION - Entry Point and Initialization
################################################################################

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns: Exit code (0=success)."""
    args = parse_arguments(argv)

    if args.command == 'encrypt':
        return handle_encrypt(args, LoggerManager.get_logger(__software_name__))

    try:
        config = ConfigManager(args.config)
    except (ConfigError, EncryptionError) as e:
        LoggerManager.get_logger(__software_name__).error(f"Configuration error: {e}")
        return 1

    logger = LoggerManager.get_logger(
        __software_name__,
        level=config.log_level,
        daemon_mode=args.daemon,
        use_colors=config.console_colors,
    )

    run_mode = "daemon" if args.daemon else "once"
    logger.info(f"{__software_name__} {__version__} starting... (mode: {run_mode})")
    logger.debug(f"Configuration: {config.config_path}, log level: {config.log_level}")

    app = Application(config, logger)

    if args.daemon:
        daemon = DaemonManager(app, logger, cycle_interval=config.daemon_check_interval)
        daemon.start()
        daemon.wait()
        return 0

    try:
        if app.run_cycle():
            logger.info("Single update completed successfully")
            return 0
        logger.warning("Single update completed with failures")
        return 1
    finally:
        app.cleanup()

################################################################################
# ENTRY POINT - Script Execution Handler
################################################################################

def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        LoggerManager.get_logger(__software_name__).warning("Application interrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    run()
