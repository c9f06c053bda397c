#!/usr/bin/env python3
"""
Encryption Manager

Encrypts the DNSPod API secret for storage in config.toml using Fernet
(AES-128 CBC + HMAC-SHA256).

Created: 2025-10-27
Author: Manuel Ziel
License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

import os
from typing import Optional, Any

from cryptography.fernet import Fernet, InvalidToken

from .exceptions import EncryptionError

################################################################################
# ENCRYPTION MANAGER CLASS
################################################################################

class EncryptionManager:
    """Loads or generates the key file (0o600) and encrypts/decrypts secrets."""

    def __init__(self, key_file_path: str, logger: Optional[Any] = None, create: bool = True) -> None:
        """Raises EncryptionError if the key cannot be loaded or created."""
        self.key_file = key_file_path
        self.logger = logger
        self._cipher: Optional[Fernet] = None

        self._setup_encryption(create)

    ################################################################################
    # PUBLIC METHODS - Encryption and Decryption
    ################################################################################

    def encrypt(self, data: str) -> str:
        """Encrypt string data. Returns the URL-safe base64 token."""
        if not data:
            raise ValueError("Cannot encrypt empty data")
        return self._cipher.encrypt(data.encode()).decode()

    def decrypt(self, encrypted_data: str) -> str:
        """Decrypt a Fernet token. Raises EncryptionError for a wrong key or a corrupt token."""
        if not encrypted_data:
            raise ValueError("Cannot decrypt empty data")

        try:
            return self._cipher.decrypt(encrypted_data.encode()).decode()
        except InvalidToken:
            if self.logger:
                self.logger.error(f"Decryption failed with key {self.key_file}")
            raise EncryptionError(f"Cannot decrypt secret with key {self.key_file} (wrong key or corrupt token)")

    ################################################################################
    # PRIVATE METHODS - Key Management
    ################################################################################

    def _setup_encryption(self, create: bool) -> None:
        try:
            if os.path.exists(self.key_file):
                with open(self.key_file, 'rb') as f:
                    key = f.read().strip()

                if os.stat(self.key_file).st_mode & 0o777 != 0o600:
                    os.chmod(self.key_file, 0o600)
                    if self.logger:
                        self.logger.warning(f"Fixed encryption key permissions: {self.key_file}")
            elif create:
                key = Fernet.generate_key()

                key_dir = os.path.dirname(self.key_file)
                if key_dir:
                    os.makedirs(key_dir, mode=0o700, exist_ok=True)

                with open(self.key_file, 'wb') as f:
                    f.write(key)
                os.chmod(self.key_file, 0o600)

                if self.logger:
                    self.logger.info(f"Generated new encryption key: {self.key_file}")
            else:
                raise EncryptionError(f"Encryption key not found: {self.key_file}")

            # Fernet keys are 32 bytes URL-safe base64 (44 chars)
            if len(key) != 44:
                raise EncryptionError(f"Invalid encryption key length: {len(key)} (expected 44)")

            self._cipher = Fernet(key)

        except OSError as e:
            raise EncryptionError(f"Failed to setup encryption: {e}") from e
