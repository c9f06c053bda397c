"""
Custom Exception Classes for DNSPOD DynDNS.

Exception Hierarchy:
    DynDNSException (Base)
    ├─ ConfigError          - Configuration issues (TOML parsing, missing keys)
    ├─ EncryptionError      - Encryption/Decryption failures
    ├─ NetworkError         - IP detection, network connectivity
    ├─ APIError             - DNSPod API communication
    │  ├─ TransportError       - Connection failure or timeout
    │  └─ DecodeError          - Non-2xx status or malformed response envelope
    └─ ValidationError      - Input validation failures
"""


class DynDNSException(Exception):
    """Base exception for all DNSPOD DynDNS errors."""
    pass


class ConfigError(DynDNSException):
    """Configuration error (TOML parsing, missing keys, invalid values)."""
    pass


class EncryptionError(DynDNSException):
    """Encryption/Decryption operation failed."""
    pass


class NetworkError(DynDNSException):
    """Network operation failed (IP detection, connectivity issues)."""
    pass


class APIError(DynDNSException):
    """DNSPod API communication error."""
    pass


class TransportError(APIError):
    """Request never produced a response (connection refused, DNS, timeout)."""
    pass


class DecodeError(APIError):
    """Response could not be read as a provider envelope."""
    pass


class ValidationError(DynDNSException):
    """Input validation failed (invalid domain, IP, record type)."""
    pass
