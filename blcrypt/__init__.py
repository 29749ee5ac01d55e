"""BitLocker sector encryption (AES-CBC, Elephant diffuser, AES-XTS), AES-CCM key unwrapping and CRC32."""

__version__ = "0.1.0"
__all__ = ["ccm", "ciphers", "crc32", "diffuser", "errors", "sector", "xts"]