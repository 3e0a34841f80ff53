"""
Error types raised by the codec and the key store.

Every failure is reported as its own exception class so callers (and the
test suite) can tell which check failed. None of them are retried.
"""


class PasswordCryptoError(Exception):
    """Base class for all password_crypto errors."""


class CodecError(PasswordCryptoError, ValueError):
    """A key, IV or sealed message was rejected by the codec."""


class InvalidKeyLength(CodecError):

    def __init__(self, length: int, expected: int = 32):
        self.length = length
        self.expected = expected
        super().__init__(
            f"Key must be {expected * 8} bits ({expected} bytes) when "
            f"base64 decoded (got {length} bytes)")


class InvalidIVLength(CodecError):

    def __init__(self, length: int, expected: int = 16):
        self.length = length
        self.expected = expected
        super().__init__(
            f"IV must be {expected} bytes (got {length} bytes)")


class InvalidEncoding(CodecError):
    """Text is not well-formed standard base64."""


class MalformedMessage(CodecError):
    """Decoded message is too short or its ciphertext is not block aligned."""


class PaddingError(CodecError):
    """
    PKCS#7 padding did not check out after decryption. Without an
    authentication tag this means either the wrong key or corrupted data.
    """


class InvalidUtf8(CodecError):
    """Decrypted bytes are not valid UTF-8."""


class ConfigError(PasswordCryptoError):
    """The config file exists but cannot be read."""


class KeyNotConfigured(PasswordCryptoError):

    def __init__(self, path=None):
        self.path = path
        super().__init__("No key configured. Use 'setkey' to set one.")
