__version__ = '0.1.0'

from .errors import (PasswordCryptoError, CodecError, InvalidKeyLength,
                     InvalidIVLength, InvalidEncoding, MalformedMessage,
                     PaddingError, InvalidUtf8, ConfigError, KeyNotConfigured)
from .keys import generate_key, validate_key, decode_key, encode_key
from .cipher import encrypt, encrypt_with_iv, decrypt, MessageCipher
from .store import KeyStore
