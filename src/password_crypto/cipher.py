"""
AES-256-CBC encryption of short text values.

A sealed message is the base64 encoding of ``IV || ciphertext``. The IV is
16 fresh random bytes per message. The ciphertext is the PKCS#7 padded
UTF-8 plaintext encrypted in CBC mode. This is the same layout the C# and
Node.js versions of the tool produce, so messages can be exchanged between
them given the same key.

There is no authentication tag: a wrong key and a corrupted message both
show up as a PaddingError or an InvalidUtf8 error and cannot be told apart.
"""

from typing import Callable

from Crypto.Cipher import AES
from Crypto.Random import get_random_bytes
from Crypto.Util.Padding import pad, unpad

from .errors import (InvalidIVLength, InvalidUtf8, MalformedMessage,
                     PaddingError)
from .keys import validate_key
from .logger import logger
from .utils import b64decode, b64encode

BLOCK_SIZE = AES.block_size
IV_SIZE = AES.block_size


def _seal(key: bytes, plaintext: str, iv: bytes) -> str:
    data = plaintext.encode('utf-8')
    cipher = AES.new(key, AES.MODE_CBC, iv=iv)
    ciphertext = cipher.encrypt(pad(data, BLOCK_SIZE, style='pkcs7'))
    logger.debug(f"Encrypted {len(data)} bytes into "
                 f"{len(ciphertext)} bytes of ciphertext")
    return b64encode(iv + ciphertext)


def encrypt(key: bytes, plaintext: str) -> str:
    """
    Encrypt a text value.

    Every call draws a new IV, so encrypting the same text twice gives two
    different results.

    Parameters
    ----------
    key : 
        32-byte key.
    plaintext : 
        Text to encrypt.

    Returns
    -------
    :
        Base64 encoded IV followed by the ciphertext.
    """
    key = validate_key(key)
    iv = get_random_bytes(IV_SIZE)
    return _seal(key, plaintext, iv)


def encrypt_with_iv(key: bytes, plaintext: str, iv: bytes) -> str:
    """
    Encrypt a text value with a given IV.

    Only meant for reproducing fixed test vectors. Reusing an IV with the
    same key reveals which messages share a plaintext prefix, so use
    :func:`encrypt` for anything else.

    Parameters
    ----------
    key : 
        32-byte key.
    plaintext : 
        Text to encrypt.
    iv : 
        16-byte initialization vector.

    Returns
    -------
    :
        Base64 encoded IV followed by the ciphertext.
    """
    key = validate_key(key)
    if len(iv) != IV_SIZE:
        raise InvalidIVLength(len(iv), IV_SIZE)
    return _seal(key, plaintext, bytes(iv))


def decrypt(key: bytes, sealed: str) -> str:
    """
    Decrypt a message produced by :func:`encrypt`.

    Parameters
    ----------
    key : 
        32-byte key used for encryption.
    sealed : 
        Base64 encoded IV followed by the ciphertext. Leading and
        trailing whitespace is ignored.

    Returns
    -------
    :
        The decrypted text.

    Raises
    ------
    InvalidKeyLength
        If the key is not 32 bytes.
    InvalidEncoding
        If the message is not standard base64.
    MalformedMessage
        If the message is shorter than an IV, or the ciphertext is empty or
        not a whole number of blocks.
    PaddingError
        If the padding is invalid after decryption (wrong key or corrupted
        message).
    InvalidUtf8
        If the decrypted bytes are not UTF-8 (wrong key or corrupted
        message).
    """
    key = validate_key(key)
    data = b64decode(sealed, 'message')

    if len(data) < IV_SIZE:
        raise MalformedMessage(
            f"Invalid encrypted data: too short ({len(data)} bytes)")
    iv, ciphertext = data[:IV_SIZE], data[IV_SIZE:]
    if not ciphertext or len(ciphertext) % BLOCK_SIZE:
        raise MalformedMessage(
            f"Invalid encrypted data: ciphertext of {len(ciphertext)} bytes "
            f"is not a non-empty multiple of {BLOCK_SIZE}")

    cipher = AES.new(key, AES.MODE_CBC, iv=iv)
    padded = cipher.decrypt(ciphertext)
    try:
        unpadded = unpad(padded, BLOCK_SIZE, style='pkcs7')
    except ValueError as e:
        raise PaddingError(
            "Decryption failed: wrong key or corrupted data") from e

    try:
        plaintext = unpadded.decode('utf-8')
    except UnicodeDecodeError as e:
        raise InvalidUtf8(
            "Decryption failed: result is not valid UTF-8 "
            "(wrong key or corrupted data)") from e

    logger.debug(f"Decrypted {len(ciphertext)} bytes of ciphertext into "
                 f"{len(unpadded)} bytes")
    return plaintext


class MessageCipher:
    """
    Encrypts and decrypts with a key obtained on demand.

    Parameters
    ----------
    key_provider : 
        Callable returning the raw 32-byte key. It is called once per
        operation, so the key can come from a config file, the command
        line or memory without the cipher knowing which.
    """

    def __init__(self, key_provider: Callable[[], bytes]):
        self.key_provider = key_provider

    def encrypt(self, plaintext: str) -> str:
        return encrypt(self.key_provider(), plaintext)

    def decrypt(self, sealed: str) -> str:
        return decrypt(self.key_provider(), sealed)
