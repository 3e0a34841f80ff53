"""
Generation and validation of 256-bit AES keys.

Keys only ever leave this module as standard base64 text, which is the
form the config file and the command line use.
"""

from Crypto.Random import get_random_bytes

from . import config as cfg
from .errors import InvalidKeyLength
from .logger import logger
from .utils import b64decode, b64encode

KEY_SIZE = cfg.key_size


def generate_key() -> bytes:
    """
    Generate a new 256-bit encryption key.

    Returns
    -------
    :
        32 bytes from the operating system's secure random source.
    """
    key = get_random_bytes(KEY_SIZE)
    logger.debug(f"Generated {KEY_SIZE * 8}-bit key")
    return key


def validate_key(key: bytes) -> bytes:
    """
    Check that a key is exactly 32 bytes long.

    Parameters
    ----------
    key : 
        Raw key bytes.

    Returns
    -------
    :
        The key, unchanged.

    Raises
    ------
    InvalidKeyLength
        If the key is not 32 bytes.
    """
    if len(key) != KEY_SIZE:
        raise InvalidKeyLength(len(key), KEY_SIZE)
    return bytes(key)


def decode_key(text: str) -> bytes:
    """
    Decode and validate a base64 key.

    Parameters
    ----------
    text : 
        Standard base64 text. Leading and trailing whitespace (such as
        the newline of piped input) is ignored, whitespace inside the text
        is not.

    Returns
    -------
    :
        The 32 key bytes.

    Raises
    ------
    InvalidEncoding
        If the text is not standard base64.
    InvalidKeyLength
        If it does not decode to 32 bytes.
    """
    return validate_key(b64decode(text, 'key'))


def encode_key(key: bytes) -> str:
    return b64encode(validate_key(key))
