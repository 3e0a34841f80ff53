"""
Config file holding the encryption key.

The file is the JSON document shared with the C# and Node.js versions of
the tool::

    {
      "encryptionKey": "<base64 key>",
      "created": "2026-01-01T12:00:00.000Z"
    }
"""

import json
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from . import config as cfg
from .errors import ConfigError, KeyNotConfigured
from .keys import decode_key
from .logger import logger


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


class KeyStore:
    """
    Reads and writes the key in the config file.

    Parameters
    ----------
    path : 
        Path to the config file. Defaults to
        :func:`password_crypto.config.default_config_path`.
    """

    def __init__(self, path=None):
        if path is None:
            path = cfg.default_config_path()
        self.path = Path(path)

    def _read(self) -> Optional[dict]:
        if not self.path.exists():
            return None
        try:
            with open(self.path, encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(
                f"Could not read config file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {self.path} does not hold a JSON object")
        return data

    def load(self) -> Optional[str]:
        """
        Load the base64 key from the config file.

        Returns
        -------
        :
            The key text, or None if no key is stored.

        Raises
        ------
        ConfigError
            If the file cannot be read or the stored key is not a string.
        """
        data = self._read()
        if not data:
            return None
        key = data.get('encryptionKey')
        if key is None:
            return None
        if not isinstance(key, str):
            raise ConfigError(
                f"Config file {self.path} has a non-string encryptionKey")
        if not key:
            return None
        logger.debug(f"Loaded key from {self.path}")
        return key

    def save(self, key_text: str) -> Path:
        """
        Validate a base64 key and write it to the config file.

        Parameters
        ----------
        key_text : 
            Standard base64 text decoding to 32 bytes.

        Returns
        -------
        :
            Path of the written config file.

        Raises
        ------
        InvalidEncoding
            If the key is not base64.
        InvalidKeyLength
            If it does not decode to 32 bytes.
        ConfigError
            If the file cannot be written.
        """
        key_text = key_text.strip()
        decode_key(key_text)

        config = {
            'encryptionKey': key_text,
            'created': _utc_timestamp(),
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # mkstemp creates the file readable by the owner only
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.",
                suffix='.tmp')
        except OSError as e:
            raise ConfigError(f"Error saving key: {e}") from e
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(config, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise ConfigError(f"Error saving key: {e}") from e
        logger.debug(f"Saved key to {self.path}")
        return self.path

    def provide_key(self) -> bytes:
        """
        Key provider for :class:`password_crypto.cipher.MessageCipher`.

        Returns
        -------
        :
            The stored key as raw bytes.

        Raises
        ------
        KeyNotConfigured
            If no key is stored.
        """
        key = self.load()
        if key is None:
            raise KeyNotConfigured(self.path)
        return decode_key(key)
