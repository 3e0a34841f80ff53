import os
from pathlib import Path

import click

app_name = 'password-crypto'

config_file_name = 'crypto.config.json'

config_env_var = 'PASSWORD_CRYPTO_CONFIG'

# key size shared with the C# and Node.js versions of the tool
key_size = 32

logger_name = 'password_crypto'
log_format = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def default_config_path() -> Path:
    """
    Location of the config file holding the encryption key.

    Returns
    -------
    :
        Path given by the PASSWORD_CRYPTO_CONFIG environment variable if
        set, otherwise crypto.config.json in the user's app directory.
    """
    path = os.environ.get(config_env_var)
    if path:
        return Path(path)
    return Path(click.get_app_dir(app_name)) / config_file_name
