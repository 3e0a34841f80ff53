import logging

import pytest

from password_crypto import config as cfg
from password_crypto import logger as log

from .vectors import FIXED_KEY, ZERO_KEY


@pytest.fixture(autouse=True)
def config_path(tmp_path, monkeypatch):
    """Keep every test away from the user's real config file."""
    path = tmp_path / cfg.config_file_name
    monkeypatch.setenv(cfg.config_env_var, str(path))
    return path


@pytest.fixture
def zero_key():
    return ZERO_KEY


@pytest.fixture
def fixed_key():
    return FIXED_KEY


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the stderr handler the CLI attaches during a test."""
    yield
    if log._stderr_handler is not None:
        log.logger.removeHandler(log._stderr_handler)
        log._stderr_handler = None
    log.logger.setLevel(logging.NOTSET)
