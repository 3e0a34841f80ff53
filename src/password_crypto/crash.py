from functools import wraps
from typing import Callable

import click

from .errors import PasswordCryptoError
from .logger import logger


def crash_report(func: Callable) -> Callable:
    """
    Decorator for commands turning password_crypto errors into a
    user-facing error message and exit status 1.

    Parameters
    ----------
    func : 
        Command callback.

    Returns
    -------
    :
        Decorated function.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except PasswordCryptoError as e:
            logger.debug(f"{type(e).__name__} in {func.__name__}",
                         exc_info=True)
            raise click.ClickException(str(e)) from e
    return wrapper
