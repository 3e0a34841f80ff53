from pathlib import Path
from typing import Callable, Optional, Tuple

import click
import pyperclip

from . import __version__
from . import config as cfg
from . import utils
from .cipher import MessageCipher
from .crash import crash_report
from .errors import KeyNotConfigured
from .keys import decode_key, encode_key, generate_key
from .logger import logger, setup_logging
from .store import KeyStore


def _copy_to_clipboard(text: str) -> None:
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise click.ClickException(f"Could not copy to clipboard: {e}") from e
    click.secho("Copied to clipboard.", fg='green', err=True)


def _key_and_value(store: KeyStore, first: Optional[str],
                   second: Optional[str],
                   prompt: str) -> Tuple[Callable[[], bytes], str]:
    """
    Work out where the key and the value to transform come from.

    Parameters
    ----------
    store : 
        Key store holding the configured key.
    first : 
        First positional argument. The key if two arguments are given,
        otherwise the value.
    second : 
        Second positional argument (the value), if given.
    prompt : 
        Prompt used when no value is given on the command line.

    Returns
    -------
    :
        Key provider and value.
    """
    if second is not None:
        logger.debug("Using key given on the command line")
        return (lambda: decode_key(first)), second
    if first is None:
        first = click.prompt(prompt, hide_input=True)
    logger.debug(f"Using key from {store.path}")
    return store.provide_key, first


copy_option = click.option(
    '--copy', is_flag=True, default=False,
    help='Also copy the result to the clipboard.')


@click.group(cls=utils.AliasedGroup, invoke_without_command=True)
@click.option('--config', 'config_path', default=None,
              type=click.Path(dir_okay=False, path_type=Path),
              help='Config file holding the key. Defaults to '
                   f'${cfg.config_env_var} or {cfg.config_file_name} in '
                   'the user app directory.')
@click.option('-v', '--verbose', is_flag=True, default=False,
              help='Log debug messages to stderr.')
@click.version_option(version=__version__, prog_name=cfg.app_name)
@click.pass_context
def cli(ctx, config_path, verbose):
    """AES-256 password encryption utility.

    Encrypted passwords are base64 text that can be decrypted by any
    implementation of the tool given the same key.

    \b
    Examples:
      password-crypto genkey
      password-crypto setkey "abc123..."
      password-crypto encrypt "MyPassword123"
      password-crypto decrypt "xyz789..."
      password-crypto encrypt "abc123..." "MyPassword123"
      password-crypto decrypt "abc123..." "xyz789..."
    """
    setup_logging(verbose)
    ctx.obj = KeyStore(config_path)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@copy_option
@crash_report
def genkey(copy):
    """Generate a new 256-bit encryption key (base64 encoded).
    """
    key_text = encode_key(generate_key())
    click.echo(key_text)
    if copy:
        _copy_to_clipboard(key_text)


@cli.command()
@click.argument('key')
@click.pass_obj
@crash_report
def setkey(store, key):
    """Save encryption key to the config file.
    """
    path = store.save(key)
    click.echo(f"Key saved to {path}")


@cli.command()
@click.pass_obj
@crash_report
def showkey(store):
    """Display the key stored in the config file.
    """
    key = store.load()
    if key is None:
        raise KeyNotConfigured(store.path)
    click.echo(key)


@cli.command()
@click.argument('key_or_password', required=False)
@click.argument('password', required=False)
@copy_option
@click.pass_obj
@crash_report
def encrypt(store, key_or_password, password, copy):
    """Encrypt a password.

    Uses the configured key if only the password is given, and prompts
    for the password if neither is given.

    \b
    password-crypto encrypt [<key>] <password>
    """
    key_provider, plaintext = _key_and_value(
        store, key_or_password, password, 'Password')
    sealed = MessageCipher(key_provider).encrypt(plaintext)
    click.echo(sealed)
    if copy:
        _copy_to_clipboard(sealed)


@cli.command()
@click.argument('key_or_encrypted', required=False)
@click.argument('encrypted', required=False)
@copy_option
@click.pass_obj
@crash_report
def decrypt(store, key_or_encrypted, encrypted, copy):
    """Decrypt an encrypted password.

    Uses the configured key if only the encrypted password is given.

    \b
    password-crypto decrypt [<key>] <encrypted-password>
    """
    key_provider, sealed = _key_and_value(
        store, key_or_encrypted, encrypted, 'Encrypted password')
    plaintext = MessageCipher(key_provider).decrypt(sealed)
    click.echo(plaintext)
    if copy:
        _copy_to_clipboard(plaintext)


def main():
    cli(prog_name=cfg.app_name)
