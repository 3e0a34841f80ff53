import base64
import binascii

import click

from .errors import InvalidEncoding


def b64decode(text: str, what: str = 'value') -> bytes:
    """
    Strict standard-alphabet base64 decoding.

    Parameters
    ----------
    text : 
        Base64 text using ``+``, ``/`` and ``=`` padding. Surrounding
        whitespace is ignored.
    what : 
        Name of the value, used in the error message.

    Returns
    -------
    :
        Decoded bytes.

    Raises
    ------
    InvalidEncoding
        If the text is not well-formed base64 (URL-safe text included).
    """
    if isinstance(text, str):
        try:
            text = text.strip().encode('ascii')
        except UnicodeEncodeError as e:
            raise InvalidEncoding(f"Invalid base64 {what} format") from e
    try:
        return base64.b64decode(text, validate=True)
    except binascii.Error as e:
        raise InvalidEncoding(f"Invalid base64 {what} format") from e


def b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode('ascii')


class AliasedGroup(click.Group):
    """
    Command group resolving commands case-insensitively and by any
    unambiguous prefix (``gen`` for ``genkey``).
    """

    def get_command(self, ctx, cmd_name):
        cmd_name = cmd_name.lower()
        rv = click.Group.get_command(self, ctx, cmd_name)
        if rv is not None:
            return rv
        matches = [x for x in self.list_commands(ctx)
                   if x.startswith(cmd_name)]
        if not matches:
            return None
        elif len(matches) == 1:
            return click.Group.get_command(self, ctx, matches[0])
        ctx.fail(f"Too many matches: {', '.join(sorted(matches))}")

    def resolve_command(self, ctx, args):
        # always return the full command name
        _, cmd, args = super().resolve_command(ctx, args)
        return cmd.name if cmd else None, cmd, args
