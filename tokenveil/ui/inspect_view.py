"""
Rich rendering of a decoded token.

Shows each intermediate value of deobfuscation so a malformed or
mismatched token can be diagnosed at a glance.
"""

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from tokenveil.protocol.obfuscator import DecodedToken

RETRO_THEME = {
    'primary': 'magenta',
    'secondary': 'cyan',
    'muted': 'dim cyan',
    'warning': 'yellow',
}


def build_inspect_table(decoded: DecodedToken, show_keystream: bool = True) -> Table:
    """
    Build a two-column table of the values recovered from a token.

    Args:
        decoded: Result of inspect_token()
        show_keystream: Include the IV-derived keystream row

    Returns:
        Rich Table ready to print
    """
    table = Table(
        title="Token",
        box=box.ROUNDED,
        show_header=False,
        title_style=f"bold {RETRO_THEME['primary']}",
    )
    table.add_column("Field", style=RETRO_THEME['secondary'], no_wrap=True)
    table.add_column("Value", overflow="fold")

    if decoded.is_empty:
        table.add_row("status", Text("too short to decode", style=RETRO_THEME['warning']))
        return table

    table.add_row("iv", Text(decoded.iv))
    table.add_row("body", Text(decoded.body))
    if show_keystream:
        table.add_row("keystream", Text(decoded.keystream.hex(), style=RETRO_THEME['muted']))
    table.add_row("payload", f"{decoded.payload.hex()} ({len(decoded.payload)} bytes)")

    text = Text(decoded.text)
    if "\ufffd" in decoded.text:
        text.append("  (invalid UTF-8 replaced)", style=RETRO_THEME['warning'])
    table.add_row("text", text)

    return table


def render_inspect(decoded: DecodedToken, console: Optional[Console] = None) -> None:
    """Print the inspect table to the console (stdout by default)."""
    console = console or Console()
    console.print(build_inspect_table(decoded))
